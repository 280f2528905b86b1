"""
Custom Exceptions for BugSnacks
===============================

Every error the API can return is one of these. The handlers registered in
``bugsnacks.main`` render them as the ``{"error": ...}`` envelope with the
matching status code.

Usage:
    from bugsnacks.core.exceptions import ProjectNotFoundError, StoreError

    if data is None:
        raise ProjectNotFoundError(project_id)

    try:
        await store.set(...)
    except StoreError as e:
        logger.log_error_with_context(e, "create_project")
        raise
"""

from typing import Optional, Any, Dict, List


class BugSnacksError(Exception):
    """Base exception for all BugSnacks errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class RequestValidationFailed(BugSnacksError):
    """Inbound body, path params or query string did not match its shape"""

    status_code = 400

    def __init__(
        self,
        reason: str,
        issues: Optional[List[Dict[str, Any]]] = None,
        surface: Optional[str] = None
    ):
        super().__init__(
            "Invalid request data",
            code="VALIDATION_ERROR",
            details={"reason": reason, "surface": surface}
        )
        self.reason = reason
        self.issues = issues
        self.surface = surface


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(BugSnacksError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, message: str, resource_type: str, resource_id: str):
        super().__init__(
            message,
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    """User not found"""

    def __init__(self, user_id: str):
        super().__init__("User not found", "user", user_id)


class ProjectNotFoundError(ResourceNotFoundError):
    """Project not found"""

    def __init__(self, project_id: str):
        super().__init__("Project not found", "project", project_id)


class TestRequestNotFoundError(ResourceNotFoundError):
    """Test request not found"""

    __test__ = False  # not a pytest test class

    def __init__(self, request_id: str):
        super().__init__("Test request not found", "test_request", request_id)


class BugReportNotFoundError(ResourceNotFoundError):
    """Bug report not found"""

    def __init__(self, report_id: str):
        super().__init__("Bug report not found", "bug_report", report_id)


class CampusNotFoundError(ResourceNotFoundError):
    """Campus not found in the static reference data"""

    def __init__(self, campus_id: str):
        super().__init__("campus not found", "campus", campus_id)


class EmptyRelationshipError(ResourceNotFoundError):
    """A relationship query matched no documents"""

    def __init__(self, message: str, parent_type: str, parent_id: str):
        super().__init__(message, parent_type, parent_id)
        self.code = "EMPTY_RELATIONSHIP"


# ============================================
# Persistence Errors (500-type)
# ============================================

class StoreError(BugSnacksError):
    """The document store call itself failed (network, permission, quota)"""

    def __init__(self, operation: str, collection: str, message: str):
        super().__init__(
            f"Store {operation} on '{collection}' failed: {message}",
            code="STORE_ERROR",
            details={"operation": operation, "collection": collection}
        )
        self.operation = operation
        self.collection = collection


class ConversionError(BugSnacksError):
    """A stored document could not be turned back into a record"""

    def __init__(self, entity: str, key: str, message: str):
        super().__init__(
            f"Cannot convert {entity} document '{key}': {message}",
            code="CONVERSION_ERROR",
            details={"entity": entity, "key": key}
        )


class OperationFailedError(BugSnacksError):
    """
    Opaque 500 raised by a handler after it has logged the underlying
    store or conversion failure. Only ``message`` reaches the client.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, code="OPERATION_FAILED")
        self.cause = cause
