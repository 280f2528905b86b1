"""
Users API - CRUD on users plus the projects a user owns and the bug reports
a user has submitted
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from typing import Any, Dict, List

from bugsnacks.core.exceptions import (
    EmptyRelationshipError,
    OperationFailedError,
    ResourceNotFoundError,
    UserNotFoundError,
)
from bugsnacks.core.logging_config import logger
from bugsnacks.core.store import DocumentStore, get_store
from bugsnacks.core.validation import ValidatedRequest, shape, validate_request
from bugsnacks.models.records import User
from bugsnacks.schemas.common import IdParams
from bugsnacks.schemas.users import UserCreate, UserUpdate
from bugsnacks.services.repository import bugs_repo, projects_repo, users_repo, utc_now, with_id

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/", response_class=PlainTextResponse)
async def hello_users():
    return "Hello Users!"


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_user(
    validated: ValidatedRequest = Depends(validate_request(body=shape(UserCreate))),
    store: DocumentStore = Depends(get_store),
):
    body: UserCreate = validated.body
    repo = users_repo(store)
    try:
        user = User(
            user_id=repo.new_id(),
            email=body.email,
            campus_id=body.campus_id,
            name=body.name,
            created_at=utc_now(),
        )
        user_id = await repo.create(user)
        logger.info(f"User created: {user_id}")
        return {"message": "User created successfully", "userId": user_id}
    except Exception as e:
        logger.log_error_with_context(e, "create_user")
        raise OperationFailedError("Error creating user", cause=e)


@router.get("/{id}", response_model=User, response_model_exclude_none=True)
async def get_user(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
):
    user_id = validated.params.id
    try:
        user = await users_repo(store).get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "get_user", user_id=user_id)
        raise OperationFailedError("Error fetching user", cause=e)


@router.patch("/{id}")
async def update_user(
    validated: ValidatedRequest = Depends(validate_request(
        body=shape(UserUpdate),
        params=shape(IdParams),
    )),
    store: DocumentStore = Depends(get_store),
):
    user_id = validated.params.id
    patch = validated.body.model_dump(by_alias=True, exclude_unset=True)
    repo = users_repo(store)
    try:
        if not await repo.exists(user_id):
            raise UserNotFoundError(user_id)
        await repo.update(user_id, patch)
        return {"message": "User updated successfully"}
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "update_user", user_id=user_id)
        raise OperationFailedError("Error updating user", cause=e)


@router.delete("/{id}")
async def delete_user(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
):
    """Delete a user; their projects and bug reports are left in place"""
    user_id = validated.params.id
    repo = users_repo(store)
    try:
        if not await repo.exists(user_id):
            raise UserNotFoundError(user_id)
        await repo.delete(user_id)
        return {"message": "User deleted successfully"}
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "delete_user", user_id=user_id)
        raise OperationFailedError("Error deleting user", cause=e)


@router.get("/{id}/projects")
async def list_user_projects(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    user_id = validated.params.id
    try:
        matches = await projects_repo(store).find_by("developerId", user_id)
        if not matches:
            raise EmptyRelationshipError("No projects found for this user", "user", user_id)
        return [with_id(key, project) for key, project in matches]
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "list_user_projects", user_id=user_id)
        raise OperationFailedError("Error fetching projects", cause=e)


@router.get("/{id}/bugReports")
async def list_user_bug_reports(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    user_id = validated.params.id
    try:
        matches = await bugs_repo(store).find_by("testerId", user_id)
        if not matches:
            raise EmptyRelationshipError("No bug reports found for this user", "user", user_id)
        return [with_id(key, report) for key, report in matches]
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "list_user_bug_reports", user_id=user_id)
        raise OperationFailedError("Error fetching bug reports", cause=e)
