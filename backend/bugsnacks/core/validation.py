"""
Request-boundary shape checks.

A *check* takes one raw inbound surface (JSON body, path params or query
string) and returns a tagged result: ``Valid(value)`` or ``Invalid(reason, issues)``.
``validate_request`` turns up to three checks into a FastAPI dependency that
runs them in the fixed order body -> params -> query, stops at the first
``Invalid`` and raises ``RequestValidationFailed`` (rendered as HTTP 400).
When every check passes, the handler receives the untouched ``Request``
together with the parsed values.

Usage:
    @router.patch("/{id}")
    async def update_project(
        validated: ValidatedRequest = Depends(validate_request(
            body=shape(ProjectUpdate),
            params=shape(IdParams),
        )),
    ):
        project_id = validated.params.id
        patch = validated.body

Checks are plain synchronous functions with no per-request state, so one
instance is shared by every request.
"""
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Type, Union

from fastapi import Request
from pydantic import BaseModel, ValidationError

from bugsnacks.core.exceptions import RequestValidationFailed
from bugsnacks.core.logging_config import logger


@dataclass(frozen=True)
class Issue:
    """Where in the input a check failed, and why"""
    path: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "reason": self.reason}


@dataclass(frozen=True)
class Valid:
    value: Any


@dataclass(frozen=True)
class Invalid:
    reason: str
    issues: Optional[List[Issue]] = None


CheckResult = Union[Valid, Invalid]
Check = Callable[[Any], CheckResult]


def issue_path(loc: Sequence[Union[str, int]]) -> str:
    """('reward', 0, 'type') -> '$input.reward[0].type'"""
    path = "$input"
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def invalid_from_error(error: ValidationError) -> Invalid:
    """Turn a pydantic ValidationError into a structured Invalid"""
    issues = [Issue(path=issue_path(e["loc"]), reason=e["msg"]) for e in error.errors()]
    first = issues[0] if issues else None
    reason = f"{first.path}: {first.reason}" if first else str(error)
    return Invalid(reason=reason, issues=issues)


def shape(model: Type[BaseModel]) -> Check:
    """Build a check that accepts input conforming to ``model``"""

    def check(raw: Any) -> CheckResult:
        try:
            return Valid(model.model_validate(raw))
        except ValidationError as e:
            return invalid_from_error(e)

    check.__name__ = f"shape_{model.__name__}"
    check.__qualname__ = check.__name__
    return check


@dataclass
class ValidatedRequest:
    """The original request plus the values produced by each configured check"""
    request: Request
    body: Any = None
    params: Any = None
    query: Any = None


async def read_json_body(request: Request) -> CheckResult:
    """Raw JSON body; an empty body reads as ``{}``"""
    raw = await request.body()
    if not raw.strip():
        return Valid({})
    try:
        return Valid(json.loads(raw))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Invalid(reason=f"Malformed JSON body: {e}")


def query_mapping(request: Request) -> Dict[str, Any]:
    """Query string as a mapping; a repeated key maps to the list of its values"""
    params = request.query_params
    mapping: Dict[str, Any] = {}
    for key in params.keys():
        values = params.getlist(key)
        mapping[key] = values if len(values) > 1 else values[0]
    return mapping


def _run_check(check: Check, raw: Any) -> CheckResult:
    try:
        return check(raw)
    except ValidationError as e:
        # Checks built directly on model_validate raise instead of returning
        return invalid_from_error(e)


def _unwrap(result: CheckResult, surface: str) -> Any:
    if isinstance(result, Valid):
        return result.value
    logger.log_validation_failure(result.reason, surface=surface)
    issues = [issue.to_dict() for issue in result.issues] if result.issues is not None else None
    raise RequestValidationFailed(result.reason, issues=issues, surface=surface)


def validate_request(
    *,
    body: Optional[Check] = None,
    params: Optional[Check] = None,
    query: Optional[Check] = None,
) -> Callable[[Request], Awaitable[ValidatedRequest]]:
    """FastAPI dependency factory running the configured checks"""

    async def dependency(request: Request) -> ValidatedRequest:
        validated = ValidatedRequest(request=request)
        if body is not None:
            raw_body = await read_json_body(request)
            if isinstance(raw_body, Valid):
                raw_body = _run_check(body, raw_body.value)
            validated.body = _unwrap(raw_body, "body")
        if params is not None:
            validated.params = _unwrap(_run_check(params, dict(request.path_params)), "params")
        if query is not None:
            validated.query = _unwrap(_run_check(query, query_mapping(request)), "query")
        return validated

    return dependency
