"""
Shared request shapes - path params and base classes for bodies
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RequestShape(BaseModel):
    """Base for inbound shapes: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class PatchShape(RequestShape):
    """
    Partial update; unknown or immutable fields are rejected. Fields may be
    omitted but never sent as null.
    """
    model_config = ConfigDict(extra="forbid")

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


class IdParams(RequestShape):
    """Path params of /{id} routes"""
    id: str = Field(..., min_length=1)


class CampusParams(RequestShape):
    """Path params of /{campusId} routes"""
    campus_id: str = Field(..., min_length=1)
