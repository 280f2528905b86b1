"""
Bidirectional mapping between domain records and stored documents.

A stored document is a flat field map keyed by the record's identifier, so
the identifier field is stripped on write and injected back on read. Top-level
``datetime`` values travel as the store's timestamp type
(``DatetimeWithNanoseconds``, always UTC). Unset (``None``) fields are dropped
on write. Nested objects and arrays are stored as plain data.

Usage:
    from bugsnacks.core.converter import converter_for
    from bugsnacks.models import Project

    converter = converter_for(Project)
    data = converter.to_store(project)            # no "projectId" key
    project = converter.from_store(data, key)     # projectId == key
"""
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Generic, Mapping, Type, TypeVar

from google.api_core.datetime_helpers import DatetimeWithNanoseconds
from pydantic import ValidationError

from bugsnacks.core.exceptions import ConversionError
from bugsnacks.models.records import (
    BugReport,
    Campus,
    Project,
    Record,
    TestRequest,
    User,
)

RecordT = TypeVar("RecordT", bound=Record)


def to_timestamp(value: datetime) -> DatetimeWithNanoseconds:
    """Convert a native datetime to the store timestamp type (naive means UTC)"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return DatetimeWithNanoseconds(
        value.year, value.month, value.day,
        value.hour, value.minute, value.second, value.microsecond,
        tzinfo=timezone.utc,
    )


def from_timestamp(value: datetime) -> datetime:
    """Convert a store timestamp back to a plain timezone-aware UTC datetime"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    # Rebuild from components; float timestamps lose microseconds near year 9999
    return datetime(
        value.year, value.month, value.day,
        value.hour, value.minute, value.second, value.microsecond,
        tzinfo=timezone.utc,
    )


class DocumentConverter(Generic[RecordT]):
    """Converter for one entity type, configured with its identifier field"""

    def __init__(self, model: Type[RecordT], id_field: str):
        self.model = model
        self.id_field = id_field

    def __repr__(self) -> str:
        return f"DocumentConverter({self.model.__name__}, id_field={self.id_field!r})"

    def to_store(self, record: RecordT) -> Dict[str, Any]:
        """Record -> field map without the identifier"""
        fields = record.model_dump(by_alias=True, exclude_none=True)
        return self.patch_to_store(
            {key: value for key, value in fields.items() if key != self.id_field}
        )

    def patch_to_store(self, patch: Mapping[str, Any]) -> Dict[str, Any]:
        """Apply the same value conversion to a partial-field patch"""
        data: Dict[str, Any] = {}
        for key, value in patch.items():
            if value is None:
                continue
            data[key] = to_timestamp(value) if isinstance(value, datetime) else value
        return data

    def from_store(self, data: Mapping[str, Any], key: str) -> RecordT:
        """Field map + document key -> record"""
        fields: Dict[str, Any] = {self.id_field: key}
        for name, value in data.items():
            fields[name] = from_timestamp(value) if isinstance(value, datetime) else value
        try:
            return self.model.model_validate(fields)
        except ValidationError as e:
            raise ConversionError(self.model.__name__, key, str(e)) from e


# Static, process-wide: entity type -> converter. Read-only after import.
CONVERTERS: Mapping[Type[Record], DocumentConverter] = MappingProxyType({
    User: DocumentConverter(User, "userId"),
    Campus: DocumentConverter(Campus, "campusId"),
    Project: DocumentConverter(Project, "projectId"),
    TestRequest: DocumentConverter(TestRequest, "requestId"),
    BugReport: DocumentConverter(BugReport, "reportId"),
})


def converter_for(model: Type[RecordT]) -> DocumentConverter[RecordT]:
    """Look up the converter registered for a record type"""
    try:
        return CONVERTERS[model]
    except KeyError:
        raise KeyError(f"No converter registered for {model.__name__}") from None
