"""
Record model for Permalinker.

A record is whatever the host hands us: a pydantic ``Record``, a plain
mapping of field values, or any object exposing attributes. The helpers in
this module read fields uniformly from all three shapes.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """
    A content record from the host data store.

    Only ``id`` is declared; title, parent reference and any other host
    fields are kept as extra attributes so the title and parent field names
    stay configurable.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = Field(
        default=None,
        description="Host-defined identifier, None for a record that has not been saved yet"
    )

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of a declared or extra field."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)


def read_field(record: Any, name: str) -> Any:
    """
    Read a field from a record of any supported shape.

    Args:
        record: A ``Record``, a mapping or an attribute-bearing object
        name: Field name to read

    Returns:
        The field value, or None when the record has no such field
    """
    if isinstance(record, Record):
        return record.get(name)
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def record_id(record: Any) -> Any:
    """Return the identifier of a record."""
    return read_field(record, "id")


def parent_reference(record: Any, parent_field: str) -> Any:
    """
    Return the id of the record's parent, or None for a root record.

    Relational admins return either the bare foreign key or, when the
    relation is expanded, a nested object carrying its own ``id``. Both
    shapes are accepted.
    """
    value = read_field(record, parent_field)
    if value is None or value == "":
        return None
    if isinstance(value, (Record, Mapping)) or hasattr(value, "id"):
        return record_id(value)
    return value
