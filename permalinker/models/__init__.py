"""Data models for Permalinker."""

from .record import Record, read_field, record_id, parent_reference
from .options import (
    PathOptions,
    DEFAULT_TITLE_FIELD,
    DEFAULT_PARENT_FIELD,
    DEFAULT_URL_PREFIX,
    DEFAULT_PLACEHOLDER,
)

__all__ = [
    "Record",
    "read_field",
    "record_id",
    "parent_reference",
    "PathOptions",
    "DEFAULT_TITLE_FIELD",
    "DEFAULT_PARENT_FIELD",
    "DEFAULT_URL_PREFIX",
    "DEFAULT_PLACEHOLDER",
]
