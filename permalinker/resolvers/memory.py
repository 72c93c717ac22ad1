"""
In-memory parent resolver.

Useful for tests and for hosts that already hold the whole hierarchy.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Union

from ..errors import ResolutionFailure
from ..models import DEFAULT_PARENT_FIELD, parent_reference, record_id
from .base import ParentResolver


class MappingResolver(ParentResolver):
    """
    Resolve parents by id from a collection of records held in memory.
    """

    def __init__(self, records: Union[Mapping, Iterable[Any]], parent_field: str = DEFAULT_PARENT_FIELD):
        """
        Initialize the resolver.

        Args:
            records: Either a mapping of id to record, or an iterable of records
            parent_field: Record attribute holding the parent reference
        """
        self.parent_field = parent_field or DEFAULT_PARENT_FIELD
        # Keys are text, so "1" and 1 name the same record.
        if isinstance(records, Mapping):
            self._records: Dict[str, Any] = {str(key): record for key, record in records.items()}
        else:
            self._records = {str(record_id(record)): record for record in records}

    @classmethod
    def from_options(cls, records: Union[Mapping, Iterable[Any]], options: Any) -> "MappingResolver":
        """Create a resolver using the parent field named in PathOptions."""
        return cls(records, parent_field=options.parent_field)

    def add(self, record: Any) -> None:
        """Add or replace a record."""
        self._records[str(record_id(record))] = record

    def resolve_parent(self, record: Any) -> Optional[Any]:
        parent_id = parent_reference(record, self.parent_field)
        if parent_id is None:
            return None

        parent = self._records.get(str(parent_id))
        if parent is None:
            raise ResolutionFailure(
                f"Parent {parent_id!r} of record {record_id(record)!r} not found",
                record_id=record_id(record),
                parent_id=parent_id
            )

        logging.debug(f"Resolved parent {parent_id!r} of record {record_id(record)!r}")
        return parent

