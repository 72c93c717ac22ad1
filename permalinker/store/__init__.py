"""DuckDB-backed record storage."""

from .manager import RecordStore, StoreParentResolver

__all__ = ["RecordStore", "StoreParentResolver"]
