"""
Record store for Permalinker.

This module keeps a self-referencing table of content records in DuckDB and
provides a parent resolver backed by it.
"""

import duckdb
import logging
from datetime import datetime
from typing import Any, List, Optional

from ..errors import ResolutionFailure
from ..models import DEFAULT_PARENT_FIELD, DEFAULT_TITLE_FIELD, Record, parent_reference, read_field, record_id
from ..resolvers import ParentResolver


class RecordStore:
    """
    Manages the DuckDB table of records and their permalinks.
    """

    def __init__(
        self,
        db_path: str = "permalinker.db",
        title_field: str = DEFAULT_TITLE_FIELD,
        parent_field: str = DEFAULT_PARENT_FIELD
    ):
        """
        Initialize the record store.

        Args:
            db_path: Path to the DuckDB database file (":memory:" for a throwaway store)
            title_field: Attribute name the title column is exposed as on records
            parent_field: Attribute name the parent column is exposed as on records
        """
        self.db_path = db_path
        self.title_field = title_field
        self.parent_field = parent_field
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)
        logging.info(f"Connected to record store: {self.db_path}")

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create the records table if it doesn't exist.
        """
        connection = self._require_connection()
        connection.execute("""
            CREATE TABLE IF NOT EXISTS records (
                record_id VARCHAR PRIMARY KEY,
                title VARCHAR,
                parent_id VARCHAR,
                permalink VARCHAR,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def _to_record(self, row) -> Record:
        return Record(**{
            "id": row[0],
            self.title_field: row[1],
            self.parent_field: row[2],
            "permalink": row[3],
        })

    @staticmethod
    def _key(value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def add_record(self, record: Any) -> bool:
        """
        Add a new record.

        Args:
            record: The record to add (Record, mapping or attribute object)

        Returns:
            True if the record was added, False if its id already existed
        """
        connection = self._require_connection()
        if record_id(record) is None:
            raise ValueError("Cannot store a record without an id")
        now = datetime.now()

        try:
            connection.execute("""
                INSERT INTO records (record_id, title, parent_id, permalink, created_at, updated_at)
                VALUES (?, ?, ?, NULL, ?, ?)
            """, [
                self._key(record_id(record)),
                self._title_of(record),
                self._key(parent_reference(record, self.parent_field)),
                now,
                now
            ])
            return True
        except duckdb.IntegrityError:
            # Record already exists
            return False

    def upsert_record(self, record: Any) -> None:
        """
        Insert a record, or update title and parent if it already exists.

        Args:
            record: The record to store
        """
        if self.add_record(record):
            return

        connection = self._require_connection()
        connection.execute("""
            UPDATE records SET title = ?, parent_id = ?, updated_at = ?
            WHERE record_id = ?
        """, [
            self._title_of(record),
            self._key(parent_reference(record, self.parent_field)),
            datetime.now(),
            self._key(record_id(record))
        ])

    def _title_of(self, record: Any) -> Optional[str]:
        title = read_field(record, self.title_field)
        return None if title is None else str(title)

    def get_record(self, rid: Any) -> Optional[Record]:
        """
        Retrieve a record by id.

        Args:
            rid: The id of the record

        Returns:
            The record if found, None otherwise
        """
        connection = self._require_connection()
        row = connection.execute("""
            SELECT record_id, title, parent_id, permalink
            FROM records
            WHERE record_id = ?
        """, [self._key(rid)]).fetchone()

        if row:
            return self._to_record(row)
        return None

    def list_records(self) -> List[Record]:
        """
        List all records ordered by id.

        Returns:
            List of records
        """
        connection = self._require_connection()
        rows = connection.execute("""
            SELECT record_id, title, parent_id, permalink
            FROM records
            ORDER BY record_id
        """).fetchall()

        return [self._to_record(row) for row in rows]

    def update_permalink(self, rid: Any, permalink: str) -> bool:
        """
        Store the permalink computed for a record.

        Args:
            rid: The id of the record
            permalink: The permalink to store

        Returns:
            True if a record was updated, False if no record has that id
        """
        connection = self._require_connection()
        if self.get_record(rid) is None:
            return False

        connection.execute("""
            UPDATE records SET permalink = ?, updated_at = ?
            WHERE record_id = ?
        """, [permalink, datetime.now(), self._key(rid)])
        return True

    def resolver(self) -> "StoreParentResolver":
        """Return a parent resolver reading from this store."""
        return StoreParentResolver(self)


class StoreParentResolver(ParentResolver):
    """
    Resolve parents by looking up the parent id in a RecordStore.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def resolve_parent(self, record: Any) -> Optional[Record]:
        parent_id = parent_reference(record, self.store.parent_field)
        if parent_id is None:
            return None

        try:
            parent = self.store.get_record(parent_id)
        except duckdb.Error as e:
            raise ResolutionFailure(
                f"Failed to load parent {parent_id!r} of record {record_id(record)!r}: {e}",
                record_id=record_id(record),
                parent_id=parent_id
            ) from e

        if parent is None:
            raise ResolutionFailure(
                f"Parent {parent_id!r} of record {record_id(record)!r} not found",
                record_id=record_id(record),
                parent_id=parent_id
            )

        logging.debug(f"Resolved parent {parent_id!r} of record {record_id(record)!r} from store")
        return parent
