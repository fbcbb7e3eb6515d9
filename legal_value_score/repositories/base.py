"""
Base Repository - Legal Value Score
legal_value_score/repositories/base.py

Shared Snowflake plumbing for the ASSESSMENTS, EMAIL_SEQUENCES and
ANALYTICS_EVENTS tables. Subclasses set TABLE_NAME (and ENTITY_NAME for
not-found errors) and work in plain lowercase dicts; column names are
upper-cased on the way in and lower-cased on the way out.
"""

import json
import re
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from legal_value_score.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryException,
)
from legal_value_score.services.snowflake import get_snowflake_connection

_COLUMN_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")


class BaseRepository:
    """Snowflake access with column whitelisting and error translation."""

    TABLE_NAME = ""
    ENTITY_NAME = "Record"

    @contextmanager
    def open_cursor(self) -> Iterator[DictCursor]:
        """One connection and one DictCursor per statement; both closed on exit."""
        try:
            conn = get_snowflake_connection()
        except (InterfaceError, DatabaseError) as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}") from e
        try:
            cursor = conn.cursor(DictCursor)
            try:
                yield cursor
            finally:
                cursor.close()
        finally:
            conn.close()

    def execute_query(
        self,
        sql: str,
        params: Iterable[Any] = (),
        fetch: Optional[str] = None,
        commit: bool = False,
    ) -> Any:
        """
        Run one statement.

        fetch="one" returns a row (or None), fetch="all" a list of rows,
        otherwise the affected row count. Snowflake errors surface as
        RepositoryException subclasses.
        """
        with self.open_cursor() as cursor:
            try:
                cursor.execute(sql, tuple(params))
                if commit:
                    cursor.connection.commit()
            except ProgrammingError as e:
                text = str(e).upper()
                if "UNIQUE" in text or "DUPLICATE" in text:
                    raise DuplicateEntityException(str(e))
                raise RepositoryException(f"Query error: {e}")
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}")

            if fetch == "one":
                return cursor.fetchone()
            if fetch == "all":
                return cursor.fetchall()
            return cursor.rowcount

    # ------------------------------------------------------------------
    # Statement builders
    # ------------------------------------------------------------------

    def check_column(self, column: str) -> str:
        """Upper-case a snake_case column name; anything else is rejected."""
        if not _COLUMN_NAME.match(column):
            raise RepositoryException(f"Invalid column name: {column!r}")
        return column.upper()

    def build_insert_query(self, table_name: str, data: Dict[str, Any]) -> Tuple[str, List[Any]]:
        columns = ", ".join(self.check_column(column) for column in data)
        placeholders = ", ".join(["%s"] * len(data))
        return f"INSERT INTO {table_name} ({columns}) VALUES ({placeholders})", list(data.values())

    def build_update_query(
        self,
        table_name: str,
        data: Dict[str, Any],
        where_column: str,
        where_value: Any,
    ) -> Tuple[str, List[Any]]:
        assignments = ", ".join(f"{self.check_column(column)} = %s" for column in data)
        sql = f"UPDATE {table_name} SET {assignments} WHERE {where_column} = %s"
        return sql, [*data.values(), where_value]

    # ------------------------------------------------------------------
    # Table helpers
    # ------------------------------------------------------------------

    def insert(self, row: Dict[str, Any]) -> None:
        sql, params = self.build_insert_query(self.TABLE_NAME, row)
        self.execute_query(sql, params, commit=True)

    def fetch_by_id(self, row_id: str) -> Optional[Dict[str, Any]]:
        sql = f"SELECT * FROM {self.TABLE_NAME} WHERE ID = %s"
        return self.execute_query(sql, (str(row_id),), fetch="one")

    def update_by_id(self, row_id: str, data: Dict[str, Any]) -> None:
        """Raises EntityNotFoundException when no row has this ID."""
        sql, params = self.build_update_query(self.TABLE_NAME, data, "ID", str(row_id))
        if not self.execute_query(sql, params, commit=True):
            raise EntityNotFoundException(self.ENTITY_NAME, str(row_id))

    # ------------------------------------------------------------------
    # Value conversion
    # ------------------------------------------------------------------

    @staticmethod
    def utc_now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def to_json(value: Any) -> str:
        return json.dumps(value, default=str)

    def normalize_timestamp(self, dt: Optional[datetime]) -> Optional[datetime]:
        """Snowflake TIMESTAMP_NTZ comes back naive; treat it as UTC."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def to_record(
        self,
        row: Dict[str, Any],
        json_columns: Iterable[str] = (),
    ) -> Dict[str, Any]:
        """Lower-case the keys, decode JSON text columns and make timestamps UTC-aware."""
        record = {key.lower(): value for key, value in row.items()}
        for column in json_columns:
            raw = record.get(column)
            if isinstance(raw, str):
                try:
                    record[column] = json.loads(raw)
                except json.JSONDecodeError:
                    record[column] = {}
        for column, value in record.items():
            if isinstance(value, datetime):
                record[column] = self.normalize_timestamp(value)
        return record
