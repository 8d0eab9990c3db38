"""SQLite database introspector.

SQLite has no information_schema. Tables come from ``sqlite_master`` and
each table's columns need their own ``pragma_table_info`` query, issued one
table at a time in catalog order.
"""

import logging
import re
from typing import Any, AbstractSet, List, Optional, Tuple

from pydantic import BaseModel

from .base import fetch_rows
from .identifiers import escape_if_reserved, is_multi_word
from .models import Column, Driver, Table
from .type_mappers import is_temporal_field_type, sqlite_to_field_type

logger = logging.getLogger(__name__)

# max_length used when the declared type has no "(n)" suffix
DEFAULT_MAX_LENGTH = 50

NOT_NULL = "NotNull"
NULLABLE = "Null"

_TYPE_WITH_LENGTH = re.compile(r"^(.*)\((\d+)\)$")

TABLES_SQL = """
    SELECT type, name, tbl_name, rootpage, sql
    FROM sqlite_master
    WHERE type = 'table'
      AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
"""

TABLE_INFO_SQL = """
    SELECT cid, name, type, "notnull", dflt_value, pk
    FROM pragma_table_info(?)
    ORDER BY cid
"""


class SqliteTableRow(BaseModel):
    """Row of sqlite_master."""
    # table, index, view or trigger
    type: Optional[str] = None
    name: str
    # owning table (for indexes)
    tbl_name: Optional[str] = None
    # storage page of the object's root b-tree
    rootpage: Optional[int] = None
    sql: Optional[str] = None


class SqliteColumnRow(BaseModel):
    """Row of pragma_table_info."""
    cid: Optional[int] = None
    name: str
    # declared type text, e.g. "varchar(50)" or "int"
    type: Optional[str] = None
    # 1 when declared NOT NULL
    notnull: Optional[int] = None
    dflt_value: Optional[str] = None
    # position in the primary key, 0 when not part of it
    pk: Optional[int] = None


def split_declared_type(declared: str) -> Tuple[str, Optional[int]]:
    """Split ``VARCHAR(50)`` into ``("VARCHAR", 50)``; no suffix gives ``(declared, None)``."""
    match = _TYPE_WITH_LENGTH.match(declared)
    if match is None:
        return declared, None
    return match.group(1), int(match.group(2))


def to_table(row: SqliteTableRow) -> Table:
    """Convert a sqlite_master row to a normalized Table."""
    return Table(name=row.name)


def to_column(row: SqliteColumnRow, table_name: str) -> Column:
    """Convert a pragma_table_info row of ``table_name`` to a normalized Column."""
    declared = row.type or ""
    base_type, length = split_declared_type(declared)
    field_type = sqlite_to_field_type(base_type)

    if is_temporal_field_type(field_type):
        is_nullable = NULLABLE
    elif row.notnull is None:
        is_nullable = None
    else:
        is_nullable = NOT_NULL if row.notnull == 1 else NULLABLE

    return Column(
        table_name=table_name,
        name=escape_if_reserved(row.name),
        default=row.dflt_value,
        max_length=length if length is not None else DEFAULT_MAX_LENGTH,
        is_nullable=is_nullable,
        column_type=declared,
        # no comment support in SQLite, the column name stands in
        comment=row.name,
        field_type=field_type,
        multi_word=is_multi_word(row.name),
    )


class SqliteIntrospector:
    """Introspects a SQLite database file."""

    driver = Driver.SQLITE

    def list_tables(self, connection: Any, name_filter: AbstractSet[str]) -> List[Table]:
        """List user tables in storage-page order."""
        sql = TABLES_SQL
        params: List[Any] = []
        if name_filter:
            names = sorted(name_filter)
            sql += "      AND name IN ({})\n".format(", ".join("?" for _ in names))
            params.extend(names)
        sql += "    ORDER BY rootpage"

        rows = fetch_rows(connection, sql, params, dialect=self.driver, stage="tables")
        tables = [to_table(SqliteTableRow.model_validate(row)) for row in rows]
        logger.info("Found %d SQLite tables", len(tables))
        return tables

    def list_columns(self, connection: Any, name_filter: AbstractSet[str]) -> List[Column]:
        """List columns table by table, one pragma query per table."""
        columns: List[Column] = []
        for table in self.list_tables(connection, name_filter):
            rows = fetch_rows(
                connection,
                TABLE_INFO_SQL,
                [table.name],
                dialect=self.driver,
                stage=f"table_info:{table.name}",
            )
            columns.extend(to_column(SqliteColumnRow.model_validate(row), table.name) for row in rows)
        logger.info("Found %d SQLite columns", len(columns))
        return columns
