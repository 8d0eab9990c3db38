"""PostgreSQL database introspector."""

import logging
from typing import Any, AbstractSet, List, Optional

from pydantic import BaseModel

from .base import fetch_rows
from .identifiers import escape_if_reserved, is_multi_word
from .models import Column, Driver, Table
from .type_mappers import is_temporal_field_type, postgres_to_field_type

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "public"

# Value forced into is_nullable for temporal columns
NULLABLE = "Yes"

TABLES_SQL = """
    SELECT
        t.table_catalog,
        t.table_schema,
        t.table_name,
        obj_description(
            (quote_ident(t.table_schema) || '.' || quote_ident(t.table_name))::regclass,
            'pg_class'
        ) AS table_comment
    FROM information_schema.tables t
    WHERE t.table_catalog = %s
      AND t.table_schema = %s
      AND t.table_type = 'BASE TABLE'
"""

COLUMNS_SQL = """
    SELECT
        c.table_catalog,
        c.table_schema,
        c.table_name,
        c.column_name,
        c.ordinal_position,
        c.column_default,
        c.is_nullable,
        c.data_type,
        c.udt_name,
        c.character_maximum_length,
        c.numeric_precision,
        c.numeric_scale,
        c.datetime_precision,
        col_description(
            (quote_ident(c.table_schema) || '.' || quote_ident(c.table_name))::regclass,
            c.ordinal_position
        ) AS column_comment
    FROM information_schema.columns c
    WHERE c.table_catalog = %s
      AND c.table_schema = %s
"""


class PostgresTableRow(BaseModel):
    """Row of information_schema.tables (catalog/schema/name plus comment)."""
    table_catalog: Optional[str] = None
    table_schema: Optional[str] = None
    table_name: str
    table_comment: Optional[str] = None


class PostgresColumnRow(BaseModel):
    """Row of information_schema.columns."""
    table_catalog: Optional[str] = None
    table_schema: Optional[str] = None
    table_name: Optional[str] = None
    column_name: str
    ordinal_position: Optional[int] = None
    column_default: Optional[str] = None
    # 'YES' / 'NO'
    is_nullable: Optional[str] = None
    data_type: Optional[str] = None
    # internal type name: int4, bool, timestamptz, ...
    udt_name: Optional[str] = None
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    numeric_scale: Optional[int] = None
    datetime_precision: Optional[int] = None
    column_comment: Optional[str] = None


def to_table(row: PostgresTableRow) -> Table:
    """Convert an information_schema.tables row to a normalized Table."""
    return Table(
        name=row.table_name,
        schema=row.table_schema,
        comment=row.table_comment,
    )


def to_column(row: PostgresColumnRow) -> Column:
    """Convert an information_schema.columns row to a normalized Column.

    The ``udt_name`` is used for the mapping because it carries the short
    spellings (``INT4``, ``TIMESTAMPTZ``) the type table is keyed on.
    """
    column_type = row.udt_name or row.data_type or ""
    field_type = postgres_to_field_type(column_type)
    is_nullable = NULLABLE if is_temporal_field_type(field_type) else row.is_nullable
    return Column(
        schema=row.table_schema,
        table_name=row.table_name,
        name=escape_if_reserved(row.column_name),
        default=row.column_default,
        max_length=row.character_maximum_length,
        is_nullable=is_nullable,
        column_type=column_type,
        comment=row.column_comment,
        field_type=field_type,
        multi_word=is_multi_word(row.column_name),
    )


class PostgresIntrospector:
    """Introspects the ``public`` schema of one PostgreSQL database.

    PostgreSQL cannot switch databases on an open connection, so the catalog
    name is given explicitly and must match the database connected to.
    """

    driver = Driver.POSTGRES

    def __init__(self, database: str, schema: str = DEFAULT_SCHEMA):
        self.database = database
        self.schema = schema

    def list_tables(self, connection: Any, name_filter: AbstractSet[str]) -> List[Table]:
        """List base tables in creation (oid) order."""
        sql = TABLES_SQL
        params: List[Any] = [self.database, self.schema]
        if name_filter:
            sql += "      AND t.table_name = ANY(%s)\n"
            params.append(sorted(name_filter))
        sql += "    ORDER BY (quote_ident(t.table_schema) || '.' || quote_ident(t.table_name))::regclass::oid"

        rows = fetch_rows(connection, sql, params, dialect=self.driver, stage="tables")
        tables = [to_table(PostgresTableRow.model_validate(row)) for row in rows]
        logger.info("Found %d PostgreSQL tables in %s.%s", len(tables), self.database, self.schema)
        return tables

    def list_columns(self, connection: Any, name_filter: AbstractSet[str]) -> List[Column]:
        """List columns grouped by table, in ordinal order."""
        sql = COLUMNS_SQL
        params: List[Any] = [self.database, self.schema]
        if name_filter:
            sql += "      AND c.table_name = ANY(%s)\n"
            params.append(sorted(name_filter))
        sql += "    ORDER BY c.table_name, c.ordinal_position"

        rows = fetch_rows(connection, sql, params, dialect=self.driver, stage="columns")
        columns = [to_column(PostgresColumnRow.model_validate(row)) for row in rows]
        logger.info("Found %d PostgreSQL columns", len(columns))
        return columns
