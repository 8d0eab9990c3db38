"""MySQL database introspector."""

import logging
from datetime import datetime
from typing import Any, AbstractSet, List, Optional

from pydantic import BaseModel, field_validator

from .base import fetch_rows, matches_filter
from .identifiers import escape_if_reserved, is_multi_word
from .models import Column, Driver, Table
from .type_mappers import is_temporal_field_type, mysql_to_field_type

logger = logging.getLogger(__name__)

# Value forced into is_nullable for temporal columns
NULLABLE = "Yes"

TABLES_SQL = """
    SELECT
        TABLE_CATALOG AS table_catalog,
        TABLE_SCHEMA AS table_schema,
        TABLE_NAME AS table_name,
        TABLE_TYPE AS table_type,
        `ENGINE` AS engine,
        VERSION AS version,
        ROW_FORMAT AS row_format,
        TABLE_ROWS AS table_rows,
        AVG_ROW_LENGTH AS avg_row_length,
        DATA_LENGTH AS data_length,
        MAX_DATA_LENGTH AS max_data_length,
        INDEX_LENGTH AS index_length,
        DATA_FREE AS data_free,
        AUTO_INCREMENT AS auto_increment,
        CREATE_TIME AS create_time,
        UPDATE_TIME AS update_time,
        CHECK_TIME AS check_time,
        TABLE_COLLATION AS table_collation,
        `CHECKSUM` AS checksum,
        CREATE_OPTIONS AS create_options,
        TABLE_COMMENT AS table_comment
    FROM
        information_schema.`TABLES`
    WHERE
        TABLE_SCHEMA = (SELECT DATABASE())
"""

COLUMNS_SQL = """
    SELECT
        TABLE_CATALOG AS table_catalog,
        TABLE_SCHEMA AS table_schema,
        TABLE_NAME AS table_name,
        COLUMN_NAME AS column_name,
        ORDINAL_POSITION AS ordinal_position,
        COLUMN_DEFAULT AS column_default,
        IS_NULLABLE AS is_nullable,
        DATA_TYPE AS data_type,
        CHARACTER_MAXIMUM_LENGTH AS character_maximum_length,
        CHARACTER_OCTET_LENGTH AS character_octet_length,
        NUMERIC_PRECISION AS numeric_precision,
        NUMERIC_SCALE AS numeric_scale,
        DATETIME_PRECISION AS datetime_precision,
        CHARACTER_SET_NAME AS character_set_name,
        COLLATION_NAME AS collation_name,
        COLUMN_TYPE AS column_type,
        COLUMN_KEY AS column_key,
        EXTRA AS extra,
        `PRIVILEGES` AS privileges,
        COLUMN_COMMENT AS column_comment,
        GENERATION_EXPRESSION AS generation_expression
    FROM
        information_schema.COLUMNS
    WHERE
        TABLE_SCHEMA = (SELECT DATABASE())
"""

FILTER_SQL = "\n        AND FIND_IN_SET(TABLE_NAME, %s)"


class _CatalogRow(BaseModel):
    """information_schema row; MySQL 8 returns some text columns as bytes."""

    class Config:
        extra = "ignore"

    @field_validator("*", mode="before")
    @classmethod
    def _decode_bytes(cls, value: Any) -> Any:
        if isinstance(value, (bytes, bytearray)):
            return value.decode("utf-8")
        return value


class MySQLTableRow(_CatalogRow):
    """Row of information_schema.TABLES."""
    table_catalog: Optional[str] = None
    table_schema: Optional[str] = None
    table_name: str
    # enum('BASE TABLE','VIEW','SYSTEM VIEW')
    table_type: Optional[str] = None
    engine: Optional[str] = None
    version: Optional[int] = None
    # enum('Fixed','Dynamic','Compressed','Redundant','Compact','Paged')
    row_format: Optional[str] = None
    table_rows: Optional[int] = None
    avg_row_length: Optional[int] = None
    data_length: Optional[int] = None
    max_data_length: Optional[int] = None
    index_length: Optional[int] = None
    data_free: Optional[int] = None
    auto_increment: Optional[int] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    check_time: Optional[datetime] = None
    table_collation: Optional[str] = None
    checksum: Optional[int] = None
    create_options: Optional[str] = None
    table_comment: Optional[str] = None


class MySQLColumnRow(_CatalogRow):
    """Row of information_schema.COLUMNS."""
    table_catalog: Optional[str] = None
    table_schema: Optional[str] = None
    table_name: Optional[str] = None
    column_name: str
    ordinal_position: Optional[int] = None
    column_default: Optional[str] = None
    is_nullable: Optional[str] = None
    data_type: Optional[str] = None
    character_maximum_length: Optional[int] = None
    character_octet_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    numeric_scale: Optional[int] = None
    datetime_precision: Optional[int] = None
    character_set_name: Optional[str] = None
    collation_name: Optional[str] = None
    column_type: Optional[str] = None
    # enum('','PRI','UNI','MUL')
    column_key: Optional[str] = None
    extra: Optional[str] = None
    privileges: Optional[str] = None
    column_comment: Optional[str] = None
    generation_expression: Optional[str] = None


def to_table(row: MySQLTableRow) -> Table:
    """Convert a TABLES row to a normalized Table."""
    return Table(
        name=row.table_name,
        schema=row.table_schema,
        comment=row.table_comment,
    )


def to_column(row: MySQLColumnRow) -> Column:
    """Convert a COLUMNS row to a normalized Column.

    The full ``COLUMN_TYPE`` (``tinyint(1)``, ``int unsigned``) drives the
    mapping. Temporal columns are always reported as nullable.
    """
    field_type = mysql_to_field_type(row.column_type or "")
    is_nullable = NULLABLE if is_temporal_field_type(field_type) else row.is_nullable
    return Column(
        schema=row.table_schema,
        table_name=row.table_name,
        name=escape_if_reserved(row.column_name),
        default=row.column_default,
        max_length=row.character_maximum_length,
        is_nullable=is_nullable,
        column_type=row.column_type,
        comment=row.column_comment,
        field_type=field_type,
        multi_word=is_multi_word(row.column_name),
    )


def _filter_clause(name_filter: AbstractSet[str]) -> tuple:
    if not name_filter:
        return "", []
    return FILTER_SQL, [",".join(sorted(name_filter))]


class MySQLIntrospector:
    """Introspects the currently selected MySQL database."""

    driver = Driver.MYSQL

    def list_tables(self, connection: Any, name_filter: AbstractSet[str]) -> List[Table]:
        """List tables of ``DATABASE()`` in creation order."""
        clause, params = _filter_clause(name_filter)
        sql = TABLES_SQL + clause + "\n    ORDER BY CREATE_TIME, TABLE_NAME"
        rows = fetch_rows(connection, sql, params, dialect=self.driver, stage="tables")

        records = [MySQLTableRow.model_validate(row) for row in rows]
        # FIND_IN_SET follows the column collation, which is usually case-insensitive
        tables = [to_table(r) for r in records if matches_filter(r.table_name, name_filter)]
        logger.info("Found %d MySQL tables", len(tables))
        return tables

    def list_columns(self, connection: Any, name_filter: AbstractSet[str]) -> List[Column]:
        """List columns of ``DATABASE()`` grouped by table, in ordinal order."""
        clause, params = _filter_clause(name_filter)
        sql = COLUMNS_SQL + clause + "\n    ORDER BY TABLE_NAME, ORDINAL_POSITION"
        rows = fetch_rows(connection, sql, params, dialect=self.driver, stage="columns")

        records = [MySQLColumnRow.model_validate(row) for row in rows]
        columns = [to_column(r) for r in records if matches_filter(r.table_name, name_filter)]
        logger.info("Found %d MySQL columns", len(columns))
        return columns
