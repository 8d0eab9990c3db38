"""Database-specific type mapping tables.

Each dialect has its own static table from the upper-cased native type
spelling to the Rust type used in the generated struct. The tables are kept
separate because the same spelling means different things per engine
(``BIT`` is ``u8`` on MySQL but ``bit_vec::BitVec`` on PostgreSQL).

Anything not listed falls back to ``DEFAULT_FIELD_TYPE``.
"""

from typing import Dict, Iterable, Tuple

DEFAULT_FIELD_TYPE = "String"


def _build_table(entries: Iterable[Tuple[Tuple[str, ...], str]]) -> Dict[str, str]:
    """Flatten ``(spellings, rust_type)`` groups into one lookup dict."""
    table: Dict[str, str] = {}
    for spellings, rust_type in entries:
        for spelling in spellings:
            table[spelling] = rust_type
    return table


MYSQL_TYPES = _build_table([
    (("TINYINT(1)", "BOOL", "BOOLEAN"), "bool"),
    (("TINYINT",), "i8"),
    (("TINYINT UNSIGNED",), "u8"),
    (("SMALLINT",), "i16"),
    (("SMALLINT UNSIGNED",), "u16"),
    (("MEDIUMINT",), "i32"),
    (("MEDIUMINT UNSIGNED",), "u32"),
    (("INT", "INTEGER"), "i32"),
    (("INT UNSIGNED", "INTEGER UNSIGNED"), "u32"),
    (("BIGINT",), "i64"),
    (("BIGINT UNSIGNED", "SERIAL"), "u64"),
    (("DECIMAL",), "bigdecimal::BigDecimal"),
    (("DOUBLE", "DOUBLE PRECISION", "NUMERIC"), "f64"),
    (("FLOAT",), "f32"),
    (("BIT",), "u8"),
    (("DATE",), "time::Date"),
    (("TIME",), "time::Time"),
    (("DATETIME",), "time::PrimitiveDateTime"),
    (("TIMESTAMP",), "time::offsetDateTime"),
    (("YEAR",), "time::Date"),
    ((
        "CHAR", "VARCHAR", "BINARY", "VARBINARY", "TINYBLOB", "TINYTEXT", "BLOB", "TEXT",
        "MEDIUMBLOB", "MEDIUMTEXT", "LONGBLOB", "LONGTEXT", "ENUM", "SET",
    ), "String"),
    # GEOMETRY, POINT, LINESTRING, POLYGON and friends use the fallback
    (("JSON",), "serde_json:JsonValue"),
])

POSTGRES_TYPES = _build_table([
    (("BOOL",), "bool"),
    (("CHAR",), "i8"),
    (("SMALLINT", "SMALLSERIAL", "INT2"), "i16"),
    (("INT", "SERIAL", "INT4"), "i32"),
    (("BIGINT", "BIGSERIAL", "INT8"), "i64"),
    (("REAL", "FLOAT4"), "f32"),
    (("DOUBLE PRECISION", "FLOAT8"), "f64"),
    (("BYTEA",), "Vec<u8>"),
    (("VOID",), "()"),
    (("INTERVAL",), "sqlx_postgres::types::PgInterval"),
    (("INT8RANGE", "INT4RANGE", "TSRANGE", "TSTZRANGE", "DATERANGE", "NUMRANGE"),
     "sqlx_postgres::types::PgRange<T> "),
    (("MONEY",), "sqlx_postgres::types::PgMoney"),
    (("LTREE",), "sqlx_postgres::types::PgLTree"),
    (("LQUERY",), "sqlx_postgres::types::PgLQuery"),
    (("YEAR",), "time::Date"),
    (("DATE",), "time::Date"),
    (("TIME",), "time::Time"),
    (("TIMESTAMP",), "time::PrimitiveDateTime"),
    (("TIMESTAMPTZ",), "time::OffsetDateTime"),
    (("TIMETZ",), "sqlx_postgres::types::PgTimeTz"),
    (("NUMERIC",), "bigdecimal::BigDecimal"),
    (("JSON", "JSONB"), "serde_json:JsonValue"),
    (("UUID",), "uuid::Uuid"),
    (("INET", "CIDR"), "std::net::IpAddr"),
    (("MACADDR",), "mac_address::MacAddress"),
    (("BIT", "VARBIT"), "bit_vec::BitVec"),
])

SQLITE_TYPES = _build_table([
    (("BOOLEAN",), "bool"),
    (("INTEGER",), "i32"),
    (("BIGINT", "INT8"), "i64"),
    (("REAL",), "f64"),
    (("BLOB",), "Vec<u8>"),
    (("DATE",), "time::Date"),
    (("TIME",), "time::Time"),
    (("DATETIME",), "time::OffsetDateTime"),
])


def _lookup(table: Dict[str, str], native_type: str) -> str:
    return table.get(native_type.upper(), DEFAULT_FIELD_TYPE)


def mysql_to_field_type(native_type: str) -> str:
    """Convert a MySQL ``COLUMN_TYPE`` to a Rust type."""
    return _lookup(MYSQL_TYPES, native_type)


def postgres_to_field_type(native_type: str) -> str:
    """Convert a PostgreSQL type name (``udt_name``) to a Rust type."""
    return _lookup(POSTGRES_TYPES, native_type)


def sqlite_to_field_type(native_type: str) -> str:
    """Convert a SQLite base type (length suffix already removed) to a Rust type."""
    return _lookup(SQLITE_TYPES, native_type)


def is_temporal_field_type(field_type: str) -> bool:
    """Check whether a mapped Rust type holds a date or time value."""
    return field_type.startswith("time::") or "Time" in field_type
