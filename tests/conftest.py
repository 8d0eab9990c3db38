"""Shared pytest fixtures for sqlx-codegen tests."""

import sqlite3

import pytest

from sqlx_codegen.database.models import Column, Table


# Five tables in creation order; two of them are used by the filter tests
SQLITE_SCHEMA = """
CREATE TABLE users (
    id INTEGER NOT NULL PRIMARY KEY,
    user_name VARCHAR(50) NOT NULL,
    email VARCHAR(120),
    type TEXT,
    created_at DATETIME NOT NULL
);
CREATE TABLE orders (
    id INTEGER NOT NULL PRIMARY KEY,
    user_id BIGINT NOT NULL,
    total REAL,
    paid BOOLEAN DEFAULT 0,
    ordered_on DATE NOT NULL
);
CREATE TABLE products (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    picture BLOB
);
CREATE TABLE categories (
    id INTEGER PRIMARY KEY,
    label VARCHAR(30)
);
CREATE TABLE reviews (
    id INTEGER PRIMARY KEY,
    body TEXT DEFAULT 'none',
    posted_at TIME
);
"""


@pytest.fixture
def sqlite_path(tmp_path):
    """Create a SQLite database file with five tables."""
    path = tmp_path / "test.sqlite"
    connection = sqlite3.connect(str(path))
    try:
        connection.executescript(SQLITE_SCHEMA)
        connection.commit()
    finally:
        connection.close()
    return path


@pytest.fixture
def sqlite_connection(sqlite_path):
    """Open connection to the five-table SQLite database."""
    connection = sqlite3.connect(str(sqlite_path))
    yield connection
    connection.close()


@pytest.fixture
def empty_sqlite_path(tmp_path):
    """Create a SQLite database file with no tables."""
    path = tmp_path / "empty.sqlite"
    sqlite3.connect(str(path)).close()
    return path


@pytest.fixture
def sample_tables():
    """Normalized tables as an adapter would produce them."""
    return [
        Table(name="users", schema="shop", comment="registered users"),
        Table(name="orders", schema="shop", comment="customer orders"),
    ]


@pytest.fixture
def sample_columns():
    """Normalized columns for the sample tables, interleaved across tables."""
    return [
        Column(name="id", field_type="i32", table_name="users", is_nullable="NO", column_type="int"),
        Column(name="id", field_type="i64", table_name="orders", is_nullable="NO", column_type="bigint"),
        Column(name="user_name", field_type="String", multi_word=True, table_name="users",
               max_length=50, is_nullable="NO", column_type="varchar(50)", comment="login"),
        Column(name="user_id", field_type="i32", multi_word=True, table_name="orders",
               is_nullable="NO", column_type="int"),
        Column(name="r#type", field_type="String", table_name="users", max_length=20,
               is_nullable="YES", column_type="varchar(20)"),
    ]


@pytest.fixture
def mysql_table_row():
    """information_schema.TABLES row as returned by pymysql."""
    return {
        "table_catalog": "def",
        "table_schema": "shop",
        "table_name": "employees",
        "table_type": "BASE TABLE",
        "engine": "InnoDB",
        "version": 10,
        "row_format": "Dynamic",
        "table_rows": 0,
        "avg_row_length": 0,
        "data_length": 16384,
        "max_data_length": 0,
        "index_length": 0,
        "data_free": 0,
        "auto_increment": None,
        "create_time": None,
        "update_time": None,
        "check_time": None,
        "table_collation": "utf8mb4_unicode_ci",
        "checksum": None,
        "create_options": "",
        "table_comment": "employee table",
    }
