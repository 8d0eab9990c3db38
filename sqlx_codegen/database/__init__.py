"""Database introspection module for sqlx-codegen.

This module provides the dialect-neutral schema model with specific
introspectors for MySQL, PostgreSQL and SQLite.
"""

from .models import Driver, Table, Column, TableContext, SchemaModel
from .base import Introspector
from .connection import ConnectionSpec, open_connection, parse_table_names
from .normalizer import normalize
from .mysql import MySQLIntrospector
from .postgres import PostgresIntrospector
from .sqlite import SqliteIntrospector

__all__ = [
    # Data models
    "Driver",
    "Table",
    "Column",
    "TableContext",
    "SchemaModel",
    # Contract
    "Introspector",
    # Connections
    "ConnectionSpec",
    "open_connection",
    "parse_table_names",
    # Normalization
    "normalize",
    # Introspectors
    "MySQLIntrospector",
    "PostgresIntrospector",
    "SqliteIntrospector",
]
