"""Test fixtures package."""

from .fake_db import FakeConnection, FakeCursor, FakeDriverError
from .catalog_rows import make_mysql_column_row, make_postgres_column_row

__all__ = [
    "FakeConnection",
    "FakeCursor",
    "FakeDriverError",
    "make_mysql_column_row",
    "make_postgres_column_row",
]
