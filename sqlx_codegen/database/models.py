"""Normalized schema model shared by every dialect."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .identifiers import to_upper_camel_case


class Driver(str, Enum):
    """Supported database engines."""
    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"


@dataclass(frozen=True)
class Table:
    """A table as reported by the catalog."""
    name: str
    schema: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class Column:
    """A column converted into its generated Rust field.

    ``table_name`` is a lookup key into the table map, not a reference to
    the owning ``Table``.
    """
    name: str
    field_type: str
    multi_word: bool = False
    schema: Optional[str] = None
    table_name: Optional[str] = None
    default: Optional[str] = None
    max_length: Optional[int] = None
    is_nullable: Optional[str] = None
    column_type: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class TableContext:
    """Values the model template needs for one table."""
    table: Table
    columns: List[Column]
    struct_name: str
    has_columns: bool
    column_num: int
    column_names: str

    @classmethod
    def build(cls, table: Table, columns: Optional[List[Column]]) -> "TableContext":
        columns = list(columns or [])
        return cls(
            table=table,
            columns=columns,
            struct_name=to_upper_camel_case(table.name),
            has_columns=bool(columns),
            column_num=len(columns),
            column_names=",".join(c.name for c in columns),
        )


@dataclass
class SchemaModel:
    """Tables keyed by name and the columns each one owns."""
    tables: Dict[str, Table] = field(default_factory=dict)
    columns: Dict[str, List[Column]] = field(default_factory=dict)

    def get_table_context(self, table_name: str) -> TableContext:
        """Build the render context for a table in the model."""
        return TableContext.build(self.tables[table_name], self.columns.get(table_name))

    def get_table_contexts(self) -> List[TableContext]:
        """Render contexts for every table, in catalog order."""
        return [self.get_table_context(name) for name in self.tables]

    def get_column_count(self) -> int:
        return sum(len(cols) for cols in self.columns.values())
