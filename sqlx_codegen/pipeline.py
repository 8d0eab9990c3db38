"""Introspection-to-source pipeline.

One run opens one connection, lists tables then columns (sequentially, no
fan-out), normalizes them and hands the model to the renderer and writer.
Any catalog failure aborts the run; an empty catalog is reported as a status,
not an error.
"""

import logging
from contextlib import closing
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from .codegen import MOD_FILE_NAME, ModelRenderer, ModelWriter
from .database import (
    ConnectionSpec,
    Driver,
    Introspector,
    MySQLIntrospector,
    PostgresIntrospector,
    SchemaModel,
    SqliteIntrospector,
    normalize,
    open_connection,
)

logger = logging.getLogger(__name__)


class GenerationStatus(str, Enum):
    """Outcome of a run."""
    GENERATED = "generated"
    NO_TABLES = "no_tables"
    NO_COLUMNS = "no_columns"


@dataclass
class GenerationResult:
    """What a run produced."""
    status: GenerationStatus
    model: Optional[SchemaModel] = None
    files: List[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when there was nothing to generate."""
        return self.status != GenerationStatus.GENERATED

    def describe(self) -> str:
        if self.status == GenerationStatus.NO_TABLES:
            return "tables is empty"
        if self.status == GenerationStatus.NO_COLUMNS:
            return "table columns is empty"
        return f"{len(self.files)} files generated"


INTROSPECTORS: Dict[Driver, Callable[[ConnectionSpec], Introspector]] = {
    Driver.MYSQL: lambda spec: MySQLIntrospector(),
    Driver.POSTGRES: lambda spec: PostgresIntrospector(database=spec.database),
    Driver.SQLITE: lambda spec: SqliteIntrospector(),
}


def create_introspector(spec: ConnectionSpec) -> Introspector:
    """Select the dialect adapter for the connection's driver."""
    return INTROSPECTORS[spec.driver](spec)


def introspect(
    introspector: Introspector,
    connection: Any,
    table_names: Sequence[str] = (),
) -> SchemaModel:
    """List tables and columns and group them into a schema model.

    Args:
        introspector: Dialect adapter
        connection: Open DB-API connection
        table_names: Tables to keep; empty means all tables

    Returns:
        The normalized model (possibly empty)
    """
    name_filter = frozenset(table_names)
    tables = introspector.list_tables(connection, name_filter)
    columns = introspector.list_columns(connection, name_filter)
    return normalize(tables, columns)


class CodeGenerator:
    """Runs introspection and writes one Rust file per table plus ``mod.rs``.

    Collaborators can be injected; by default they are derived from the
    connection spec.
    """

    def __init__(
        self,
        spec: ConnectionSpec,
        path: str,
        table_names: Sequence[str] = (),
        introspector: Optional[Introspector] = None,
        renderer: Optional[ModelRenderer] = None,
        writer: Optional[ModelWriter] = None,
        connect: Callable[[ConnectionSpec], Any] = open_connection,
    ):
        self.spec = spec
        self.table_names = list(table_names)
        self.introspector = introspector or create_introspector(spec)
        self.renderer = renderer or ModelRenderer(spec.driver)
        self.writer = writer or ModelWriter(path)
        self._connect = connect

    def run(self) -> GenerationResult:
        """Introspect the database and emit sources.

        Raises:
            ConnectionError: If the connection cannot be opened
            QueryError: If a catalog query fails
            GenerationError: If rendering or writing fails
        """
        logger.info("Starting generation for %s (tables: %s)",
                    self.spec.display_url(), ",".join(self.table_names) or "all")

        with closing(self._connect(self.spec)) as connection:
            model = introspect(self.introspector, connection, self.table_names)

        if not model.tables:
            logger.info("No tables found")
            return GenerationResult(status=GenerationStatus.NO_TABLES, model=model)

        if model.get_column_count() == 0:
            logger.info("No columns found for %d tables", len(model.tables))
            return GenerationResult(status=GenerationStatus.NO_COLUMNS, model=model)

        files = self.emit(model)
        return GenerationResult(status=GenerationStatus.GENERATED, model=model, files=files)

    def emit(self, model: SchemaModel) -> List[Path]:
        """Render and write every table file, then ``mod.rs``."""
        files = []
        for context in model.get_table_contexts():
            content = self.renderer.render_model(context)
            files.append(self.writer.write(f"{context.table.name}.rs", content))

        files.append(self.writer.write(MOD_FILE_NAME, self.renderer.render_mod(model.tables)))
        logger.info("Generated %d files", len(files))
        return files
