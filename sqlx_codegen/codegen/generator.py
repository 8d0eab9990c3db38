"""Rust model rendering and file emission."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List

from jinja2 import Environment, StrictUndefined, TemplateError

from ..database.models import Driver, TableContext
from ..errors import GenerationError
from .templates import MODEL_TEMPLATE, MOD_TEMPLATE

logger = logging.getLogger(__name__)

# sqlx pool pieces used by mod.rs, per driver
POOL_TYPES: Dict[Driver, Dict[str, str]] = {
    Driver.MYSQL: {"pool_type": "MySql", "pool_module": "mysql", "pool_constructor": "MySqlPool"},
    Driver.POSTGRES: {"pool_type": "Postgres", "pool_module": "postgres", "pool_constructor": "PgPool"},
    Driver.SQLITE: {"pool_type": "Sqlite", "pool_module": "sqlite", "pool_constructor": "SqlitePool"},
}

MOD_FILE_NAME = "mod.rs"


class ModelRenderer:
    """Renders Rust sources from normalized table contexts."""

    def __init__(self, driver: Driver):
        self.driver = driver
        self._env = Environment(
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            autoescape=False,
        )
        self._model_template = self._env.from_string(MODEL_TEMPLATE)
        self._mod_template = self._env.from_string(MOD_TEMPLATE)

    def render_model(self, context: TableContext) -> str:
        """Render ``<table>.rs`` for one table."""
        names = [c.name for c in context.columns]
        try:
            return self._model_template.render(
                table=context.table,
                struct_name=context.struct_name,
                columns=context.columns,
                has_columns=context.has_columns,
                column_num=context.column_num,
                column_names=context.column_names,
                placeholders=",".join("?" for _ in names),
                assignments=",".join(f"{name} = ?" for name in names),
            )
        except TemplateError as e:
            raise GenerationError(
                f"Error rendering model for table {context.table.name}: {e}",
                details={"table": context.table.name},
            ) from e

    def render_mod(self, table_names: Iterable[str]) -> str:
        """Render ``mod.rs`` declaring every generated module."""
        try:
            return self._mod_template.render(
                table_names=list(table_names),
                **POOL_TYPES[self.driver],
            )
        except TemplateError as e:
            raise GenerationError(f"Error rendering {MOD_FILE_NAME}: {e}") from e


class ModelWriter:
    """Writes rendered sources into the output directory."""

    def __init__(self, path: str):
        self.path = normalize_output_path(path)
        self.written: List[Path] = []

    def write(self, file_name: str, content: str) -> Path:
        """Write one file, creating the directory on first use."""
        target = Path(self.path) / file_name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise GenerationError(
                f"Error writing {target}: {e}",
                details={"path": str(target)},
            ) from e
        logger.debug("Wrote %d bytes to %s", len(content), target)
        self.written.append(target)
        return target


def normalize_output_path(path: str) -> str:
    """Append a trailing ``/`` to a non-empty path."""
    if path and not path.endswith("/"):
        return path + "/"
    return path
