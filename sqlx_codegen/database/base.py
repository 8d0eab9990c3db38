"""Introspection contract and catalog query helper.

Every dialect adapter satisfies ``Introspector`` on its own; there is no
shared base class because the catalogs are not substitutable. What they do
share is the way a catalog query is run: one cursor per statement, rows
turned into dicts keyed by the selected column names, and any driver
failure reported as a ``QueryError`` naming the stage.
"""

import logging
from typing import Any, AbstractSet, Dict, List, Optional, Protocol, Sequence

from ..errors import QueryError
from .models import Column, Driver, Table

logger = logging.getLogger(__name__)


class Introspector(Protocol):
    """Capability every dialect adapter provides."""

    driver: Driver

    def list_tables(self, connection: Any, name_filter: AbstractSet[str]) -> List[Table]:
        """List tables in the active database, restricted to ``name_filter`` if non-empty."""
        ...

    def list_columns(self, connection: Any, name_filter: AbstractSet[str]) -> List[Column]:
        """List columns of tables in the active database, restricted like ``list_tables``."""
        ...


def fetch_rows(
    connection: Any,
    sql: str,
    params: Optional[Sequence[Any]] = None,
    *,
    dialect: Driver,
    stage: str,
) -> List[Dict[str, Any]]:
    """Run a catalog query and return its rows as dicts.

    Args:
        connection: Open DB-API connection
        sql: Query text using the driver's parameter style
        params: Bound parameters
        dialect: Dialect issuing the query (for error reporting)
        stage: Introspection stage (for error reporting)

    Returns:
        One dict per row, keyed by the column labels of the result

    Raises:
        QueryError: If the driver fails to run the query
    """
    logger.debug("[%s:%s] %s %s", dialect.value, stage, " ".join(sql.split()), params or ())
    try:
        cursor = connection.cursor()
        try:
            if params:
                cursor.execute(sql, tuple(params))
            else:
                cursor.execute(sql)
            if cursor.description is None:
                return []
            labels = [desc[0] for desc in cursor.description]
            return [dict(zip(labels, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()
    except Exception as e:
        raise QueryError(
            f"Catalog query failed: {e}",
            dialect=dialect.value,
            stage=stage,
        ) from e


def matches_filter(name: Optional[str], name_filter: AbstractSet[str]) -> bool:
    """Exact, case-sensitive membership test; an empty filter matches everything."""
    if not name_filter:
        return True
    return name in name_filter
