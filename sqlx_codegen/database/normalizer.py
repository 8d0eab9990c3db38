"""Group introspected columns under their owning tables."""

import logging
from typing import Dict, List, Sequence

from .models import Column, SchemaModel, Table

logger = logging.getLogger(__name__)


def normalize(tables: Sequence[Table], columns: Sequence[Column]) -> SchemaModel:
    """Build the table map and the table -> columns grouping.

    Tables are keyed by name (a repeated name keeps the last row). Every
    table gets an entry in the column map, possibly empty, and columns keep
    their relative order. Columns that point at no known table are dropped.
    """
    table_map: Dict[str, Table] = {}
    for table in tables:
        table_map[table.name] = table

    column_map: Dict[str, List[Column]] = {name: [] for name in table_map}
    orphans = 0
    for column in columns:
        owned = column_map.get(column.table_name) if column.table_name is not None else None
        if owned is None:
            orphans += 1
            continue
        owned.append(column)

    if orphans:
        logger.debug("Dropped %d columns without a matching table", orphans)

    return SchemaModel(tables=table_map, columns=column_map)
