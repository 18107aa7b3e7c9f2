"""
Core package aggregator for sidx contracts (grammar, targets, columns, tables, metadata, serde).

## Contracts (single source of truth)
- Grammar: TargetMode / IndexKind enums, target EBNF, normalization helpers.
- Target: parse/serialize persisted index targets; locality and display helpers.
- Columns: SingleColumn / MultipleColumns expressions for the serializer.
- Tables: frozen schema snapshots that resolve column names.
- Schema: pydantic model for persisted index metadata.
- Serde: canonical JSON utilities.

## Notes
- Zero‑IO policy: stdlib + pydantic only; no file/network IO.
- Column lookup is a capability (`ColumnResolver`) supplied by the caller.
- The serializer never emits the functional `keys(col)` form; it is read-only.

## Downstream usage
- sidx.io: builds TableSchema snapshots from schema files.
- sidx.cli: exposes parse / serialize / is-local / column-name on the command line.

## Examples
```python
from sidx.core import MultipleColumns, SingleColumn, is_local, serialize_targets
target = serialize_targets([MultipleColumns(("p1", "p2")), SingleColumn("c")])
target  # '{"ck":["c"],"pk":["p1","p2"]}'
is_local(target)  # True
```
"""

from __future__ import annotations

from .columns import ColumnTarget, MultipleColumns, SingleColumn
from .errors import (
    ColumnNotFound,
    ConfigurationError,
    GrammarError,
    MalformedTargetSpec,
    TargetError,
)
from .grammar import IndexKind, TargetMode
from .schema import IndexMetadata
from .tables import ColumnDefinition, ColumnKind, TableSchema
from .target import (
    TargetDescriptor,
    format_target,
    is_local,
    parse,
    parse_index,
    primary_column_name,
    serialize_targets,
)
from .typing import ColumnRef, ColumnResolver

__all__ = [
    "ColumnTarget",
    "MultipleColumns",
    "SingleColumn",
    "ColumnNotFound",
    "ConfigurationError",
    "GrammarError",
    "MalformedTargetSpec",
    "TargetError",
    "IndexKind",
    "TargetMode",
    "IndexMetadata",
    "ColumnDefinition",
    "ColumnKind",
    "TableSchema",
    "TargetDescriptor",
    "format_target",
    "is_local",
    "parse",
    "parse_index",
    "primary_column_name",
    "serialize_targets",
    "ColumnRef",
    "ColumnResolver",
]
