"""
sidx.io: file-facing helpers for the sidx tools.

## Responsibilities
- Load runtime settings with precedence env > TOML > defaults.
- Load table schemas (column resolvers) and index metadata from TOML/JSON files.

## Public API
- SidxSettings: configuration for the CLI (log level, default schema file).
- load_table_schema: file -> sidx.core.tables.TableSchema.
- load_index_metadata: file -> sidx.core.schema.IndexMetadata.

## Import DAG discipline
- Depends only on stdlib, pydantic, and sidx.core.*.
- MUST NOT import sidx.cli.

## Examples
```python
from sidx.core import parse
from sidx.io import load_table_schema

schema = load_table_schema("events.toml")  # doctest: +SKIP
parse("keys(tags)", schema.resolve_column)  # doctest: +SKIP
```
"""

from __future__ import annotations

from .config import SidxSettings
from .errors import IoConfigError, IoError, IoSchemaError
from .schema_file import load_index_metadata, load_table_schema

__all__ = [
    "SidxSettings",
    "IoError",
    "IoConfigError",
    "IoSchemaError",
    "load_index_metadata",
    "load_table_schema",
]
