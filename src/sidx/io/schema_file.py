"""
Read table schemas and index metadata from TOML or JSON files.

File layout (TOML shown; JSON uses the same keys):

```toml
keyspace = "ks"
name = "events"

[[columns]]
name = "day"
kind = "partition_key"
type = "date"

[[columns]]
name = "tags"
kind = "regular"
type = "map<text,int>"
```

Index metadata files hold one index: `name`, optional `kind`, and `options`
(including `target`), validated by sidx.core.schema.IndexMetadata.

Notes
- The file format is validated with pydantic; failures surface as IoSchemaError.
- `.toml` files are read with tomllib, `.json` files via sidx.core.serde.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sidx.core.schema import IndexMetadata
from sidx.core.serde import json_loads
from sidx.core.tables import ColumnDefinition, ColumnKind, TableSchema

from .errors import IoConfigError, IoSchemaError

__all__ = [
    "load_table_schema",
    "load_index_metadata",
]

logger = logging.getLogger(__name__)


class _ColumnEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    kind: ColumnKind = ColumnKind.REGULAR
    type: str = "text"


class _TableEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    keyspace: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    columns: list[_ColumnEntry] = Field(..., min_length=1)

    def to_schema(self) -> TableSchema:
        return TableSchema.of(
            self.keyspace,
            self.name,
            (ColumnDefinition(c.name, c.kind, c.type) for c in self.columns),
        )


def _read_mapping(path: str | os.PathLike[str]) -> dict[str, Any]:
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix not in (".toml", ".json"):
        raise IoConfigError(f"unsupported file type {p.suffix!r} for {p} (expected .toml or .json)")
    try:
        if suffix == ".toml":
            with p.open("rb") as fh:
                data: Any = tomllib.load(fh)
        else:
            data = json_loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise IoSchemaError(f"cannot read {p}: {exc}") from exc
    except ValueError as exc:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are both ValueErrors.
        raise IoSchemaError(f"cannot parse {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise IoSchemaError(f"{p} must contain an object at top level")
    return data


def load_table_schema(path: str | os.PathLike[str]) -> TableSchema:
    """
    Load a table schema file.

    Args:
        path: `.toml` or `.json` file in the layout shown in the module docstring.

    Returns:
        TableSchema: Frozen snapshot usable as a ColumnResolver via `resolve_column`.

    Raises:
        IoConfigError: Unsupported file extension.
        IoSchemaError: Unreadable file, syntax error, invalid layout, or duplicate columns.
    """
    data = _read_mapping(path)
    try:
        schema = _TableEntry.model_validate(data).to_schema()
    except (ValidationError, ValueError) as exc:
        raise IoSchemaError(f"invalid table schema in {path}: {exc}") from exc
    logger.debug(
        "loaded schema %s with %d columns from %s", schema.qualified_name, len(schema.columns), path
    )
    return schema


def load_index_metadata(path: str | os.PathLike[str]) -> IndexMetadata:
    """
    Load one persisted index definition.

    Raises:
        IoConfigError: Unsupported file extension.
        IoSchemaError: Unreadable file or metadata failing IndexMetadata validation.
    """
    data = _read_mapping(path)
    try:
        return IndexMetadata.model_validate(data)
    except ValidationError as exc:
        raise IoSchemaError(f"invalid index metadata in {path}: {exc}") from exc
