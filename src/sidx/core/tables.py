"""
Frozen in-memory table schemas used to resolve target column names.

Notes:
    - A TableSchema is an immutable snapshot; `resolve_column` is a pure lookup
      and satisfies sidx.core.typing.ColumnResolver.
    - ColumnDefinition satisfies sidx.core.typing.ColumnRef through its `name`.
    - Key order follows declaration order within each column kind.
    - Core is zero-IO; sidx.io.schema_file builds schemas from files.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "ColumnKind",
    "ColumnDefinition",
    "TableSchema",
]


class ColumnKind(Enum):
    """Role of a column in its table."""

    PARTITION_KEY = "partition_key"
    CLUSTERING = "clustering"
    REGULAR = "regular"
    STATIC = "static"


@dataclass(frozen=True)
class ColumnDefinition:
    """
    One column of a table.

    Attributes:
        name (str): Column name as written in targets.
        kind (ColumnKind): Role of the column.
        dtype (str): Free-form type label (e.g. "text", "map<text,int>"); not interpreted.
    """

    name: str
    kind: ColumnKind
    dtype: str = "text"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TableSchema:
    """
    Frozen schema snapshot for one table.

    Attributes:
        keyspace (str): Keyspace the table lives in.
        name (str): Table name.
        columns (tuple[ColumnDefinition, ...]): Columns in declaration order.

    Raises:
        ValueError: If two columns share a name.

    Examples:
        >>> from sidx.core.tables import ColumnDefinition, ColumnKind, TableSchema
        >>> t = TableSchema("ks", "t", (
        ...     ColumnDefinition("p", ColumnKind.PARTITION_KEY),
        ...     ColumnDefinition("v", ColumnKind.REGULAR),
        ... ))
        >>> t.resolve_column("v").kind.value
        'regular'
        >>> t.resolve_column("nope") is None
        True
    """

    keyspace: str
    name: str
    columns: tuple[ColumnDefinition, ...]
    _by_name: dict[str, ColumnDefinition] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        for col in self.columns:
            if col.name in self._by_name:
                raise ValueError(f"duplicate column {col.name!r} in table {self.qualified_name}")
            self._by_name[col.name] = col

    @classmethod
    def of(cls, keyspace: str, name: str, columns: Iterable[ColumnDefinition]) -> TableSchema:
        return cls(keyspace, name, tuple(columns))

    @property
    def qualified_name(self) -> str:
        return f"{self.keyspace}.{self.name}"

    def get_column_definition(self, name: str) -> ColumnDefinition | None:
        return self._by_name.get(name)

    def resolve_column(self, name: str) -> ColumnDefinition | None:
        """ColumnResolver over this snapshot; None when the column is unknown."""
        return self.get_column_definition(name)

    def _of_kind(self, kind: ColumnKind) -> tuple[ColumnDefinition, ...]:
        return tuple(c for c in self.columns if c.kind is kind)

    @property
    def partition_key_columns(self) -> tuple[ColumnDefinition, ...]:
        return self._of_kind(ColumnKind.PARTITION_KEY)

    @property
    def clustering_key_columns(self) -> tuple[ColumnDefinition, ...]:
        return self._of_kind(ColumnKind.CLUSTERING)
