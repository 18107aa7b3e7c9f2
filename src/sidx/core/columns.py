"""
Column expressions accepted by the target serializer.

A target expression is either one column or a composite of several columns.
The two shapes share no behaviour beyond "render as a JSON array", so they are
plain frozen dataclasses combined into the `ColumnTarget` union and dispatched
with `match` (see `column_texts`).

Examples:
    >>> from sidx.core.columns import MultipleColumns, SingleColumn, column_texts
    >>> column_texts(SingleColumn("v"))
    ['v']
    >>> column_texts(MultipleColumns(("a", "b")))
    ['a', 'b']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .typing import ColumnRef

__all__ = [
    "SingleColumn",
    "MultipleColumns",
    "ColumnTarget",
    "column_text",
    "column_texts",
]


@dataclass(slots=True, frozen=True)
class SingleColumn:
    """One column, e.g. the `v` in `CREATE INDEX ON t (v)`."""

    column: ColumnRef | str


@dataclass(slots=True, frozen=True)
class MultipleColumns:
    """
    Composite of columns, e.g. the `(a, b)` in `CREATE INDEX ON t ((a, b), c)`.

    Raises:
        ValueError: If no columns are given.
    """

    columns: tuple[ColumnRef | str, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError("MultipleColumns requires at least one column")
        # Accept any iterable (lists from callers) but store a tuple.
        object.__setattr__(self, "columns", tuple(self.columns))


ColumnTarget = Union[SingleColumn, MultipleColumns]


def column_text(column: ColumnRef | str) -> str:
    """Canonical text of a column reference (its name)."""
    if isinstance(column, str):
        return column
    return column.name


def column_texts(target: ColumnTarget) -> list[str]:
    """Render a target expression as the list of its column names."""
    match target:
        case SingleColumn(column=column):
            return [column_text(column)]
        case MultipleColumns(columns=columns):
            return [column_text(c) for c in columns]
        case _:
            raise TypeError(f"unsupported column target: {target!r}")
