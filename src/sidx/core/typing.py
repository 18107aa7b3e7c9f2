"""
Lightweight typing aliases used across the target parser and serializer.

Provides the column-reference protocol and resolver alias that form the seam
between this package and a schema catalog. This module contains no runtime
logic and is zero-IO.

Notes:
    - Any object with a `name` attribute is a ColumnRef; identity/equality
      belong to whoever produced it.
    - A ColumnResolver returns None for unknown names; the parser turns that
      into sidx.core.errors.ColumnNotFound.

Examples:
    Use a dict-backed resolver.

    >>> from sidx.core.typing import ColumnResolver
    >>> from sidx.core.tables import ColumnDefinition, ColumnKind
    >>> cols = {"v": ColumnDefinition("v", ColumnKind.REGULAR)}
    >>> resolve: ColumnResolver = cols.get
    >>> resolve("v").name
    'v'
    >>> resolve("missing") is None
    True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "ColumnRef",
    "ColumnResolver",
    "JsonDict",
]


@runtime_checkable
class ColumnRef(Protocol):
    """Opaque column handle; only its canonical `name` text is read here."""

    @property
    def name(self) -> str: ...


ColumnResolver = Callable[[str], ColumnRef | None]

# Decoded JSON object. Kept intentionally broad for serde boundaries.
JsonDict = dict[str, Any]
