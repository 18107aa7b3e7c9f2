"""
Core exception types raised by target parsing and grammar normalization.

Provides typed exceptions for core-domain failures:
- ColumnNotFound when a target names a column the schema does not have.
- MalformedTargetSpec when a JSON target has the right shape but bad fields.
- ConfigurationError when a target stored in index metadata cannot be parsed.
- GrammarError for unknown mode/kind tokens.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - ColumnNotFound, MalformedTargetSpec and ConfigurationError share the
      TargetError base so callers can catch every parse failure at once.
    - is_local and primary_column_name in sidx.core.target never raise these.

Examples:
    Catch a missing column.

    >>> from sidx.core.errors import ColumnNotFound, TargetError
    >>> try:
    ...     raise ColumnNotFound("v")
    ... except TargetError as e:
    ...     msg = str(e)
    >>> msg
    'Column v not found'
"""

from __future__ import annotations

__all__ = [
    "TargetError",
    "ColumnNotFound",
    "MalformedTargetSpec",
    "ConfigurationError",
    "GrammarError",
]


class TargetError(ValueError):
    """Base class for failures to parse an index target."""


class ColumnNotFound(TargetError):
    """A target references a column that the resolver does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Column {name} not found")
        self.name = name


class MalformedTargetSpec(TargetError):
    """JSON-object target whose pk/ck fields are unusable."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ConfigurationError(TargetError):
    """
    Target stored in index metadata could not be parsed.

    Attributes:
        index_name (str): Name of the index whose metadata was being read.
        raw_target (str): The stored target text.
        cause (TargetError): Underlying parse failure (also chained as __cause__).
    """

    def __init__(self, index_name: str, raw_target: str, cause: TargetError) -> None:
        super().__init__(
            f"Unable to parse targets for index {index_name} ({raw_target}): {cause}"
        )
        self.index_name = index_name
        self.raw_target = raw_target
        self.cause = cause


class GrammarError(ValueError):
    """Grammar/naming normalization failure (e.g., unknown target mode or index kind)."""
