"""
Pydantic v2 model for persisted secondary-index metadata.

Responsibilities
- Validate the stored shape of an index definition (name, kind, options).
- Normalize `kind` through grammar helpers.
- Expose the stored target and the derived locality flag.

Style
- Zero-IO (stdlib + pydantic only).
- Target parsing lives in sidx.core.target; `IndexMetadata` only carries text.

References
- grammar: src/sidx/core/grammar.py (IndexKind, normalization helpers)
- target: src/sidx/core/target.py (parse_index, is_local)
- tests: tests/core/test_schema_index_metadata.py
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import CUSTOM_INDEX_OPTION_NAME, TARGET_OPTION_NAME
from .grammar import IndexKind, index_kind_from_value
from .target import is_local

__all__ = [
    "IndexMetadata",
]


class IndexMetadata(BaseModel):
    """
    Persisted definition of one secondary index.

    Attributes:
        name (str): Index name (non-empty).
        kind (IndexKind): Index kind; strings are normalized case-insensitively.
        options (dict[str, str]): Index options; non-custom indexes must carry
            the `target` option.

    Raises:
        pydantic.ValidationError: If the name is empty, the kind is unknown, or
            a non-custom index has no target.

    Examples:
        >>> from sidx.core.schema import IndexMetadata
        >>> im = IndexMetadata(
        ...     name="t_by_c",
        ...     kind="COMPOSITES",
        ...     options={"target": '{"pk":["p"],"ck":["c"]}'},
        ... )
        >>> im.kind.value, im.local
        ('composites', True)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    kind: IndexKind = IndexKind.COMPOSITES
    options: dict[str, str] = Field(default_factory=dict)

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v: Any) -> Any:
        # GrammarError is a ValueError, so pydantic reports it as a field error.
        if isinstance(v, str):
            return index_kind_from_value(v)
        return v

    @model_validator(mode="after")
    def _require_target(self) -> IndexMetadata:
        if self.kind is not IndexKind.CUSTOM and TARGET_OPTION_NAME not in self.options:
            raise ValueError(
                f"index {self.name} of kind {self.kind.value} requires a "
                f"{TARGET_OPTION_NAME!r} option"
            )
        return self

    @property
    def target(self) -> str:
        """Raw stored target text ("" for a custom index without one)."""
        return self.options.get(TARGET_OPTION_NAME, "")

    @property
    def local(self) -> bool:
        return is_local(self.target)

    @property
    def custom_class(self) -> str | None:
        return self.options.get(CUSTOM_INDEX_OPTION_NAME)
