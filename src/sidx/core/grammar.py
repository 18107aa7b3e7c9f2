"""
Canonical index-target grammar and helpers.

Defines the indexing modes and index kinds, loads the authoritative EBNF for
persisted target strings, and provides zero-IO validators/helpers used by the
parser, the metadata models, and the CLI.

Responsibilities
- Define enums whose serialized values are the grammar's lower_snake terminals.
- Parse `target.ebnf` at import and keep it in sync with `TargetMode`.
- Provide normalization helpers for mode and kind tokens.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (wire/EBNF/options): lower_snake

2) Modes are read-path only:
   - The functional form `keys(col)` etc. is accepted when parsing, but the
     serializer never emits it. `format_target` renders it for display.

3) Shape decides the form:
   - Stored targets carry no version tag. Functional, structured (JSON) and
     bare shapes are told apart by the order of `target` alternatives.

Downstream usage
----------------
- `sidx.core.target` uses `TARGET_MODE_RE` and `TargetMode` for the functional form.
- `sidx.core.schema.IndexMetadata` normalizes `kind` through `index_kind_from_value`.
- Tests use `ensure_all_enum_values_lower_snake` to enforce naming invariants.

Examples
--------
>>> from sidx.core.grammar import TargetMode, target_mode_from_value
>>> target_mode_from_value("entries") is TargetMode.ENTRIES
True
>>> TargetMode.ENTRIES.option_name
'index_keys_and_values'
>>> index_kind_from_value("COMPOSITES").value
'composites'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from .constants import (
    CK_TARGET_KEY,
    INDEX_ENTRIES_OPTION_NAME,
    INDEX_KEYS_OPTION_NAME,
    INDEX_VALUES_OPTION_NAME,
    PK_TARGET_KEY,
)
from .errors import GrammarError

__all__ = [
    "TargetMode",
    "IndexKind",
    "DEFAULT_TARGET_MODE",
    "TARGET_MODE_RE",
    "EBNF_GRAMMAR",
    "GrammarProduction",
    "ParsedGrammar",
    "PARSED_GRAMMAR",
    # helpers/validators
    "is_lower_snake",
    "assert_lower_snake",
    "target_mode_value",
    "target_mode_from_value",
    "index_kind_from_value",
    "ensure_all_enum_values_lower_snake",
]

# Canonical grammar file next to this module
_EBNF_PATH = Path(__file__).with_name("target.ebnf")


def _load_ebnf_text() -> str:
    # Return the canonical EBNF text (no normalization).
    return _EBNF_PATH.read_text(encoding="utf-8")


EBNF_GRAMMAR: Final[str] = _load_ebnf_text()


@dataclass(slots=True, frozen=True)
class GrammarProduction:
    """Parsed production with convenient accessors."""

    name: str
    expression: str
    alternatives: tuple[str, ...]
    leading_terminals: tuple[str, ...]

    def lower_snake_terminals(self) -> tuple[str, ...]:
        return tuple(token for token in self.leading_terminals if is_lower_snake(token))


@dataclass(slots=True, frozen=True)
class ParsedGrammar:
    """Container for parsed grammar productions."""

    productions: dict[str, GrammarProduction]

    def production(self, name: str) -> GrammarProduction:
        try:
            return self.productions[name]
        except KeyError as exc:
            raise KeyError(f"Unknown grammar production: {name}") from exc

    def lower_snake_terminals(self, name: str) -> tuple[str, ...]:
        return self.production(name).lower_snake_terminals()

    @classmethod
    def from_text(cls, text: str) -> ParsedGrammar:
        stripped = _strip_ebnf_comments(text)
        productions: dict[str, GrammarProduction] = {}
        for match in _RULE_RE.finditer(stripped):
            rule_name = match.group(1)
            expression = match.group(2).strip()
            alternatives = _split_alternatives(expression)
            leading = tuple(
                literal
                for literal in (_first_literal(part) for part in alternatives)
                if literal is not None
            )
            productions[rule_name] = GrammarProduction(
                name=rule_name,
                expression=expression,
                alternatives=alternatives,
                leading_terminals=_dedupe_preserving_order(leading),
            )
        return cls(productions=productions)


_COMMENT_RE = re.compile(r"\(\*.*?\*\)", re.DOTALL)
_RULE_RE = re.compile(r"(?ms)^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*;")
_LITERAL_RE = re.compile(r"[\"']([^\"']+)[\"']")


def _strip_ebnf_comments(text: str) -> str:
    return _COMMENT_RE.sub(" ", text)


def _split_alternatives(expression: str) -> tuple[str, ...]:
    parts: list[str] = []
    buffer: list[str] = []
    depth = 0
    quote: str | None = None
    for ch in expression:
        if quote is not None:
            buffer.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in ('"', "'"):
            quote = ch
            buffer.append(ch)
        elif ch in "([{":
            depth += 1
            buffer.append(ch)
        elif ch in ")]}":
            depth = max(0, depth - 1)
            buffer.append(ch)
        elif ch == "|" and depth == 0:
            part = "".join(buffer).strip()
            if part:
                parts.append(part)
            buffer = []
        else:
            buffer.append(ch)
    tail = "".join(buffer).strip()
    if tail:
        parts.append(tail)
    return tuple(parts)


def _first_literal(alt: str) -> str | None:
    match = _LITERAL_RE.search(alt)
    return match.group(1) if match else None


def _dedupe_preserving_order(items: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    ordered: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return tuple(ordered)


# ============================================================================
# MODES AND KINDS
# ============================================================================


class TargetMode(Enum):
    """
    How a single column is indexed.

    Serialized values appear in:
      - the functional target form, e.g. `keys(tags)`
      - the `mode` field of `sidx parse` output

    Notes:
      `VALUES` is the default and the only mode of bare and JSON targets.
      Modes other than `FULL` are recorded in index options under
      `option_name` (see sidx.core.constants).
    """

    KEYS = "keys"
    ENTRIES = "entries"
    VALUES = "values"
    FULL = "full"

    @property
    def option_name(self) -> str:
        """Index option key recording this mode; `FULL` has none."""
        try:
            return _MODE_OPTION_NAMES[self]
        except KeyError as exc:
            raise GrammarError(f"target mode {self.value!r} has no index option") from exc


_MODE_OPTION_NAMES: Final[dict[TargetMode, str]] = {
    TargetMode.KEYS: INDEX_KEYS_OPTION_NAME,
    TargetMode.ENTRIES: INDEX_ENTRIES_OPTION_NAME,
    TargetMode.VALUES: INDEX_VALUES_OPTION_NAME,
}

DEFAULT_TARGET_MODE: Final[TargetMode] = TargetMode.VALUES


class IndexKind(Enum):
    """
    Kind of secondary index as stored in index metadata.

    Notes:
      Only `CUSTOM` indexes may omit the `target` option.
    """

    KEYS = "keys"
    CUSTOM = "custom"
    COMPOSITES = "composites"


# Functional form: mode keyword, then the whole parenthesized column text.
TARGET_MODE_RE: Final[re.Pattern[str]] = re.compile(
    r"(" + "|".join(m.value for m in TargetMode) + r")\((.+)\)"
)


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Args:
      value (str): Candidate string to validate.

    Returns:
      bool: True if value matches lower_snake (e.g., "index_keys"), False otherwise.

    Examples:
      >>> is_lower_snake("index_keys")
      True
      >>> is_lower_snake("IndexKeys")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def assert_lower_snake(value: str, what: str = "value") -> None:
    """
    Validate that a string is lower_snake.

    Raises:
      GrammarError: If value is not lower_snake.
    """
    if not is_lower_snake(value):
        raise GrammarError(f"{what} must be lower_snake (got: {value!r})")


def target_mode_value(mode: TargetMode) -> str:
    """Serialized keyword for a TargetMode (e.g., "entries")."""
    return mode.value


def target_mode_from_value(s: str) -> TargetMode:
    """
    Parse an exact mode keyword into a TargetMode.

    Matching is case-sensitive, as in the functional target form.

    Args:
      s (str): One of "keys", "entries", "values", "full".

    Returns:
      TargetMode: Parsed mode.

    Raises:
      GrammarError: If s is not a known mode keyword.
    """
    try:
        return TargetMode(s)
    except ValueError as exc:
        allowed = [m.value for m in TargetMode]
        raise GrammarError(f"target mode must be one of {allowed} (got {s!r})") from exc


def index_kind_from_value(s: str) -> IndexKind:
    """
    Normalize a free-form index kind token.

    Args:
      s (str): Candidate kind, any case (e.g., "COMPOSITES").

    Returns:
      IndexKind: Parsed kind.

    Raises:
      GrammarError: If the token does not name a known kind.
    """
    kind_l = (s or "").strip().lower()
    allowed = {k.value for k in IndexKind}
    if kind_l not in allowed:
        raise GrammarError(f"index kind must be one of {sorted(allowed)} (got {s!r})")
    return IndexKind(kind_l)


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([TargetMode, IndexKind])
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )


def _assert_production_matches(
    grammar: ParsedGrammar, rule_name: str, expected: list[str], what: str
) -> None:
    actual = list(grammar.lower_snake_terminals(rule_name))
    if actual != expected:
        actual_set = set(actual)
        expected_set = set(expected)
        issues: list[str] = []
        missing = expected_set - actual_set
        extra = actual_set - expected_set
        if missing:
            issues.append(f"missing {sorted(missing)}")
        if extra:
            issues.append(f"unexpected {sorted(extra)}")
        if not issues:
            issues.append("ordering differs")
        raise ValueError(
            f"Grammar production {rule_name!r} out of sync with {what}: " + "; ".join(issues)
        )


PARSED_GRAMMAR: Final[ParsedGrammar] = ParsedGrammar.from_text(EBNF_GRAMMAR)
_assert_production_matches(
    PARSED_GRAMMAR, "target_mode", [m.value for m in TargetMode], TargetMode.__name__
)
_assert_production_matches(
    PARSED_GRAMMAR, "target_key", [PK_TARGET_KEY, CK_TARGET_KEY], "target JSON keys"
)
