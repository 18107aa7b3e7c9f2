"""
Parser and serializer for persisted secondary-index targets.

A target string records which column(s) an index covers and how. Three shapes
are accepted, tried in this order (first match wins):

| Shape       | Example                          | Result                                 |
|-------------|----------------------------------|----------------------------------------|
| functional  | `keys(tags)`                     | mode from keyword, pk = [tags]         |
| structured  | `{"ck":["c"],"pk":["a","b"]}`    | mode values, pk = [a, b], ck = [c]     |
| bare        | `v`                              | mode values, pk = [v]                  |

Stored targets carry no version tag, so the shape alone decides how they are
read. The serializer only emits the bare and structured shapes.

Responsibilities
- `parse` / `parse_index`: raw target -> TargetDescriptor (columns resolved).
- `is_local` / `primary_column_name`: best-effort queries on raw text; never raise.
- `serialize_targets`: column expressions -> canonical target string.
- `format_target`: display form of a single-column target with its mode.

Examples
--------
>>> from sidx.core.tables import ColumnDefinition, ColumnKind, TableSchema
>>> from sidx.core.target import parse, serialize_targets
>>> t = TableSchema("ks", "t", (
...     ColumnDefinition("p", ColumnKind.PARTITION_KEY),
...     ColumnDefinition("tags", ColumnKind.REGULAR, "map<text,int>"),
... ))
>>> d = parse("keys(tags)", t.resolve_column)
>>> d.mode.value, [c.name for c in d.partition_key_columns]
('keys', ['tags'])
>>> serialize_targets(d.to_targets())
'tags'
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .columns import ColumnTarget, MultipleColumns, SingleColumn, column_text, column_texts
from .constants import CK_TARGET_KEY, PK_TARGET_KEY
from .errors import ColumnNotFound, ConfigurationError, MalformedTargetSpec, TargetError
from .grammar import DEFAULT_TARGET_MODE, TARGET_MODE_RE, TargetMode, target_mode_from_value
from .serde import json_dumps_canonical, json_loads_object
from .typing import ColumnRef, ColumnResolver, JsonDict

if TYPE_CHECKING:
    from .schema import IndexMetadata

__all__ = [
    "TargetDescriptor",
    "parse",
    "parse_index",
    "is_local",
    "primary_column_name",
    "serialize_targets",
    "format_target",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetDescriptor:
    """
    Structured form of a parsed target.

    Attributes:
        mode (TargetMode): Indexing mode; always VALUES outside the functional form.
        partition_key_columns (tuple[ColumnRef, ...]): Non-empty, in target order.
        clustering_key_columns (tuple[ColumnRef, ...]): Possibly empty, in target order.

    Notes:
        Columns are borrowed from the resolver that produced them and are only
        meaningful against that schema snapshot.
    """

    mode: TargetMode
    partition_key_columns: tuple[ColumnRef, ...]
    clustering_key_columns: tuple[ColumnRef, ...] = ()

    @property
    def is_local(self) -> bool:
        return bool(self.partition_key_columns) and bool(self.clustering_key_columns)

    @property
    def columns(self) -> tuple[ColumnRef, ...]:
        return self.partition_key_columns + self.clustering_key_columns

    def to_targets(self) -> list[ColumnTarget]:
        """
        Column expressions that serialize back to an equivalent target.

        A single pk column with no ck columns becomes one SingleColumn (bare
        form). Otherwise the pk columns form the first expression and every ck
        column follows as its own SingleColumn.
        """
        pk = self.partition_key_columns
        first: ColumnTarget = SingleColumn(pk[0]) if len(pk) == 1 else MultipleColumns(pk)
        return [first, *(SingleColumn(c) for c in self.clustering_key_columns)]


# ============================================================================
# Parsing
# ============================================================================


def _column_getter(resolve: ColumnResolver) -> Callable[[str], ColumnRef]:
    def get_column(name: str) -> ColumnRef:
        column = resolve(name)
        if column is None:
            raise ColumnNotFound(name)
        return column

    return get_column


def _element_name(value: Any) -> str:
    """Stringify one pk/ck array element as a column name."""
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float():
            return str(value)
        case None:
            return ""
        case _:
            raise MalformedTargetSpec(
                f"column names in pk and ck must be scalars (got {json_dumps_canonical(value)})"
            )


def _parse_functional(raw: str, get_column: Callable[[str], ColumnRef]) -> TargetDescriptor | None:
    m = TARGET_MODE_RE.fullmatch(raw)
    if m is None:
        return None
    mode = target_mode_from_value(m.group(1))
    return TargetDescriptor(mode, (get_column(m.group(2)),))


def _parse_structured(raw: str, get_column: Callable[[str], ColumnRef]) -> TargetDescriptor | None:
    obj = json_loads_object(raw)
    if obj is None:
        return None
    pk = obj.get(PK_TARGET_KEY, [])
    ck = obj.get(CK_TARGET_KEY, [])
    if not isinstance(pk, list) or not isinstance(ck, list):
        raise MalformedTargetSpec("pk and ck fields of JSON definition must be arrays")
    pk_columns = tuple(get_column(_element_name(v)) for v in pk)
    ck_columns = tuple(get_column(_element_name(v)) for v in ck)
    if not pk_columns:
        raise MalformedTargetSpec("pk field of JSON definition must name at least one column")
    return TargetDescriptor(TargetMode.VALUES, pk_columns, ck_columns)


def _parse_bare(raw: str, get_column: Callable[[str], ColumnRef]) -> TargetDescriptor:
    return TargetDescriptor(DEFAULT_TARGET_MODE, (get_column(raw),))


def parse(raw: str, resolve: ColumnResolver) -> TargetDescriptor:
    """
    Parse a persisted target string, resolving every column it names.

    Args:
        raw (str): Target text as stored in index options.
        resolve (ColumnResolver): Name -> column lookup; None for unknown names.

    Returns:
        TargetDescriptor: Mode and columns in partition/clustering roles.

    Raises:
        ColumnNotFound: A named column is unknown to `resolve`.
        MalformedTargetSpec: A JSON object target has non-array pk/ck fields,
            non-scalar column names, or no pk columns.
    """
    get_column = _column_getter(resolve)
    descriptor = _parse_functional(raw, get_column)
    if descriptor is not None:
        logger.debug("target %r parsed as functional form (%s)", raw, descriptor.mode.value)
        return descriptor
    descriptor = _parse_structured(raw, get_column)
    if descriptor is not None:
        logger.debug(
            "target %r parsed as JSON form (%d pk, %d ck)",
            raw,
            len(descriptor.partition_key_columns),
            len(descriptor.clustering_key_columns),
        )
        return descriptor
    logger.debug("target %r parsed as a bare column name", raw)
    return _parse_bare(raw, get_column)


def parse_index(index: IndexMetadata, resolve: ColumnResolver) -> TargetDescriptor:
    """
    Parse the target stored in index metadata.

    Args:
        index (IndexMetadata): Persisted index definition carrying a `target` option.
        resolve (ColumnResolver): Lookup against the base table's schema.

    Returns:
        TargetDescriptor: Parsed target.

    Raises:
        ConfigurationError: Any parse failure, wrapped with the index name and
            stored target text; the underlying error is chained as __cause__.
    """
    target = index.target
    try:
        return parse(target, resolve)
    except TargetError as exc:
        logger.warning("cannot parse target of index %s (%s): %s", index.name, target, exc)
        raise ConfigurationError(index.name, target, exc) from exc


# ============================================================================
# Best-effort queries
# ============================================================================


def _non_empty_array(obj: JsonDict, key: str) -> list[Any] | None:
    value = obj.get(key)
    return value if isinstance(value, list) and value else None


def is_local(raw: str) -> bool:
    """
    Whether a target describes a local index (both pk and ck given).

    Never raises: non-JSON and malformed input simply return False.

    Examples:
        >>> is_local('{"pk":["a"],"ck":["b"]}')
        True
        >>> is_local('{"pk":["a"]}')
        False
        >>> is_local("a")
        False
    """
    obj = json_loads_object(raw)
    if obj is None:
        return False
    return (
        _non_empty_array(obj, PK_TARGET_KEY) is not None
        and _non_empty_array(obj, CK_TARGET_KEY) is not None
    )


def primary_column_name(raw: str) -> str:
    """
    Representative column name of a target, for display.

    Prefers the first clustering column, then the first partition column, and
    otherwise returns `raw` unchanged. Needs no schema and never raises.

    Examples:
        >>> primary_column_name('{"pk":["a"],"ck":["b","c"]}')
        'b'
        >>> primary_column_name('{"pk":["a"]}')
        'a'
        >>> primary_column_name("keys(tags)")
        'keys(tags)'
    """
    obj = json_loads_object(raw)
    if obj is None:
        return raw
    for key in (CK_TARGET_KEY, PK_TARGET_KEY):
        values = _non_empty_array(obj, key)
        if values is None:
            continue
        try:
            return _element_name(values[0])
        except MalformedTargetSpec:
            return raw
    return raw


# ============================================================================
# Serialization
# ============================================================================


def serialize_targets(targets: Sequence[ColumnTarget]) -> str:
    """
    Build the persisted target string for index column expressions.

    A lone single column is written bare. Anything else becomes a JSON object
    whose "pk" is the first expression (always an array) and whose "ck"
    concatenates the remaining expressions; "ck" is omitted when there is only
    one expression.

    Args:
        targets (Sequence[ColumnTarget]): Non-empty, in index declaration order.

    Returns:
        str: Bare column name or canonical JSON.

    Raises:
        ValueError: If targets is empty.

    Examples:
        >>> from sidx.core.columns import MultipleColumns, SingleColumn
        >>> serialize_targets([SingleColumn("v")])
        'v'
        >>> serialize_targets([MultipleColumns(("a", "b")), SingleColumn("c")])
        '{"ck":["c"],"pk":["a","b"]}'
        >>> serialize_targets([MultipleColumns(("a", "b"))])
        '{"pk":["a","b"]}'
    """
    if not targets:
        raise ValueError("at least one index target is required")
    first, *rest = targets
    if not rest and isinstance(first, SingleColumn):
        return column_text(first.column)

    doc: JsonDict = {PK_TARGET_KEY: column_texts(first)}
    if rest:
        doc[CK_TARGET_KEY] = [name for target in rest for name in column_texts(target)]
    return json_dumps_canonical(doc)


def format_target(mode: TargetMode, column: ColumnRef | str) -> str:
    """
    Display form of a single-column target including its mode.

    `values` targets are written bare; other modes use the functional form,
    which `parse` reads back with the same mode.

    Examples:
        >>> format_target(TargetMode.VALUES, "v")
        'v'
        >>> format_target(TargetMode.ENTRIES, "tags")
        'entries(tags)'
    """
    name = column_text(column)
    if mode is TargetMode.VALUES:
        return name
    return f"{mode.value}({name})"
