from __future__ import annotations

import pytest

from sidx.core.columns import MultipleColumns, SingleColumn, column_texts
from sidx.core.grammar import TargetMode
from sidx.core.tables import ColumnDefinition, ColumnKind, TableSchema
from sidx.core.target import TargetDescriptor, format_target, parse, serialize_targets


def _table() -> TableSchema:
    return TableSchema.of(
        "ks",
        "events",
        [
            ColumnDefinition("a", ColumnKind.PARTITION_KEY),
            ColumnDefinition("b", ColumnKind.PARTITION_KEY),
            ColumnDefinition("c", ColumnKind.CLUSTERING),
            ColumnDefinition("d", ColumnKind.CLUSTERING),
            ColumnDefinition("v", ColumnKind.REGULAR),
        ],
    )


def _roles(d: TargetDescriptor) -> tuple[list[str], list[str]]:
    return [c.name for c in d.partition_key_columns], [c.name for c in d.clustering_key_columns]


def test_single_column_is_written_bare() -> None:
    assert serialize_targets([SingleColumn("v")]) == "v"


def test_single_column_ref_uses_its_name() -> None:
    col = _table().get_column_definition("v")
    assert serialize_targets([SingleColumn(col)]) == "v"


def test_single_composite_has_no_ck() -> None:
    assert serialize_targets([MultipleColumns(("a", "b"))]) == '{"pk":["a","b"]}'


def test_composite_then_clustering_columns() -> None:
    out = serialize_targets([MultipleColumns(("a", "b")), SingleColumn("c"), SingleColumn("d")])
    assert out == '{"ck":["c","d"],"pk":["a","b"]}'


def test_single_pk_is_wrapped_when_ck_present() -> None:
    assert serialize_targets([SingleColumn("a"), SingleColumn("c")]) == '{"ck":["c"],"pk":["a"]}'


def test_composite_after_first_is_concatenated_into_ck() -> None:
    out = serialize_targets([SingleColumn("a"), MultipleColumns(("c", "d"))])
    assert out == '{"ck":["c","d"],"pk":["a"]}'


def test_empty_targets_rejected() -> None:
    with pytest.raises(ValueError, match="at least one index target"):
        serialize_targets([])


def test_empty_composite_rejected() -> None:
    with pytest.raises(ValueError, match="at least one column"):
        MultipleColumns(())


def test_composite_accepts_list() -> None:
    target = MultipleColumns(["a", "b"])  # type: ignore[arg-type]
    assert target.columns == ("a", "b")
    assert column_texts(target) == ["a", "b"]


def test_column_texts_rejects_unknown_shape() -> None:
    with pytest.raises(TypeError, match="unsupported column target"):
        column_texts("a")  # type: ignore[arg-type]


def test_unicode_names_kept_verbatim() -> None:
    out = serialize_targets([SingleColumn("città"), SingleColumn("ü")])
    assert out == '{"ck":["ü"],"pk":["città"]}'


@pytest.mark.parametrize(
    "raw",
    [
        "v",
        '{"pk":["v"]}',
        '{"pk":["a","b"]}',
        '{"pk":["a"],"ck":["c"]}',
        '{"pk":["a","b"],"ck":["c","d"]}',
    ],
)
def test_roundtrip_preserves_columns_and_roles(raw: str) -> None:
    t = _table()
    d = parse(raw, t.resolve_column)
    again = parse(serialize_targets(d.to_targets()), t.resolve_column)
    assert _roles(again) == _roles(d)
    assert again.mode is TargetMode.VALUES


def test_functional_mode_is_not_reemitted() -> None:
    t = _table()
    d = parse("keys(v)", t.resolve_column)
    assert serialize_targets(d.to_targets()) == "v"


def test_to_targets_shapes() -> None:
    t = _table()
    d = parse('{"pk":["a","b"],"ck":["c"]}', t.resolve_column)
    first, second = d.to_targets()
    assert isinstance(first, MultipleColumns)
    assert isinstance(second, SingleColumn)
    assert column_texts(first) == ["a", "b"]


@pytest.mark.parametrize(
    "mode,expected",
    [
        (TargetMode.VALUES, "v"),
        (TargetMode.KEYS, "keys(v)"),
        (TargetMode.ENTRIES, "entries(v)"),
        (TargetMode.FULL, "full(v)"),
    ],
)
def test_format_target(mode: TargetMode, expected: str) -> None:
    assert format_target(mode, "v") == expected


@pytest.mark.parametrize("mode", list(TargetMode))
def test_format_target_parses_back_to_same_mode(mode: TargetMode) -> None:
    t = _table()
    col = t.get_column_definition("v")
    d = parse(format_target(mode, col), t.resolve_column)
    assert d.mode is mode
    assert d.partition_key_columns == (col,)
