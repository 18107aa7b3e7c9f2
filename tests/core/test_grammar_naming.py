import pytest

from sidx.core.constants import (
    INDEX_ENTRIES_OPTION_NAME,
    INDEX_KEYS_OPTION_NAME,
    INDEX_VALUES_OPTION_NAME,
)
from sidx.core.errors import GrammarError
from sidx.core.grammar import (
    DEFAULT_TARGET_MODE,
    IndexKind,
    TargetMode,
    ensure_all_enum_values_lower_snake,
    index_kind_from_value,
    target_mode_from_value,
    target_mode_value,
)
from sidx.core.tables import ColumnKind


def test_all_enum_values_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake([TargetMode, IndexKind, ColumnKind])


def test_default_mode_is_values() -> None:
    assert DEFAULT_TARGET_MODE is TargetMode.VALUES


@pytest.mark.parametrize("keyword", ["keys", "entries", "values", "full"])
def test_target_mode_roundtrips_keyword(keyword: str) -> None:
    assert target_mode_value(target_mode_from_value(keyword)) == keyword


@pytest.mark.parametrize("bad", ["KEYS", "Keys", "map", ""])
def test_target_mode_is_case_sensitive(bad: str) -> None:
    with pytest.raises(GrammarError, match="target mode must be one of"):
        target_mode_from_value(bad)


def test_mode_option_names() -> None:
    assert TargetMode.KEYS.option_name == INDEX_KEYS_OPTION_NAME
    assert TargetMode.ENTRIES.option_name == INDEX_ENTRIES_OPTION_NAME
    assert TargetMode.VALUES.option_name == INDEX_VALUES_OPTION_NAME


def test_full_mode_has_no_option_name() -> None:
    with pytest.raises(GrammarError, match="has no index option"):
        TargetMode.FULL.option_name


def test_index_kind_is_normalized() -> None:
    assert index_kind_from_value(" Composites ") is IndexKind.COMPOSITES
    assert index_kind_from_value("custom") is IndexKind.CUSTOM


def test_index_kind_unknown_raises() -> None:
    with pytest.raises(GrammarError, match="index kind must be one of"):
        index_kind_from_value("bitmap")
