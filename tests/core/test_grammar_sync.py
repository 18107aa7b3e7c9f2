from pathlib import Path

import pytest

import sidx.core.grammar as grammar
from sidx.core.grammar import EBNF_GRAMMAR, PARSED_GRAMMAR, ParsedGrammar, TargetMode


def test_target_ebnf_is_exposed_verbatim() -> None:
    file_text = Path(grammar.__file__).with_name("target.ebnf").read_text(encoding="utf-8")
    assert EBNF_GRAMMAR == file_text


def test_target_mode_matches_enum() -> None:
    assert PARSED_GRAMMAR.lower_snake_terminals("target_mode") == tuple(
        member.value for member in TargetMode
    )


def test_target_key_lists_pk_then_ck() -> None:
    assert PARSED_GRAMMAR.lower_snake_terminals("target_key") == ("pk", "ck")


def test_target_alternatives_in_parse_order() -> None:
    assert PARSED_GRAMMAR.production("target").alternatives == (
        "functional_target",
        "structured_target",
        "bare_target",
    )


def test_unknown_production_raises_key_error() -> None:
    with pytest.raises(KeyError, match="Unknown grammar production"):
        PARSED_GRAMMAR.production("no_such_rule")


def test_out_of_sync_grammar_is_reported() -> None:
    broken = ParsedGrammar.from_text('target_mode = "keys" | "values" ;')
    with pytest.raises(ValueError, match="missing"):
        grammar._assert_production_matches(
            broken, "target_mode", [m.value for m in TargetMode], "TargetMode"
        )
