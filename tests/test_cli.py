from __future__ import annotations

import json
from pathlib import Path

import pytest

from sidx import cli


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SIDX_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SIDX_SCHEMA_PATH", raising=False)


def _run(argv: list[str], capsys) -> tuple[int, str, str]:
    with pytest.raises(SystemExit) as ei:
        cli.main(argv)
    out, err = capsys.readouterr()
    return ei.value.code, out.strip(), err


def _schema(tmp_path: Path) -> Path:
    p = tmp_path / "events.json"
    p.write_text(
        json.dumps(
            {
                "keyspace": "ks",
                "name": "events",
                "columns": [
                    {"name": "day", "kind": "partition_key"},
                    {"name": "ts", "kind": "clustering"},
                    {"name": "tags", "type": "map<text,int>"},
                ],
            }
        )
    )
    return p


def test_parse_without_schema_accepts_any_name(capsys) -> None:
    code, out, _ = _run(["parse", "keys(anything)"], capsys)
    assert code == 0
    assert json.loads(out) == {"ck": [], "local": False, "mode": "keys", "pk": ["anything"]}


def test_parse_with_schema(tmp_path: Path, capsys) -> None:
    schema = _schema(tmp_path)
    code, out, _ = _run(["parse", '{"pk":["day"],"ck":["ts"]}', "--schema", str(schema)], capsys)
    assert code == 0
    assert out == '{"ck":["ts"],"local":true,"mode":"values","pk":["day"]}'


def test_parse_unknown_column_exits_2(tmp_path: Path, capsys) -> None:
    schema = _schema(tmp_path)
    code, out, err = _run(["parse", "nope", "--schema", str(schema)], capsys)
    assert code == 2
    assert out == ""
    assert "Column nope not found" in err


def test_parse_uses_schema_from_settings(tmp_path: Path, monkeypatch, capsys) -> None:
    schema = _schema(tmp_path)
    monkeypatch.setenv("SIDX_SCHEMA_PATH", str(schema))
    code, _, err = _run(["parse", "nope"], capsys)
    assert code == 2
    assert "Column nope not found" in err


def test_index_command_wraps_errors(tmp_path: Path, capsys) -> None:
    schema = _schema(tmp_path)
    index = tmp_path / "idx.json"
    index.write_text(json.dumps({"name": "by_x", "options": {"target": "x"}}))
    code, _, err = _run(["index", str(index), "--schema", str(schema)], capsys)
    assert code == 2
    assert "Unable to parse targets for index by_x (x)" in err


def test_index_command_success(tmp_path: Path, capsys) -> None:
    schema = _schema(tmp_path)
    index = tmp_path / "idx.json"
    index.write_text(json.dumps({"name": "by_tags", "options": {"target": "entries(tags)"}}))
    code, out, _ = _run(["index", str(index), "--schema", str(schema)], capsys)
    assert code == 0
    doc = json.loads(out)
    assert doc["index"] == "by_tags"
    assert doc["kind"] == "composites"
    assert doc["mode"] == "entries"
    assert doc["pk"] == ["tags"]


def test_serialize(capsys) -> None:
    assert _run(["serialize", "v"], capsys)[:2] == (0, "v")
    assert _run(["serialize", "a,b", "c"], capsys)[:2] == (0, '{"ck":["c"],"pk":["a","b"]}')


def test_serialize_rejects_empty_composite_member(capsys) -> None:
    code, _, err = _run(["serialize", "a,"], capsys)
    assert code == 2
    assert "empty column name" in err


def test_format(capsys) -> None:
    assert _run(["format", "entries", "tags"], capsys)[:2] == (0, "entries(tags)")
    code, _, err = _run(["format", "KEYS", "tags"], capsys)
    assert code == 2
    assert "target mode must be one of" in err


def test_is_local_and_column_name(capsys) -> None:
    assert _run(["is-local", '{"pk":["a"],"ck":["b"]}'], capsys)[:2] == (0, "true")
    assert _run(["is-local", "a"], capsys)[:2] == (0, "false")
    assert _run(["column-name", '{"pk":["a"],"ck":["b"]}'], capsys)[:2] == (0, "b")
    assert _run(["column-name", "keys(a)"], capsys)[:2] == (0, "keys(a)")


def test_config_flag_is_honoured(tmp_path: Path, capsys) -> None:
    schema = _schema(tmp_path)
    cfg = tmp_path / "custom.toml"
    cfg.write_text(f"[sidx]\nschema_path = {json.dumps(str(schema))}\n")
    code, _, err = _run(["--config", str(cfg), "parse", "nope"], capsys)
    assert code == 2
    assert "Column nope not found" in err


def test_unknown_command(capsys) -> None:
    code, _, err = _run(["explode"], capsys)
    assert code == 2
    assert "Unknown command: explode" in err


def test_no_args_prints_help(capsys) -> None:
    cli.main([])
    out, _ = capsys.readouterr()
    assert "usage: sidx" in out
