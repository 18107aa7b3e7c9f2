import json

import pytest

from sidx.core.serde import json_dumps_canonical, json_loads, json_loads_object


def test_json_dumps_canonical_sorted_and_compact() -> None:
    s1 = json_dumps_canonical({"pk": ["a"], "ck": ["b"]})
    s2 = json_dumps_canonical({"ck": ["b"], "pk": ["a"]})
    assert s1 == s2 == '{"ck":["b"],"pk":["a"]}'


def test_json_dumps_canonical_keeps_unicode() -> None:
    s = json_dumps_canonical({"pk": ["città"]})
    assert "città" in s
    assert "\\u" not in s


def test_json_loads_roundtrip() -> None:
    obj = {"pk": ["a", "b"], "ck": []}
    assert json_loads(json_dumps_canonical(obj)) == obj


def test_json_loads_raises_on_invalid() -> None:
    with pytest.raises(json.JSONDecodeError):
        json_loads("{not json")


def test_json_loads_object_only_accepts_objects() -> None:
    assert json_loads_object('{"pk":["a"]}') == {"pk": ["a"]}
    assert json_loads_object("[1, 2]") is None
    assert json_loads_object('"a"') is None
    assert json_loads_object("42") is None
    assert json_loads_object("null") is None
    assert json_loads_object("v") is None
    assert json_loads_object("") is None


def test_json_loads_object_survives_deep_nesting() -> None:
    assert json_loads_object("[" * 100000) is None
