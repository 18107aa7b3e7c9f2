"""
Lightweight JSON serialization/deserialization utilities.

Provides the single canonical JSON policy used when persisting structured
targets, plus strict and best-effort loaders built on the stdlib `json` module.
This module is zero-IO.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - `json_loads_object` is the shape test shared by the parser, `is_local` and
      `primary_column_name`: anything that is not a JSON object yields None.
    - No side effects; stdlib-only.
"""

from __future__ import annotations

import json
from typing import Any

from .typing import JsonDict

__all__ = [
    "json_loads",
    "json_loads_object",
    "json_dumps_canonical",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.

    Examples:
        >>> json_dumps_canonical({"pk": ["a"], "ck": ["b"]})
        '{"ck":["b"],"pk":["a"]}'
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Args:
        s (str): JSON string to parse.

    Returns:
        Any: Decoded Python object (dict, list, str, int, float, bool, or None).

    Raises:
        json.JSONDecodeError: If s is not valid JSON.
    """
    return json.loads(s)


def json_loads_object(s: str) -> JsonDict | None:
    """
    Decode s and return it only if it is a JSON object.

    Args:
        s (str): Candidate JSON text.

    Returns:
        JsonDict | None: The decoded mapping, or None when s is not JSON or
        decodes to something other than an object (array, string, number, ...).

    Examples:
        >>> json_loads_object('{"pk": ["a"]}')
        {'pk': ['a']}
        >>> json_loads_object("a") is None
        True
        >>> json_loads_object('"a"') is None
        True
    """
    try:
        value = json.loads(s)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None
