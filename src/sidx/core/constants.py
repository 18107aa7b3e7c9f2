"""
Key names shared by persisted index targets and index options.

Defines the JSON field names of structured targets and the option keys under
which index metadata records its target, custom class, and indexing mode. This
module is zero-IO and uses only the Python standard library.

Notes:
    - PK_TARGET_KEY / CK_TARGET_KEY are the only fields read from a JSON target.
    - TARGET_OPTION_NAME is the option that carries the raw target string in
      persisted index metadata (see sidx.core.schema.IndexMetadata).
    - The *_OPTION_NAME mode keys are produced by sidx.core.grammar.TargetMode.option_name.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "PK_TARGET_KEY",
    "CK_TARGET_KEY",
    "TARGET_OPTION_NAME",
    "CUSTOM_INDEX_OPTION_NAME",
    "INDEX_KEYS_OPTION_NAME",
    "INDEX_VALUES_OPTION_NAME",
    "INDEX_ENTRIES_OPTION_NAME",
]

# JSON target fields: partition-key and clustering-key column arrays.
PK_TARGET_KEY: Final[str] = "pk"
CK_TARGET_KEY: Final[str] = "ck"

# Index option carrying the persisted target string.
TARGET_OPTION_NAME: Final[str] = "target"

# Index option naming the implementation class of a custom index.
CUSTOM_INDEX_OPTION_NAME: Final[str] = "class_name"

# Index options recording the indexing mode of a collection column.
INDEX_KEYS_OPTION_NAME: Final[str] = "index_keys"
INDEX_VALUES_OPTION_NAME: Final[str] = "index_values"
INDEX_ENTRIES_OPTION_NAME: Final[str] = "index_keys_and_values"
