from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from sidx.core.columns import ColumnTarget, MultipleColumns, SingleColumn
from sidx.core.grammar import target_mode_from_value
from sidx.core.serde import json_dumps_canonical
from sidx.core.tables import ColumnDefinition, ColumnKind
from sidx.core.target import (
    TargetDescriptor,
    format_target,
    is_local,
    parse,
    parse_index,
    primary_column_name,
    serialize_targets,
)
from sidx.core.typing import ColumnResolver
from sidx.io.config import SidxSettings
from sidx.io.errors import IoError
from sidx.io.schema_file import load_index_metadata, load_table_schema

logger = logging.getLogger(__name__)


def _configure_logging(settings: SidxSettings) -> None:
    logging.basicConfig(
        level=settings.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _any_column(name: str) -> ColumnDefinition:
    """Resolver used without a schema file: every name is a regular column."""
    return ColumnDefinition(name, ColumnKind.REGULAR)


def _resolver(schema_path: str | None, settings: SidxSettings) -> ColumnResolver:
    path = schema_path or settings.schema_path
    if not path:
        return _any_column
    schema = load_table_schema(Path(path))
    logger.info("resolving columns against %s", schema.qualified_name)
    return schema.resolve_column


def _descriptor_doc(d: TargetDescriptor) -> dict[str, Any]:
    return {
        "mode": d.mode.value,
        "pk": [c.name for c in d.partition_key_columns],
        "ck": [c.name for c in d.clustering_key_columns],
        "local": d.is_local,
    }


def _column_target(arg: str) -> ColumnTarget:
    """`a` -> SingleColumn("a"); `a,b` -> MultipleColumns(("a", "b"))."""
    names = [n.strip() for n in arg.split(",")]
    if len(names) == 1:
        return SingleColumn(names[0])
    if not all(names):
        raise ValueError(f"empty column name in composite target {arg!r}")
    return MultipleColumns(tuple(names))


def _cmd_parse(argv: list[str], settings: SidxSettings) -> int:
    p = argparse.ArgumentParser(prog="sidx parse", description="Parse a persisted index target.")
    p.add_argument("target", help="Target text, e.g. 'keys(tags)' or '{\"pk\":[\"a\"]}'.")
    p.add_argument("--schema", type=str, default=None, help="Table schema file (.toml/.json).")
    args = p.parse_args(argv)

    descriptor = parse(args.target, _resolver(args.schema, settings))
    print(json_dumps_canonical(_descriptor_doc(descriptor)))
    return 0


def _cmd_index(argv: list[str], settings: SidxSettings) -> int:
    p = argparse.ArgumentParser(
        prog="sidx index", description="Parse the target stored in an index metadata file."
    )
    p.add_argument("path", help="Index metadata file (.toml/.json).")
    p.add_argument("--schema", type=str, default=None, help="Table schema file (.toml/.json).")
    args = p.parse_args(argv)

    index = load_index_metadata(Path(args.path))
    descriptor = parse_index(index, _resolver(args.schema, settings))
    doc = _descriptor_doc(descriptor)
    doc["index"] = index.name
    doc["kind"] = index.kind.value
    print(json_dumps_canonical(doc))
    return 0


def _cmd_serialize(argv: list[str], settings: SidxSettings) -> int:
    p = argparse.ArgumentParser(
        prog="sidx serialize",
        description="Build a persisted target; use 'a,b' for a composite of columns.",
    )
    p.add_argument("targets", nargs="+", help="Column names in index declaration order.")
    args = p.parse_args(argv)

    print(serialize_targets([_column_target(t) for t in args.targets]))
    return 0


def _cmd_format(argv: list[str], settings: SidxSettings) -> int:
    p = argparse.ArgumentParser(
        prog="sidx format", description="Show a single-column target with its mode."
    )
    p.add_argument("mode", help="One of keys, entries, values, full.")
    p.add_argument("column", help="Column name.")
    args = p.parse_args(argv)

    print(format_target(target_mode_from_value(args.mode), args.column))
    return 0


def _cmd_is_local(argv: list[str], settings: SidxSettings) -> int:
    p = argparse.ArgumentParser(prog="sidx is-local", description="Is the target a local index?")
    p.add_argument("target")
    args = p.parse_args(argv)

    print("true" if is_local(args.target) else "false")
    return 0


def _cmd_column_name(argv: list[str], settings: SidxSettings) -> int:
    p = argparse.ArgumentParser(
        prog="sidx column-name", description="Representative column of a target."
    )
    p.add_argument("target")
    args = p.parse_args(argv)

    print(primary_column_name(args.target))
    return 0


_COMMANDS = {
    "parse": _cmd_parse,
    "index": _cmd_index,
    "serialize": _cmd_serialize,
    "format": _cmd_format,
    "is-local": _cmd_is_local,
    "column-name": _cmd_column_name,
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sidx", description="Secondary-index target utilities.")
    p.add_argument("--config", type=str, default=None, help="Settings TOML file.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name in _COMMANDS:
        sub.add_parser(name)
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    config: str | None = None
    if len(argv) >= 2 and argv[0] == "--config":
        config, argv = argv[1], argv[2:]
    if not argv:
        build_argparser().print_help()
        return
    settings = SidxSettings.load(config)
    _configure_logging(settings)

    cmd, rest = argv[0], argv[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        raise SystemExit(2)
    # TargetError and GrammarError are ValueErrors.
    try:
        code = handler(rest, settings)
    except (IoError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
