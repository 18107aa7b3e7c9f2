"""
Configuration for the sidx tools layer.

Defines SidxSettings, a frozen dataclass carrying runtime configuration for the
CLI and the schema-file loader. Defaults favour a quiet CLI that resolves
every column name to itself unless a schema file is configured.

Import DAG discipline
- Depends only on the stdlib.
- Does not import sidx.cli.

Notes
- Precedence: environment (SIDX_*) > TOML (sidx.toml or [tool.sidx]) > defaults.
- Invalid values are ignored and the previous layer's value is kept.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidxSettings:
    """
    Runtime settings for the sidx CLI and IO helpers.

    Attributes:
        log_level (str): Root logging level name (one of DEBUG/INFO/WARNING/ERROR/CRITICAL).
        schema_path (str | None): Default table schema file used to resolve columns.

    Examples:
        >>> from sidx.io import SidxSettings
        >>> SidxSettings(log_level="DEBUG")  # doctest: +ELLIPSIS
        SidxSettings(...)
    """

    log_level: str = "WARNING"
    schema_path: str | None = None

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def _apply_mapping(cls, base: SidxSettings, cfg: dict[str, Any] | None) -> SidxSettings:
        """Apply a loose config mapping onto SidxSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        # log_level
        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)
            else:
                logger.warning("ignoring unknown log_level %r", cfg["log_level"])

        # schema_path
        if "schema_path" in cfg and isinstance(cfg["schema_path"], str):
            s = replace(s, schema_path=cfg["schema_path"] or None)

        return s

    @classmethod
    def from_env(cls, base: SidxSettings | None = None, prefix: str = "SIDX_") -> SidxSettings:
        """
        Build SidxSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - SIDX_LOG_LEVEL
            - SIDX_SCHEMA_PATH
        """
        s = base or cls()

        def get(name: str) -> str | None:
            return os.getenv(prefix + name)

        mapping: dict[str, Any] = {}
        v = get("LOG_LEVEL")
        if v:
            mapping["log_level"] = v
        v = get("SCHEMA_PATH")
        if v:
            mapping["schema_path"] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> SidxSettings:
        """
        Build SidxSettings from a TOML file.

        Search order when `path` is None:
            1) ./sidx.toml (with either a [sidx] table or top-level keys)
            2) ./pyproject.toml under [tool.sidx]

        Returns defaults if no file is present or none of them parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("cannot read settings from %s: %s", p, exc)
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "sidx.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                # Expect [tool.sidx]
                tool = data.get("tool", {})
                cfg = tool.get("sidx") if isinstance(tool, dict) else None
            else:
                # sidx.toml - accept either [sidx] table or top-level keys
                top = data
                if "sidx" in top and isinstance(top["sidx"], dict):
                    cfg = top["sidx"]
                else:
                    cfg = top
            if cfg:
                logger.debug("loaded settings from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> SidxSettings:
        """
        Load SidxSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (sidx.toml, pyproject.toml).

        Returns:
            SidxSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
