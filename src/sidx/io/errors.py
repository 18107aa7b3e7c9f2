"""
Custom exceptions for the sidx.io module.

Purpose
- Provide IO-layer error types for reading schema files and settings.
- Keep sidx.core as the source of truth for target/grammar errors (see sidx.core.errors).

Source of truth and boundaries
- sidx.core.errors.TargetError and GrammarError are raised by the parser and models.
- sidx.io raises Io* errors for file concerns:
  - IoConfigError: invalid or unsupported configuration.
  - IoSchemaError: schema file missing, unreadable, or failing validation.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in sidx.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from sidx.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when configuration is invalid or unsupported.

    Examples:
        - A schema file with an unsupported extension
    """


class IoSchemaError(IoError):
    """
    Raised when a table schema file cannot be loaded.

    Notes:
        Covers missing files, TOML/JSON syntax errors, and pydantic validation
        failures (unknown column kinds, duplicate names).
    """
