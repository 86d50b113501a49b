"""
Module: loading.providers

Purpose:
    Configuration providers that supply the raw phrases JSON string.
    The loader depends only on the ConfigProvider protocol, so the source
    (environment variable, file, literal) can be swapped without touching
    the loader or the session engine.

Key Classes:
    - ConfigProvider: Protocol implemented by all providers
    - EnvConfigProvider: Reads an environment variable (default source)
    - FileConfigProvider: Reads a UTF-8 JSON file
    - LiteralConfigProvider: Returns a fixed string

Dependencies:
    - os, pathlib (std)

Used By:
    - loading.loader: load_quotes()
    - cli: --file / --env-var options
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional, Protocol, runtime_checkable

from .errors import LoaderError


DEFAULT_ENV_VAR = "QUOTE_QUIZ_PHRASES"


@runtime_checkable
class ConfigProvider(Protocol):
    """Source of the raw phrases JSON string."""

    def read(self) -> Optional[str]:
        """Return the raw value, or None when the source is absent."""
        ...

    def describe(self) -> str:
        """Short human-readable description for diagnostics."""
        ...


class EnvConfigProvider:
    """
    Read the phrases JSON from an environment variable.

    Args:
        var_name: Variable to read (default QUOTE_QUIZ_PHRASES)
        environ: Mapping to read from instead of os.environ
    """

    def __init__(self, var_name: str = DEFAULT_ENV_VAR, environ: Optional[Mapping[str, str]] = None) -> None:
        self.var_name = var_name
        self._environ = environ

    def read(self) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(self.var_name)

    def describe(self) -> str:
        return f"environment variable {self.var_name}"


class FileConfigProvider:
    """
    Read the phrases JSON from a file.

    A missing file is reported as an absent value (None); any other read
    failure raises LoaderError.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoaderError(f"Failed to read {self.path}: {e}") from e

    def describe(self) -> str:
        return f"file {self.path}"


class LiteralConfigProvider:
    """Return a fixed value. Used for embedding and in tests."""

    def __init__(self, value: Optional[str]) -> None:
        self.value = value

    def read(self) -> Optional[str]:
        return self.value

    def describe(self) -> str:
        return "literal value"
