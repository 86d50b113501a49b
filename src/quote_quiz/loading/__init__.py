"""
Module: loading

Purpose:
    Obtain the quote set at session start. Providers supply the raw JSON
    string; the loader parses, validates and degrades to an empty set on
    any failure.

Key Functions:
    - load_quotes(): Soft loader (never raises)
    - parse_quotes(): Strict parser (raises LoaderError)

Key Classes:
    - ConfigProvider: Provider protocol
    - EnvConfigProvider, FileConfigProvider, LiteralConfigProvider
    - LoaderError: Configuration unavailable or malformed
"""

from .errors import LoaderError
from .loader import load_quotes, parse_quotes
from .providers import (
    DEFAULT_ENV_VAR,
    ConfigProvider,
    EnvConfigProvider,
    FileConfigProvider,
    LiteralConfigProvider,
)

__all__ = [
    "load_quotes",
    "parse_quotes",
    "LoaderError",
    "ConfigProvider",
    "EnvConfigProvider",
    "FileConfigProvider",
    "LiteralConfigProvider",
    "DEFAULT_ENV_VAR",
]
