"""
Module: loading.loader

Purpose:
    Load the quote set from a configuration provider. Parsing is strict
    (parse_quotes raises LoaderError), loading is soft (load_quotes logs the
    reason and returns an empty tuple), so a missing or broken source
    degrades to an empty quiz instead of failing the session.

Key Functions:
    - load_quotes(): Soft loader used at session start
    - parse_quotes(): Strict parser for a raw JSON string

Dependencies:
    - json (std)
    - core.models: QuoteRecord
    - core.schemas: validate_phrases (jsonschema)
    - loading.providers: ConfigProvider

Used By:
    - session.engine: QuizSession.start()
    - cli: console runner
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Tuple

from quote_quiz.core.models import QuoteRecord
from quote_quiz.core.schemas import validate_phrases, ValidationError

from .errors import LoaderError
from .providers import ConfigProvider, EnvConfigProvider


logger = logging.getLogger(__name__)


def parse_quotes(raw: Optional[str]) -> Tuple[QuoteRecord, ...]:
    """
    Parse a phrases JSON string into records.

    Args:
        raw: JSON array of {"phrase": ..., "author": ...} objects

    Returns:
        Tuple of QuoteRecord in source order

    Raises:
        LoaderError: If the value is absent, not valid JSON, or does not
            match the phrases schema

    Example:
        >>> parse_quotes('[{"phrase": "Veni, vidi, vici.", "author": "Julius Caesar"}]')
        (QuoteRecord(text='Veni, vidi, vici.', author='Julius Caesar'),)
    """
    if raw is None or not raw.strip():
        raise LoaderError("Phrases configuration not found")

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; oversized integers raise a plain one.
        raise LoaderError(f"Phrases configuration is not valid JSON: {e}") from e

    try:
        validate_phrases(data)
    except ValidationError as e:
        raise LoaderError(str(e)) from e

    records = []
    for i, item in enumerate(data):
        try:
            records.append(QuoteRecord.from_dict(item))
        except ValueError as e:
            raise LoaderError(f"Invalid phrase at index {i}: {e}") from e
    return tuple(records)


def load_quotes(provider: Optional[ConfigProvider] = None) -> Tuple[QuoteRecord, ...]:
    """
    Load all quotes from the provider, never raising.

    Args:
        provider: Source of the phrases JSON (default: EnvConfigProvider)

    Returns:
        Tuple of QuoteRecord, empty if the source is absent or malformed
    """
    provider = provider or EnvConfigProvider()
    source = provider.describe()

    try:
        records = parse_quotes(provider.read())
    except LoaderError as e:
        logger.error("Error loading phrases from %s: %s", source, e)
        return ()

    logger.info("Loaded %d quotes from %s", len(records), source)
    return records
