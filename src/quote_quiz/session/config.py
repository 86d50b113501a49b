"""
Module: session.config

Purpose:
    Configuration dataclass for a quiz session. Immutable configuration
    with validation on construction.

Key Classes:
    - SessionConfig: Option count, feedback delay, dedupe flag, seed

Dependencies:
    - dataclasses (std)

Used By:
    - session.engine: QuizSession
    - cli: console runner
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .options import DEFAULT_OPTIONS_COUNT


ENV_OPTIONS = "QUOTE_QUIZ_OPTIONS"
ENV_FEEDBACK_MS = "QUOTE_QUIZ_FEEDBACK_MS"
ENV_DEDUPE = "QUOTE_QUIZ_DEDUPE"
ENV_SEED = "QUOTE_QUIZ_SEED"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SessionConfig:
    """
    Configuration for a quiz session (immutable).

    Attributes:
        options_count: Number of options per question, correct one included
        feedback_delay_ms: Time feedback is shown before advancing
        dedupe_distractors: Sample distractors from distinct names only
        seed: Seed for random.Random when no generator is injected

    Invariants:
        - options_count >= 1
        - feedback_delay_ms >= 0

    Example:
        >>> config = SessionConfig(options_count=3, seed=42)
        >>> config.feedback_delay_ms
        2000
    """

    options_count: int = DEFAULT_OPTIONS_COUNT
    feedback_delay_ms: int = 2000
    dedupe_distractors: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.options_count < 1:
            raise ValueError(f"options_count must be positive: {self.options_count}")
        if self.feedback_delay_ms < 0:
            raise ValueError(f"feedback_delay_ms must be non-negative: {self.feedback_delay_ms}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionConfig":
        """
        Build a config from QUOTE_QUIZ_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set to an unparseable value
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if ENV_OPTIONS in env:
            kwargs["options_count"] = _parse_int(env, ENV_OPTIONS)
        if ENV_FEEDBACK_MS in env:
            kwargs["feedback_delay_ms"] = _parse_int(env, ENV_FEEDBACK_MS)
        if ENV_DEDUPE in env:
            kwargs["dedupe_distractors"] = _parse_bool(env, ENV_DEDUPE)
        if ENV_SEED in env:
            kwargs["seed"] = _parse_int(env, ENV_SEED)
        return cls(**kwargs)


def _parse_int(env: Mapping[str, str], name: str) -> int:
    value = env[name]
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer: {value!r}") from None


def _parse_bool(env: Mapping[str, str], name: str) -> bool:
    value = env[name].strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean: {env[name]!r}")
