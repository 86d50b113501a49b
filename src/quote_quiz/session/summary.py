"""
Module: session.summary

Purpose:
    End-of-session result: score, total, percentage and the score band
    shown on the finish screen.

Key Classes:
    - ScoreBand: Percentage tiers (EXPERT / GOOD / FAIR / KEEP_STUDYING)
    - SessionSummary: Immutable result of a session

Used By:
    - session.engine: QuizSession.summary()
    - cli: final report
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ScoreBand(Enum):
    """
    Finish-screen tier for a percentage score.

    Each member's value is the lowest percentage that reaches it.
    """

    EXPERT = 80
    GOOD = 60
    FAIR = 40
    KEEP_STUDYING = 0

    @classmethod
    def for_percentage(cls, percentage: int) -> "ScoreBand":
        for band in cls:  # Declared highest first
            if percentage >= band.value:
                return band
        return cls.KEEP_STUDYING


@dataclass(frozen=True)
class SessionSummary:
    """
    Result of a quiz session.

    Attributes:
        score: Correct answers
        total: Questions in the session

    Example:
        >>> SessionSummary(score=7, total=9).percentage
        78
        >>> SessionSummary(score=0, total=0).band
        <ScoreBand.KEEP_STUDYING: 0>
    """

    score: int
    total: int

    def __post_init__(self) -> None:
        """Validate summary on construction."""
        if self.total < 0:
            raise ValueError(f"total must be non-negative: {self.total}")
        if not (0 <= self.score <= self.total):
            raise ValueError(f"score must be within 0..{self.total}: {self.score}")

    @property
    def percentage(self) -> int:
        """Score as a whole percentage, halves rounded up; 0 for an empty session."""
        if self.total == 0:
            return 0
        return math.floor(self.score * 100 / self.total + 0.5)

    @property
    def band(self) -> ScoreBand:
        return ScoreBand.for_percentage(self.percentage)
