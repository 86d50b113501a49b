"""
Module: session.shuffle

Purpose:
    Fisher-Yates shuffle on a copy of the input. Used both to fix the
    question order for a session and to place the correct answer among
    the options.

Key Functions:
    - shuffle(): Uniformly random permutation, input left untouched

Used By:
    - session.options: generate_options()
    - session.engine: QuizSession.start()
"""

from __future__ import annotations

import math
import random
from typing import Iterable, List, Optional, Protocol, TypeVar


T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with random() -> float in [0, 1), e.g. random.Random."""

    def random(self) -> float:
        ...


def shuffle(items: Iterable[T], rng: Optional[RandomSource] = None) -> List[T]:
    """
    Return a shuffled copy of items.

    Walks i from the last index down to 1, swapping position i with a
    uniformly drawn j in [0, i].

    Args:
        items: Elements to shuffle (not modified)
        rng: Random source; defaults to the module-level random generator

    Returns:
        New list holding a uniformly random permutation of items

    Example:
        >>> sorted(shuffle([3, 1, 2], random.Random(7)))
        [1, 2, 3]
    """
    source = rng if rng is not None else random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(source.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
