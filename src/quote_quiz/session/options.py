"""
Module: session.options

Purpose:
    Build the multiple-choice option set for one question: the correct
    author plus distractors sampled from the other authors of the loaded
    set, in random order.

Key Functions:
    - generate_options(): Option set for one correct author

Dependencies:
    - session.shuffle: shuffle()

Used By:
    - session.engine: QuizSession.options_for()
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .shuffle import RandomSource, shuffle

logger = logging.getLogger(__name__)


DEFAULT_OPTIONS_COUNT = 4


def generate_options(
    correct_author: str,
    all_authors: Iterable[str],
    options_count: int = DEFAULT_OPTIONS_COUNT,
    *,
    rng: Optional[RandomSource] = None,
    dedupe_distractors: bool = False,
) -> List[str]:
    """
    Generate the option set for a question.

    Algorithm:
    1. Drop every entry equal to correct_author from all_authors
    2. Shuffle the remaining pool, keep the first options_count - 1
    3. Prepend correct_author and shuffle again

    The pool is not deduplicated by default: an author credited with
    several quotes appears several times, so the same name can be drawn
    twice. Pass dedupe_distractors=True to sample distinct names only.

    Args:
        correct_author: Author of the current quote
        all_authors: Authors of the full loaded set (duplicates allowed)
        options_count: Desired number of options including the correct one
        rng: Random source passed through to shuffle()
        dedupe_distractors: Reduce the pool to distinct names first

    Returns:
        List of min(options_count, 1 + pool size) author names, containing
        correct_author exactly once

    Raises:
        ValueError: If options_count < 1

    Example:
        >>> opts = generate_options("Einstein", ["Einstein", "Gandhi", "Lincoln"])
        >>> sorted(opts)
        ['Einstein', 'Gandhi', 'Lincoln']
    """
    if options_count < 1:
        raise ValueError(f"options_count must be positive: {options_count}")

    pool = [author for author in all_authors if author != correct_author]
    if dedupe_distractors:
        pool = list(dict.fromkeys(pool))

    wrong_options = shuffle(pool, rng)[: options_count - 1]
    if len(wrong_options) < options_count - 1:
        logger.debug(
            "Only %d distractors available for %r (wanted %d)",
            len(wrong_options), correct_author, options_count - 1,
        )

    return shuffle([correct_author, *wrong_options], rng)
