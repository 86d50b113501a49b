import json
import os
import random
import sys
from pathlib import Path

import pytest

# Run Qt headless so tests work without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import quote_quiz
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from quote_quiz.core.models import QuoteRecord


# Common test fixtures
@pytest.fixture
def sample_phrases() -> list[dict]:
    """Five phrases; Mark Twain is credited twice."""
    return [
        {"phrase": "The secret of getting ahead is getting started.", "author": "Mark Twain"},
        {"phrase": "Kindness is the language which the deaf can hear.", "author": "Mark Twain"},
        {"phrase": "Imagination is more important than knowledge.", "author": "Einstein"},
        {"phrase": "Be the change you wish to see in the world.", "author": "Gandhi"},
        {"phrase": "Whatever you are, be a good one.", "author": "Lincoln"},
    ]


@pytest.fixture
def phrases_json(sample_phrases) -> str:
    """sample_phrases serialized the way the environment supplies them."""
    return json.dumps(sample_phrases)


@pytest.fixture
def sample_records(sample_phrases) -> tuple[QuoteRecord, ...]:
    return tuple(QuoteRecord(p["phrase"], p["author"]) for p in sample_phrases)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)
