"""
Module: records

Purpose:
    Provides the QuoteRecord dataclass - the only domain entity of the quiz.
    A quotation paired with the author it is attributed to. Immutable and
    validated on construction.

Key Functions:
    - QuoteRecord.to_dict() / QuoteRecord.from_dict(): Serialization
    - authors_of(): Author names for a collection of records

Dependencies:
    - dataclasses (std)

Used By:
    - loading.loader: Builds records from configuration
    - session.engine: Question sequencing and scoring
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List


# External field names of the phrases payload. "text" and "quote" are
# accepted on input as aliases for "phrase".
PHRASE_FIELD = "phrase"
AUTHOR_FIELD = "author"
PHRASE_ALIASES = (PHRASE_FIELD, "text", "quote")


@dataclass(frozen=True)
class QuoteRecord:
    """
    A single quotation with its attributed author (immutable).

    Attributes:
        text: The quotation itself
        author: The attributed author

    Invariants:
        - text and author are non-empty strings
        - author need not be unique within a loaded set

    Example:
        >>> record = QuoteRecord("Be yourself.", "Oscar Wilde")
        >>> record.to_dict()
        {'phrase': 'Be yourself.', 'author': 'Oscar Wilde'}
    """

    text: str
    author: str

    def __post_init__(self) -> None:
        """Validate record on construction."""
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError(f"text must be a non-empty string: {self.text!r}")
        if not isinstance(self.author, str) or not self.author.strip():
            raise ValueError(f"author must be a non-empty string: {self.author!r}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the external field names."""
        return {PHRASE_FIELD: self.text, AUTHOR_FIELD: self.author}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuoteRecord":
        """
        Create a record from a decoded JSON object.

        Args:
            data: Mapping with an author field and a phrase field
                (or one of its aliases)

        Returns:
            QuoteRecord instance

        Raises:
            ValueError: If a field is missing or not a non-empty string
        """
        text = next((data[key] for key in PHRASE_ALIASES if key in data), None)
        if text is None:
            raise ValueError(f"Missing phrase field (one of {list(PHRASE_ALIASES)})")
        if AUTHOR_FIELD not in data:
            raise ValueError(f"Missing {AUTHOR_FIELD!r} field")
        return cls(text=text, author=data[AUTHOR_FIELD])


def authors_of(records: Iterable[QuoteRecord]) -> List[str]:
    """Author of every record, in order, duplicates kept."""
    return [record.author for record in records]
