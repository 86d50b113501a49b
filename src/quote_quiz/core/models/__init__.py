"""
Core Models Package

Immutable, validated data models shared by the loader and the session engine.
All models are frozen dataclasses so a loaded question set cannot be mutated
during a session.
"""

from .records import QuoteRecord, authors_of

__all__ = [
    "QuoteRecord",
    "authors_of",
]
