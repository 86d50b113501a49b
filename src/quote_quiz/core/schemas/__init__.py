"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import validate_phrases, ValidationError

__all__ = [
    "validate_phrases",
    "ValidationError",
]
