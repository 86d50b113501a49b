"""
Core package: domain models and schema validation.
"""
