"""Loader exceptions."""


class LoaderError(Exception):
    """Phrases configuration is unavailable or malformed."""
    pass
