"""Custom exceptions. Every layer raises subclasses of PuzzleError so callers can catch the whole family at once."""


class PuzzleError(Exception):
    """Top-level exception for the tile puzzle."""


class InvalidTemplateError(PuzzleError):
    """A template cannot be built from the supplied data."""


class InvalidRequestError(PuzzleError):
    """Raised by request validators. NOTE: not a ValueError, so pydantic lets it through unwrapped."""


class RepositoryError(PuzzleError):
    """Record could not be found / stored."""


class TemplateNotFoundError(RepositoryError):
    """No stored template matches the requested card."""
