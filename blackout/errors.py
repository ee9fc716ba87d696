"""Exceptions raised by the game engines."""


class BlackoutError(Exception):
    """Base class for engine errors."""


class EmptyDeckError(BlackoutError, IndexError):
    """Raised when drawing from a deck with no cards left."""


class InvalidOperationError(BlackoutError, ValueError):
    """Raised when an action is called outside its valid phase or with bad arguments."""
