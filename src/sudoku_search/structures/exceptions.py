"""Exceptions raised by the container types."""


class KeyNotFoundError(KeyError):
    """Raised when a lookup targets a key that is not stored in the map."""
    pass


class EmptyQueueError(IndexError):
    """Raised when peeking at or popping from an empty heap or queue."""
    pass
