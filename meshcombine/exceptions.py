"""Errors raised when the arrays handed to a combine call do not fit together."""


class LengthMismatchError(ValueError):
    """Index arrays combined together do not share one length."""


class IndexOutOfRangeError(IndexError):
    """A reduced index addresses past the end of an attribute array."""
