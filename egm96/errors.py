"""Errors raised while building an offset grid."""

from __future__ import annotations


class LoadError(Exception):
    """The offset grid could not be built from its byte source."""


class GridUnreadableError(LoadError):
    """The byte source could not be opened or read to completion."""


class GridSizeError(LoadError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"Offset grid must be {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class GridTruncatedError(GridSizeError):
    pass
