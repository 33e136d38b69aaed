"""
errors.py - Exception types for c4term
"""

from typing import Optional


class Connect4Error(Exception):
    """Base class for all c4term errors."""


class InvalidArgument(Connect4Error, ValueError):
    """Malformed input to a pure query, such as an out-of-range column."""


class Precondition(Connect4Error):
    """An operation was invoked on a state or player in a disallowed phase."""


class InvalidOperation(Connect4Error):
    """An illegal move was applied.

    When raised while replaying a move sequence, `index` and `column` identify
    the offending move.
    """

    def __init__(self, message: str, index: Optional[int] = None, column=None):
        super().__init__(message)
        self.index = index
        self.column = column


class StrategyTransportFailure(Connect4Error):
    """The remote solver could not be reached or returned garbage."""
