"""
Exceptions raised by the Simtic engine.
All of them are caller mistakes; the search itself has no recoverable errors.
"""


class SimticError(Exception):
    """Base class for engine errors."""


class IllegalMoveError(SimticError, ValueError):
    """A move was applied to an occupied square or outside the board."""

    def __init__(self, square: int, reason: str):
        self.square = square
        self.reason = reason
        super().__init__(f"Illegal move {square}: {reason}")


class NoMovesError(SimticError):
    """A move was requested from a position with no empty squares."""
