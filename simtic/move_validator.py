"""
Move generation and validation for Simtic.
Lists legal moves for the engine and checks moves typed in by a human.
"""

from typing import Optional, List
from dataclasses import dataclass

from .config import EngineConfig
from .position import Position


def generate_moves(position: Position) -> List[int]:
    """
    Get all legal moves.

    Tic-tac-toe moves are just the empty squares. The list is rebuilt on
    every call.

    Args:
        position: Current position.

    Returns:
        Empty squares in ascending order; empty when the board is full.
    """
    return [sq for sq, cell in enumerate(position.cells) if cell is None]


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None
    square: Optional[int] = None


class MoveValidator:
    """
    Validates moves entered by a human.

    Rules:
    1. The input must be a single square number 0-8
    2. Can only place on empty squares
    """

    def validate_move(self, position: Position, key: str) -> ValidationResult:
        """
        Validate a move typed by the player.

        Args:
            position: Current position.
            key: The raw input, e.g. "4".

        Returns:
            ValidationResult with the square when valid, error_message when not.
        """
        key = key.strip()

        # Check it names a square
        if not (len(key) == 1 and key.isascii() and key.isdecimal()):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid square {key!r}. Must be 0-{EngineConfig.SQUARES_MAX - 1}."
            )

        square = int(key)
        return self.validate_square(position, square)

    def validate_square(self, position: Position, square: int) -> ValidationResult:
        """
        Validate a move given as a square index.

        Args:
            position: Current position.
            square: Square index.

        Returns:
            ValidationResult.
        """
        if not 0 <= square < EngineConfig.SQUARES_MAX:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid square {square}. Must be 0-{EngineConfig.SQUARES_MAX - 1}."
            )

        if position.cells[square] is not None:
            return ValidationResult(
                is_valid=False,
                error_message="That square is taken.",
                square=square
            )

        return ValidationResult(is_valid=True, square=square)
