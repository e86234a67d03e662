"""
Win checker for Simtic.
Finds completed three-in-a-row lines.
"""

from typing import Optional, Tuple

from .position import Position, Player


# All possible winning lines, as square indices
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


def is_terminal(position: Position) -> bool:
    """
    Check if the side that just moved has won.

    Only the previous mover can have completed a line, so the marks of the
    side to move are never looked at. Call this before any evaluation: a won
    position makes everything else irrelevant.

    Args:
        position: The position to check.

    Returns:
        True if the previous mover has three in a row.
    """
    cells = position.cells
    mover = position.side_to_move.opposite()
    for a, b, c in WINNING_LINES:
        if cells[a] is mover and cells[b] is mover and cells[c] is mover:
            return True
    return False


def winning_line(position: Position) -> Optional[Tuple[int, int, int]]:
    """
    Get the first completed line, whoever owns it.

    Args:
        position: The position to check.

    Returns:
        The line as a triple of squares, or None.
    """
    cells = position.cells
    for line in WINNING_LINES:
        a, b, c = line
        if cells[a] is not None and cells[a] is cells[b] is cells[c]:
            return line
    return None


def winner(position: Position) -> Optional[Player]:
    """Get the player owning a completed line, or None."""
    line = winning_line(position)
    if line is None:
        return None
    return position.cells[line[0]]
