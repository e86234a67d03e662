"""
Static evaluation for Simtic.
Scores a position that is not decided yet, for the side to move.
"""

from .position import Position
from .win_checker import WINNING_LINES


def evaluate(position: Position) -> int:
    """
    Count open and blocked two-in-a-rows for the side to move.

    A line holding exactly two of the mover's marks scores +1 when its third
    square is empty (a win next move) and -1 when the opponent sits there.
    Every other line scores 0.

    Args:
        position: A position where nobody has won.

    Returns:
        Score relative to the side to move.
    """
    cells = position.cells
    ours = position.side_to_move
    theirs = ours.opposite()

    points = 0
    for line in WINNING_LINES:
        squares = [cells[sq] for sq in line]
        if squares.count(ours) != 2:
            continue
        if None in squares:
            points += 1
        elif theirs in squares:
            points -= 1
    return points
