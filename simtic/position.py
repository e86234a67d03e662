"""
Board position for Simtic.
Tracks the 9 squares and the side to move, and applies/undoes moves in place.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass, field

from .config import EngineConfig
from .errors import IllegalMoveError


class Player(Enum):
    """
    The two players in the game.

    X moves first (like White in chess) and is the maximizing side.
    """
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self is Player.X else Player.X

    @property
    def is_maximizing(self) -> bool:
        """True for the side that looks for the highest score."""
        return self is Player.X


# Characters accepted as an empty square by Position.from_string
_EMPTY_CHARS = " ._-"


@dataclass
class Position:
    """
    A tic-tac-toe position.

    Squares are numbered 0 - 8, row by row:

        0 | 1 | 2
        3 | 4 | 5
        6 | 7 | 8

    None means the square is empty.
    """

    cells: List[Optional[Player]] = field(
        default_factory=lambda: [None] * EngineConfig.SQUARES_MAX
    )

    # The side that will make the next move
    side_to_move: Player = Player.X

    def __post_init__(self):
        if len(self.cells) != EngineConfig.SQUARES_MAX:
            raise ValueError(
                f"A position has {EngineConfig.SQUARES_MAX} squares, got {len(self.cells)}"
            )

    @classmethod
    def new(cls) -> "Position":
        """Empty board, X to move."""
        return cls()

    @classmethod
    def from_string(cls, text: str, side_to_move: Optional[Player] = None) -> "Position":
        """
        Build a position from a 9 character string such as "XX.OO....".

        Args:
            text: One character per square. 'X' and 'O' are marks, any of
                  " ._-" is an empty square.
            side_to_move: Who moves next. If omitted, X moves when both sides
                          have the same number of marks, otherwise O.

        Returns:
            The new Position.
        """
        cells: List[Optional[Player]] = []
        for char in text:
            if char.upper() == Player.X.value:
                cells.append(Player.X)
            elif char.upper() == Player.O.value:
                cells.append(Player.O)
            elif char in _EMPTY_CHARS:
                cells.append(None)
            else:
                raise ValueError(f"Unexpected square character: {char!r}")

        if side_to_move is None:
            x_count = cells.count(Player.X)
            o_count = cells.count(Player.O)
            side_to_move = Player.X if x_count == o_count else Player.O

        return cls(cells=cells, side_to_move=side_to_move)

    def copy(self) -> "Position":
        """Create an independent copy of the position."""
        return Position(cells=list(self.cells), side_to_move=self.side_to_move)

    def empty_count(self) -> int:
        """Number of empty squares."""
        return self.cells.count(None)

    def to_string(self) -> str:
        """Inverse of from_string, using '.' for empty squares."""
        return "".join(cell.value if cell is not None else "." for cell in self.cells)

    def render(self) -> str:
        """
        Draw the board as text.

        Returns:
            A multi-line string, one boxed row per board row.
        """
        marks = {
            Player.X: EngineConfig.X_MARK,
            Player.O: EngineConfig.O_MARK,
            None: EngineConfig.EMPTY_MARK,
        }
        size = EngineConfig.BOARD_SIZE
        border = "+---" * size + "+"

        lines = [border]
        for row in range(size):
            row_cells = self.cells[row * size:(row + 1) * size]
            lines.append("".join(f"| {marks[cell]} " for cell in row_cells) + "|")
            lines.append(border)
        return "\n".join(lines)


def apply_move(position: Position, square: int) -> Position:
    """
    Play a move for the side to move, in place.

    Args:
        position: The position to change.
        square: Square index (0-8). Must be empty.

    Returns:
        The same position object, with the square filled and the side to
        move flipped.

    Raises:
        IllegalMoveError: If the square is off the board or occupied.
    """
    if not 0 <= square < EngineConfig.SQUARES_MAX:
        raise IllegalMoveError(square, "square is off the board")
    if position.cells[square] is not None:
        raise IllegalMoveError(square, f"square is taken by {position.cells[square].value}")

    position.cells[square] = position.side_to_move
    position.side_to_move = position.side_to_move.opposite()
    return position


def undo_move(position: Position, square: int) -> Position:
    """
    Take back the move on a square, in place.

    Args:
        position: The position to change.
        square: Square of the move being taken back.

    Returns:
        The same position object, with the square emptied and the side to
        move flipped back.

    Raises:
        IllegalMoveError: If the square is off the board or already empty.
    """
    if not 0 <= square < EngineConfig.SQUARES_MAX:
        raise IllegalMoveError(square, "square is off the board")
    if position.cells[square] is None:
        raise IllegalMoveError(square, "square is already empty")

    position.cells[square] = None
    position.side_to_move = position.side_to_move.opposite()
    return position


def is_board_full(position: Position) -> bool:
    """True when no square is empty."""
    return None not in position.cells
