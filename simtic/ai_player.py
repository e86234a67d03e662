"""
AI player for Simtic.
Uses the minimax algorithm, bounded by a search depth, to choose a move.
"""

import logging
from typing import Optional, List, Union
from dataclasses import dataclass

from .config import EngineConfig, Difficulty
from .errors import NoMovesError
from .evaluator import evaluate
from .move_validator import generate_moves
from .position import Position, Player, apply_move, undo_move, is_board_full
from .win_checker import is_terminal

logger = logging.getLogger(__name__)

INF = EngineConfig.INF


@dataclass
class SearchStats:
    """Search effort, filled in by search() and pick_move()."""
    nodes: int = 0


def search(position: Position, depth: int, stats: Optional[SearchStats] = None) -> int:
    """
    Minimax value of a position.

    Scores are always from X's point of view: X (maximizing) looks for the
    highest score, O (minimizing) for the lowest.

    Args:
        position: Position to evaluate. Changed during the search but
                  restored before returning.
        depth: How many more moves to look ahead. 0 means just evaluate.
        stats: Optional accumulator; nodes is incremented once per call.

    Returns:
        -INF or INF for a decided game, 0 for a draw, otherwise a value
        strictly between -INF and INF.
    """
    if depth < 0:
        raise ValueError(f"Search depth must be non-negative, got {depth}")
    if stats is None:
        stats = SearchStats()
    return _minimax(position, depth, stats)


def _minimax(position: Position, depth: int, stats: SearchStats) -> int:
    stats.nodes += 1
    maximizing = position.side_to_move.is_maximizing

    # If it is X to move in a won position, O made the winning move
    if is_terminal(position):
        return -INF if maximizing else INF

    if is_board_full(position):
        return EngineConfig.DRAW_SCORE

    # Search horizon: fall back to the static evaluation, seen from X
    if depth == 0:
        score = evaluate(position)
        return score if maximizing else -score

    best = -INF if maximizing else INF
    for square in generate_moves(position):
        apply_move(position, square)
        score = _minimax(position, depth - 1, stats)
        undo_move(position, square)
        best = max(best, score) if maximizing else min(best, score)
    return best


def pick_move(position: Position, depth: int, stats: Optional[SearchStats] = None) -> int:
    """
    Choose the best move for the side to move.

    Every legal move is played and searched to the given depth. A move only
    replaces the current best on a strict improvement, so among equal scores
    the lowest square wins.

    Args:
        position: Current position. Restored before returning.
        depth: Search depth passed to search() for every candidate.
        stats: Optional accumulator for the number of nodes searched.

    Returns:
        Square index of the chosen move.

    Raises:
        NoMovesError: If the board is full.
    """
    if depth < 0:
        raise ValueError(f"Search depth must be non-negative, got {depth}")
    if stats is None:
        stats = SearchStats()

    moves = generate_moves(position)
    if not moves:
        raise NoMovesError("No empty squares left to play")

    maximizing = position.side_to_move.is_maximizing

    # Start from the worst score for the mover, so any move improves on it
    best_move = moves[0]
    best_score = -INF if maximizing else INF

    for square in moves:
        apply_move(position, square)
        score = _minimax(position, depth, stats)
        undo_move(position, square)

        if (maximizing and score > best_score) or (not maximizing and score < best_score):
            best_move = square
            best_score = score

    logger.debug(
        "Searched %d nodes at depth %d: best move %d (score %d)",
        stats.nodes, depth, best_move, best_score
    )
    return best_move


class AIPlayer:
    """
    An AI that plays tic-tac-toe with depth-limited minimax.

    On HARD the whole game tree is searched, so the AI never loses.
    """

    def __init__(
        self,
        player: Player = Player.O,
        difficulty: Difficulty = Difficulty.HARD,
        depth: Optional[int] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which side the AI plays (default: O)
            difficulty: Difficulty tier, used for the search depth.
            depth: Explicit search depth; overrides the difficulty.
        """
        self.player = player
        self.difficulty = difficulty
        self.depth = difficulty.depth if depth is None else depth

        if self.depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {self.depth}")

        # Nodes searched for the last move (for reporting)
        self.moves_evaluated = 0

    def set_difficulty(self, difficulty: Union[Difficulty, str]):
        """Switch difficulty, e.g. from a UI button."""
        if isinstance(difficulty, str):
            difficulty = Difficulty[difficulty.upper()]
        self.difficulty = difficulty
        self.depth = difficulty.depth

    def candidate_moves(self, position: Position) -> List[int]:
        """The moves the AI will consider, in search order."""
        return generate_moves(position)

    def get_best_move(self, position: Position) -> Optional[int]:
        """
        Get the best move for the current position.

        Args:
            position: Current position.

        Returns:
            Square of the best move, or None if it is not the AI's turn or
            no moves are available.
        """
        self.moves_evaluated = 0

        # Check if it's our turn
        if position.side_to_move is not self.player:
            logger.warning("It's not %s's turn!", self.player.value)
            return None

        if is_board_full(position):
            logger.warning("No moves available for %s", self.player.value)
            return None

        stats = SearchStats()
        move = pick_move(position, self.depth, stats)
        self.moves_evaluated = stats.nodes

        logger.info(
            "AI (%s) evaluated %d positions at depth %d. Best move: %d",
            self.player.value, self.moves_evaluated, self.depth, move
        )
        return move
