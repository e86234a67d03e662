"""
Simtic
======
Tic-tac-toe against a computer opponent that picks its moves with a
depth-limited minimax search.

Squares are numbered 0 - 8, row by row. X moves first and is the
maximizing side.
"""

__version__ = "1.0.0"

from .config import EngineConfig, Difficulty, INF
from .errors import SimticError, IllegalMoveError, NoMovesError
from .position import Position, Player, apply_move, undo_move, is_board_full
from .move_validator import MoveValidator, ValidationResult, generate_moves
from .win_checker import WINNING_LINES, is_terminal, winner, winning_line
from .evaluator import evaluate
from .ai_player import AIPlayer, SearchStats, search, pick_move
