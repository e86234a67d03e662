"""
Engine configuration for Simtic.
Board constants, search bounds, and the difficulty tiers.
"""

from enum import Enum


class EngineConfig:
    """
    Configuration class for the engine.
    These values define the game, they are not tuning knobs.
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_SIZE = 3
    SQUARES_MAX = BOARD_SIZE * BOARD_SIZE  # 9 squares, indexed 0 - 8

    # ==================== SEARCH SETTINGS ====================
    # Best possible score for a position. Larger than any heuristic value
    # (8 lines, at most +-1 each).
    INF = 100

    # Score of a drawn (full) board
    DRAW_SCORE = 0

    # ==================== DISPLAY SETTINGS ====================
    X_MARK = "X"
    O_MARK = "O"
    EMPTY_MARK = " "


INF = EngineConfig.INF


class Difficulty(Enum):
    """AI difficulty levels. The value is the search depth."""
    EASY = 1      # One move of look-ahead
    MEDIUM = 3
    HARD = 9      # Full tree, optimal play

    @property
    def depth(self) -> int:
        return self.value

    @classmethod
    def from_key(cls, key: str) -> "Difficulty":
        """
        Map a menu key to a difficulty.

        Args:
            key: 'h', 'm' or 'e' (case-insensitive).

        Returns:
            The matching Difficulty.

        Raises:
            ValueError: If the key does not name a difficulty.
        """
        keys = {"h": cls.HARD, "m": cls.MEDIUM, "e": cls.EASY}
        try:
            return keys[key.lower()]
        except KeyError:
            raise ValueError(f"Unknown difficulty key: {key!r}") from None
