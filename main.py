"""
Console driver for Simtic.

This script ties together:
- Menus (who moves first, difficulty, play again)
- Single key input from the terminal
- The engine (move validation, win checking, AI)

Run this script to play tic-tac-toe against the computer!
"""

import logging
import sys
from enum import Enum
from typing import Callable, Optional

from simtic.config import Difficulty
from simtic.position import Position, Player, apply_move, is_board_full
from simtic.move_validator import MoveValidator
from simtic.win_checker import is_terminal
from simtic.ai_player import AIPlayer

logger = logging.getLogger(__name__)

# Names used when announcing the result; X moves first like White in chess
PLAYER_NAMES = {
    Player.X: "White (X)",
    Player.O: "Black (O)",
}


class MenuState(Enum):
    """States of the console menu loop."""
    MOVE_FIRST = "move_first"
    DIFFICULTY = "difficulty"
    IN_GAME = "in_game"
    PLAY_AGAIN = "play_again"
    EXIT = "exit"


class KeyReader:
    """
    Reads one key press at a time.

    When the stream is a terminal it is switched to cbreak mode for the
    duration of the `with` block, so a key is read without waiting for
    ENTER. Line breaks are skipped.
    """

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin
        self._saved_attrs = None

    def __enter__(self) -> "KeyReader":
        if self.stream.isatty():
            import termios
            import tty

            fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._saved_attrs is not None:
            import termios

            termios.tcsetattr(self.stream.fileno(), termios.TCSANOW, self._saved_attrs)
            self._saved_attrs = None

    def read_key(self) -> str:
        """
        Read the next key.

        Raises:
            EOFError: When the input is closed.
        """
        while True:
            char = self.stream.read(1)
            if char == "":
                raise EOFError("input closed")
            if char not in "\r\n":
                return char


class ConsoleGame:
    """
    Menu loop and game loop for one human against the AI.

    Game flow:
    1. Ask who moves first (X always moves first)
    2. Ask for the difficulty (search depth)
    3. Alternate human and AI moves until someone wins or the board is full
    4. Offer another game
    """

    def __init__(
        self,
        read_key: Callable[[], str],
        human_first: Optional[bool] = None,
        difficulty: Optional[Difficulty] = None,
        depth: Optional[int] = None
    ):
        """
        Initialize the console game.

        Args:
            read_key: Returns the next key press; raises EOFError when input ends.
            human_first: Skip the first menu with this answer.
            difficulty: Skip the difficulty menu with this tier.
            depth: Explicit search depth; skips the difficulty menu too.
        """
        self.read_key = read_key
        self.human_first = human_first
        self.difficulty = difficulty
        self.fixed_depth = depth

        self.validator = MoveValidator()

        # Chosen in the menus
        self.human_player = Player.X
        self.depth = Difficulty.HARD.depth

        # Result of the last finished game (None for a draw)
        self.last_winner: Optional[Player] = None
        self.games_played = 0

    def run(self):
        """Run menus and games until the player quits or input ends."""
        state = MenuState.MOVE_FIRST
        print("\nStarting new game...")

        try:
            while state is not MenuState.EXIT:
                state = self.step(state)
        except EOFError:
            logger.debug("Input closed, leaving the menu loop")

        print("\nGoodbye!")

    def step(self, state: MenuState) -> MenuState:
        """
        Handle one state of the menu loop.

        Args:
            state: Current state.

        Returns:
            The next state. An unrecognised key returns the same state.
        """
        if state is MenuState.MOVE_FIRST:
            return self._choose_first_mover()
        if state is MenuState.DIFFICULTY:
            return self._choose_difficulty()
        if state is MenuState.IN_GAME:
            self.last_winner = self.play_game(self.human_player, self.depth)
            self.games_played += 1
            return MenuState.PLAY_AGAIN
        if state is MenuState.PLAY_AGAIN:
            return self._choose_play_again()
        return MenuState.EXIT

    def _prompt(self, text: str) -> str:
        print(text, end="", flush=True)
        return self.read_key().lower()

    def _choose_first_mover(self) -> MenuState:
        if self.human_first is None:
            key = self._prompt("\nWould you like to move first? (y/n) ")
            if key == "y":
                human_first = True
            elif key == "n":
                human_first = False
            else:
                return MenuState.MOVE_FIRST
        else:
            human_first = self.human_first

        self.human_player = Player.X if human_first else Player.O
        return MenuState.DIFFICULTY

    def _choose_difficulty(self) -> MenuState:
        if self.fixed_depth is not None:
            self.depth = self.fixed_depth
            return MenuState.IN_GAME

        difficulty = self.difficulty
        if difficulty is None:
            key = self._prompt("\nChoose difficulty ([h]ard/[m]edium/[e]asy): ")
            try:
                difficulty = Difficulty.from_key(key)
            except ValueError:
                return MenuState.DIFFICULTY

        self.depth = difficulty.depth
        return MenuState.IN_GAME

    def _choose_play_again(self) -> MenuState:
        key = self._prompt("\nPlay again? (y/n) ")
        if key == "y":
            print("\nStarting new game...")
            return MenuState.MOVE_FIRST
        if key == "n":
            return MenuState.EXIT
        return MenuState.PLAY_AGAIN

    def play_game(self, human_player: Player, depth: int) -> Optional[Player]:
        """
        Play one game.

        Args:
            human_player: The side the human plays.
            depth: Search depth for the AI.

        Returns:
            The winner, or None for a draw.
        """
        position = Position.new()
        ai = AIPlayer(human_player.opposite(), depth=depth)
        winner: Optional[Player] = None

        # Keep making moves until the board is filled up or someone wins
        while not is_board_full(position):
            if position.side_to_move is human_player:
                square = self._human_move(position)
            else:
                square = self._ai_move(position, ai)

            apply_move(position, square)

            if is_terminal(position):
                winner = position.side_to_move.opposite()
                break

        print()
        print(position.render())

        if winner is None:
            print("Draw!")
        else:
            print(f"{PLAYER_NAMES[winner]} wins!")
            print("You won the game!" if winner is human_player else "AI won the game!")

        return winner

    def _human_move(self, position: Position) -> int:
        """Prompt until the human enters an empty square."""
        print()
        print(position.render())

        while True:
            key = self._prompt("Enter square 0 - 8: ")
            print()
            result = self.validator.validate_move(position, key)
            if result.is_valid:
                return result.square
            # Only complain about taken squares; other keys just re-prompt
            if result.square is not None:
                print(result.error_message)

    def _ai_move(self, position: Position, ai: AIPlayer) -> int:
        """Let the AI choose a move and report the search."""
        print("Deciding best move... ")
        moves = ai.candidate_moves(position)
        print("Possible moves: " + " ".join(str(sq) for sq in moves))

        square = ai.get_best_move(position)
        print(f"After examining {ai.moves_evaluated} nodes, best move is: {square}")
        print(f"AI chose square {square}")
        return square


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic-tac-toe against a minimax AI")
    parser.add_argument(
        "--gui",
        action="store_true",
        help="Open the Tkinter window instead of playing in the terminal"
    )
    first = parser.add_mutually_exclusive_group()
    first.add_argument(
        "--human-first",
        dest="human_first",
        action="store_const",
        const=True,
        help="Play X and move first (skips the menu)"
    )
    first.add_argument(
        "--ai-first",
        dest="human_first",
        action="store_const",
        const=False,
        help="Let the AI play X and move first (skips the menu)"
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        help="AI difficulty (skips the menu)"
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Explicit search depth, overrides --difficulty"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    if args.depth is not None and args.depth < 0:
        parser.error("--depth must be non-negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s: %(message)s"
    )

    difficulty = Difficulty[args.difficulty.upper()] if args.difficulty else None

    if args.gui:
        from ui import SimticUI
        ui = SimticUI(
            difficulty=difficulty or Difficulty.HARD,
            human_first=args.human_first if args.human_first is not None else True,
            depth=args.depth
        )
        ui.run()
        return

    try:
        with KeyReader() as reader:
            game = ConsoleGame(
                reader.read_key,
                human_first=args.human_first,
                difficulty=difficulty,
                depth=args.depth
            )
            game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")


if __name__ == "__main__":
    main()
