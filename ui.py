"""
Simtic UI
A graphical interface for playing against the AI using Tkinter.

Shows:
- The board as a 3x3 grid of buttons (click to move)
- Game status and the AI's last move
- Difficulty level and side selection
"""

import logging
import threading
import tkinter as tk
from tkinter import ttk
from typing import Optional

from simtic.config import Difficulty, EngineConfig
from simtic.position import Position, Player, apply_move, is_board_full
from simtic.move_validator import MoveValidator
from simtic.win_checker import is_terminal, winning_line
from simtic.ai_player import AIPlayer

logger = logging.getLogger(__name__)

DIFFICULTY_COLORS = {
    Difficulty.EASY: "#4ade80",
    Difficulty.MEDIUM: "#fbbf24",
    Difficulty.HARD: "#f87171",
}

MARK_COLORS = {
    Player.X: "#10b981",
    Player.O: "#f87171",
}

CELL_BG = "#16213e"
WIN_BG = "#065f46"


class SimticUI:
    """
    Main UI class for Simtic.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.HARD,
        human_first: bool = True,
        depth: Optional[int] = None
    ):
        """Initialize the UI."""
        self.difficulty = difficulty
        self.depth = depth
        self.human_player = Player.X if human_first else Player.O

        self.position = Position.new()
        self.validator = MoveValidator()
        self.ai = AIPlayer(self.human_player.opposite(), difficulty, depth)
        self.ai_thinking = False
        self.is_game_over = False

        # Bumped on every new game, so a stale AI result can be dropped
        self.game_id = 0

        self._create_ui()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Simtic")
        self.root.configure(bg='#1a1a2e')
        self.root.resizable(False, False)

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('Move.TLabel', font=('Segoe UI', 11), foreground='#00ff88')

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Board section
        ttk.Label(main_frame, text="Game Board", style='Title.TLabel').pack(pady=(0, 10))

        board_frame = ttk.Frame(main_frame)
        board_frame.pack(pady=10)

        size = EngineConfig.BOARD_SIZE
        self.board_cells = []
        for square in range(EngineConfig.SQUARES_MAX):
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=4,
                height=2,
                bg=CELL_BG,
                fg='white',
                activebackground='#1f2b50',
                relief='ridge',
                borderwidth=2,
                command=lambda sq=square: self._on_cell_click(sq)
            )
            cell.grid(row=square // size, column=square % size, padx=2, pady=2)
            self.board_cells.append(cell)

        # Game status section
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=15)

        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        self.ai_move_label = ttk.Label(main_frame, text="", style='Move.TLabel')
        self.ai_move_label.pack(pady=5)

        # Difficulty section
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=15)
        ttk.Label(main_frame, text="Difficulty", style='Title.TLabel').pack()

        diff_frame = ttk.Frame(main_frame)
        diff_frame.pack(pady=10)

        self.diff_buttons = {}
        for difficulty in (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD):
            btn = tk.Button(
                diff_frame,
                text=difficulty.name.capitalize(),
                font=('Segoe UI', 10, 'bold'),
                width=8,
                activebackground=DIFFICULTY_COLORS[difficulty],
                command=lambda d=difficulty: self._set_difficulty(d)
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.diff_buttons[difficulty] = btn
        self._update_difficulty_buttons()

        # Side selection
        side_frame = ttk.Frame(main_frame)
        side_frame.pack(pady=5)

        self.side_var = tk.StringVar(value=self.human_player.value)
        for player in (Player.X, Player.O):
            label = "You play X (first)" if player is Player.X else "You play O"
            ttk.Radiobutton(
                side_frame,
                text=label,
                value=player.value,
                variable=self.side_var
            ).pack(side=tk.LEFT, padx=5)

        # Control buttons
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=15)

        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#10b981',
            fg='white',
            width=12,
            command=self._new_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="Quit",
            font=('Segoe UI', 11, 'bold'),
            bg='#ef4444',
            fg='white',
            width=12,
            command=self._quit
        ).pack(side=tk.LEFT, padx=5)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _set_difficulty(self, difficulty: Difficulty):
        """Set the AI difficulty level. Takes effect on the AI's next move."""
        self.difficulty = difficulty
        self.depth = None
        self.ai.set_difficulty(difficulty)
        self._update_difficulty_buttons()
        logger.info("Difficulty set to: %s", difficulty.name)

    def _update_difficulty_buttons(self):
        for difficulty, btn in self.diff_buttons.items():
            if difficulty is self.difficulty:
                btn.configure(bg=DIFFICULTY_COLORS[difficulty], fg='black')
            else:
                btn.configure(bg='#2d3748', fg='white')

    def _new_game(self):
        """Reset the board and start a game with the selected side."""
        self.game_id += 1
        self.position = Position.new()
        self.human_player = Player(self.side_var.get())
        self.ai = AIPlayer(self.human_player.opposite(), self.difficulty, self.depth)
        self.ai_thinking = False
        self.is_game_over = False

        for cell in self.board_cells:
            cell.configure(text="", bg=CELL_BG)
        self.ai_move_label.configure(text="")

        self._update_status()
        if self.position.side_to_move is not self.human_player:
            self._start_ai_move()

    def _on_cell_click(self, square: int):
        """Handle a click on the board."""
        if self.is_game_over or self.ai_thinking:
            return
        if self.position.side_to_move is not self.human_player:
            return

        result = self.validator.validate_square(self.position, square)
        if not result.is_valid:
            self.status_label.configure(text=result.error_message)
            return

        self._play(square)
        if not self.is_game_over:
            self._start_ai_move()

    def _start_ai_move(self):
        """Search for the AI's move on a worker thread."""
        self.ai_thinking = True
        self.ai_move_label.configure(text="Calculating...")

        # The worker searches its own copy; the board stays with the UI thread
        snapshot = self.position.copy()
        threading.Thread(
            target=self._search_ai_move,
            args=(self.ai, snapshot, self.game_id),
            daemon=True
        ).start()

    def _search_ai_move(self, ai: AIPlayer, snapshot: Position, game_id: int):
        """Runs in a background thread."""
        move = ai.get_best_move(snapshot)
        nodes = ai.moves_evaluated
        self.root.after(0, lambda: self._finish_ai_move(move, nodes, game_id))

    def _finish_ai_move(self, move: Optional[int], nodes: int, game_id: int):
        """Play the AI's move (runs on the UI thread)."""
        if game_id != self.game_id:
            return  # A new game was started while the AI was thinking
        self.ai_thinking = False
        if move is None:
            return

        self.ai_move_label.configure(text=f"AI chose square {move} ({nodes} nodes)")
        self._play(move)

    def _play(self, square: int):
        """Apply a move and refresh the board."""
        mover = self.position.side_to_move
        apply_move(self.position, square)

        self.board_cells[square].configure(text=mover.value, fg=MARK_COLORS[mover])

        if is_terminal(self.position) or is_board_full(self.position):
            self.is_game_over = True
        self._update_status()

    def _update_status(self):
        """Update the status label and highlight a winning line."""
        if is_terminal(self.position):
            winner = self.position.side_to_move.opposite()
            name = "You" if winner is self.human_player else "AI"
            self.status_label.configure(text=f"{name} WIN{'S' if name == 'AI' else ''}!")
            for square in winning_line(self.position) or ():
                self.board_cells[square].configure(bg=WIN_BG)
        elif is_board_full(self.position):
            self.status_label.configure(text="It's a DRAW!")
        elif self.position.side_to_move is self.human_player:
            self.status_label.configure(text=f"Your turn ({self.human_player.value})")
        else:
            self.status_label.configure(text=f"AI's turn ({self.human_player.opposite().value})")

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Start the first game and run the UI main loop."""
        self._new_game()
        self.root.mainloop()
