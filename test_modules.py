"""
Tests for the Simtic engine modules.
Run with pytest from the repository root.
"""

import pytest

from simtic.config import Difficulty, INF
from simtic.errors import IllegalMoveError, NoMovesError
from simtic.position import Position, Player, apply_move, undo_move, is_board_full
from simtic.move_validator import MoveValidator, generate_moves
from simtic.win_checker import WINNING_LINES, is_terminal, winner, winning_line
from simtic.evaluator import evaluate
from simtic.ai_player import AIPlayer, SearchStats, search, pick_move


# Full board, nobody has three in a row
DRAWN_BOARD = "XOXXOOOXX"

SAMPLE_POSITIONS = [
    ".........",
    "X........",
    "X...O....",
    "XX.OO....",
    "X.X.O.XOO",
    ".X.OXOX.O",
]


def play_out(x_depth: int, o_depth: int) -> Position:
    """Let the engine play both sides from the empty board."""
    position = Position.new()
    depths = {Player.X: x_depth, Player.O: o_depth}
    while not is_board_full(position) and not is_terminal(position):
        apply_move(position, pick_move(position, depths[position.side_to_move]))
    return position


# ==================== POSITION ====================

def test_new_position_is_empty_with_x_to_move():
    position = Position.new()
    assert position.cells == [None] * 9
    assert position.side_to_move is Player.X
    assert position.empty_count() == 9


def test_from_string_infers_side_to_move():
    assert Position.from_string("X........").side_to_move is Player.O
    assert Position.from_string("X...O....").side_to_move is Player.X
    assert Position.from_string("X........", Player.X).side_to_move is Player.X


def test_from_string_round_trips():
    position = Position.from_string("XX.OO....")
    assert position.cells[:5] == [Player.X, Player.X, None, Player.O, Player.O]
    assert position.to_string() == "XX.OO...."


def test_from_string_rejects_bad_input():
    with pytest.raises(ValueError):
        Position.from_string("XO")
    with pytest.raises(ValueError):
        Position.from_string("XO?......")


def test_render_draws_grid():
    lines = Position.from_string("XX.OO....").render().splitlines()
    assert lines == [
        "+---+---+---+",
        "| X | X |   |",
        "+---+---+---+",
        "| O | O |   |",
        "+---+---+---+",
        "|   |   |   |",
        "+---+---+---+",
    ]


def test_apply_move_fills_square_and_flips_side():
    position = Position.new()
    result = apply_move(position, 4)
    assert result is position
    assert position.cells[4] is Player.X
    assert position.side_to_move is Player.O


@pytest.mark.parametrize("text", SAMPLE_POSITIONS)
def test_apply_undo_round_trip(text):
    position = Position.from_string(text)
    for square in generate_moves(position):
        before = position.copy()
        undo_move(apply_move(position, square), square)
        assert position == before


def test_apply_move_rejects_taken_square():
    position = Position.from_string("X........")
    with pytest.raises(IllegalMoveError):
        apply_move(position, 0)
    # Still usable as a ValueError
    with pytest.raises(ValueError):
        apply_move(position, 0)
    assert position == Position.from_string("X........")


@pytest.mark.parametrize("square", [-1, 9, 42])
def test_apply_move_rejects_squares_off_the_board(square):
    with pytest.raises(IllegalMoveError):
        apply_move(Position.new(), square)


def test_undo_move_rejects_empty_square():
    with pytest.raises(IllegalMoveError):
        undo_move(Position.new(), 3)


def test_is_board_full():
    assert is_board_full(Position.from_string(DRAWN_BOARD))
    assert not is_board_full(Position.from_string("XOXXOOOX."))
    assert not is_board_full(Position.new())


# ==================== MOVE GENERATION ====================

def test_generate_moves_lists_empty_squares_in_order():
    assert generate_moves(Position.new()) == list(range(9))
    assert generate_moves(Position.from_string("X.O.X....")) == [1, 3, 5, 6, 7, 8]


@pytest.mark.parametrize("text", SAMPLE_POSITIONS + [DRAWN_BOARD])
def test_generate_moves_matches_empty_count(text):
    position = Position.from_string(text)
    moves = generate_moves(position)
    assert len(moves) == position.empty_count()
    assert moves == sorted(moves)
    assert all(position.cells[sq] is None for sq in moves)


def test_generate_moves_on_full_board_is_empty():
    assert generate_moves(Position.from_string(DRAWN_BOARD)) == []


def test_validator_accepts_empty_square():
    result = MoveValidator().validate_move(Position.new(), "4")
    assert result.is_valid
    assert result.square == 4


def test_validator_rejects_taken_square():
    result = MoveValidator().validate_move(Position.from_string("....X...."), "4")
    assert not result.is_valid
    assert result.square == 4
    assert result.error_message == "That square is taken."


@pytest.mark.parametrize("key", ["a", "9", "", "12", "-1", "²", "٣"])
def test_validator_rejects_keys_that_are_not_squares(key):
    result = MoveValidator().validate_move(Position.new(), key)
    assert not result.is_valid
    assert result.square is None


# ==================== WIN CHECKER ====================

def test_there_are_eight_winning_lines():
    assert len(WINNING_LINES) == 8
    assert len(set(WINNING_LINES)) == 8


@pytest.mark.parametrize("line", WINNING_LINES)
def test_is_terminal_detects_every_line(line):
    for player in Player:
        cells = [None] * 9
        for square in line:
            cells[square] = player
        # The owner of the line just moved
        position = Position(cells=cells, side_to_move=player.opposite())
        assert is_terminal(position)
        assert winner(position) is player
        assert winning_line(position) == line


def test_is_terminal_ignores_line_of_side_to_move():
    position = Position.from_string("XXX......", Player.X)
    assert not is_terminal(position)
    # The line still exists for display purposes
    assert winner(position) is Player.X


@pytest.mark.parametrize("text", SAMPLE_POSITIONS + [DRAWN_BOARD])
def test_is_terminal_false_without_three_in_a_row(text):
    position = Position.from_string(text)
    assert not is_terminal(position)
    assert winning_line(position) is None


def test_full_board_without_line_is_a_draw():
    position = Position.from_string(DRAWN_BOARD)
    assert is_board_full(position)
    assert not is_terminal(position)
    assert search(position, 9) == 0
    assert search(position, 0) == 0


# ==================== EVALUATION ====================

def test_evaluate_empty_board_is_zero():
    assert evaluate(Position.new()) == 0


def test_evaluate_counts_open_two_in_a_row():
    # Row 0 needs only square 2
    assert evaluate(Position.from_string("XX.OO....")) == 1


def test_evaluate_penalises_blocked_two_in_a_row():
    assert evaluate(Position.from_string("XXOO.....")) == -1


def test_evaluate_sums_all_lines():
    # Two open lines for X, one blocked diagonal
    assert evaluate(Position.from_string("X.X.O.XOO")) == 1


def test_evaluate_is_relative_to_side_to_move():
    position = Position.from_string("XX.OO.X..")
    assert position.side_to_move is Player.O
    assert evaluate(position) == 1


# ==================== SEARCH ====================

def test_search_returns_inf_when_x_has_won():
    stats = SearchStats()
    assert search(Position.from_string("XXXOO...."), 5, stats) == INF
    assert stats.nodes == 1


def test_search_returns_minus_inf_when_o_has_won():
    position = Position.from_string("OOOXX.X..")
    assert position.side_to_move is Player.X
    assert search(position, 5) == -INF


def test_search_at_depth_zero_uses_evaluation_from_x_side():
    # X to move: evaluation is kept
    assert search(Position.from_string("XX.OO...."), 0) == 1
    # O to move: evaluation is negated
    assert search(Position.from_string("XX.OO.X.."), 0) == -1


@pytest.mark.parametrize("text", SAMPLE_POSITIONS)
def test_search_heuristic_never_reaches_inf(text):
    position = Position.from_string(text)
    assert -INF < search(position, 0) < INF


@pytest.mark.parametrize("text", SAMPLE_POSITIONS[1:])
@pytest.mark.parametrize("depth", [0, 1, 3, 9, 20])
def test_search_is_bounded_and_restores_position(text, depth):
    position = Position.from_string(text)
    before = position.copy()
    assert -INF <= search(position, depth) <= INF
    assert position == before


def test_search_counts_nodes():
    for depth, expected in [(0, 1), (1, 10), (2, 82)]:
        stats = SearchStats()
        search(Position.new(), depth, stats)
        assert stats.nodes == expected


def test_search_rejects_negative_depth():
    with pytest.raises(ValueError):
        search(Position.new(), -1)


def test_every_opening_is_a_draw_with_full_search():
    for square in range(9):
        position = apply_move(Position.new(), square)
        assert search(position, 9) == 0


def test_search_sees_win_inside_horizon():
    # X completes row 0 or column 0 with the next move
    position = Position.from_string("X.X.O.XOO")
    assert search(position, 1) == INF
    assert search(position, 0) == 1


# ==================== MOVE SELECTION ====================

@pytest.mark.parametrize("depth", [0, 1, 2, 3, 9])
def test_pick_move_takes_immediate_win(depth):
    assert pick_move(Position.from_string("XX.OO...."), depth) == 2


@pytest.mark.parametrize("depth", [0, 1, 9])
def test_pick_move_takes_immediate_win_for_o(depth):
    position = Position.from_string("OO.XX.X..")
    assert position.side_to_move is Player.O
    assert pick_move(position, depth) == 2


@pytest.mark.parametrize("depth", [1, 9])
def test_pick_move_blocks_opponent(depth):
    assert pick_move(Position.from_string("XX..O...."), depth) == 2


def test_pick_move_blocks_threat_past_lowest_square():
    # O must block at 5; squares 0, 1 and 2 come first
    assert pick_move(Position.from_string("...XX.O.."), 1) == 5


def test_pick_move_breaks_ties_on_lowest_square():
    # Squares 2 and 7 both win; square 0 does not
    position = Position.from_string(".X.OXOX.O")
    assert position.side_to_move is Player.X
    assert pick_move(position, 0) == 2
    assert pick_move(position, 9) == 2


def test_pick_move_keeps_first_move_when_all_scores_equal():
    assert pick_move(Position.new(), 0) == 0


def test_pick_move_opening_with_full_search():
    stats = SearchStats()
    move = pick_move(Position.new(), Difficulty.HARD.depth, stats)
    # Every opening draws, so the first corner is kept
    assert move == 0
    assert stats.nodes > 0


def test_pick_move_counts_nodes():
    stats = SearchStats()
    pick_move(Position.new(), 1, stats)
    assert stats.nodes == 9 * 9


@pytest.mark.parametrize("text", SAMPLE_POSITIONS)
def test_pick_move_returns_legal_move_and_restores_position(text):
    position = Position.from_string(text)
    before = position.copy()
    move = pick_move(position, 3)
    assert move in generate_moves(position)
    assert position == before


def test_pick_move_on_full_board_raises():
    with pytest.raises(NoMovesError):
        pick_move(Position.from_string(DRAWN_BOARD), 9)


def test_pick_move_rejects_negative_depth():
    with pytest.raises(ValueError):
        pick_move(Position.new(), -2)


def test_full_depth_self_play_is_a_draw():
    position = play_out(9, 9)
    assert is_board_full(position)
    assert winner(position) is None


@pytest.mark.parametrize("weak_depth", [0, 1, 3])
def test_full_depth_never_loses(weak_depth):
    # Hard as X
    assert winner(play_out(9, weak_depth)) is not Player.O
    # Hard as O
    assert winner(play_out(weak_depth, 9)) is not Player.X


# ==================== AI PLAYER ====================

def test_difficulty_depths():
    assert Difficulty.HARD.depth == 9
    assert Difficulty.MEDIUM.depth == 3
    assert Difficulty.EASY.depth == 1


@pytest.mark.parametrize("key,expected", [
    ("h", Difficulty.HARD),
    ("M", Difficulty.MEDIUM),
    ("e", Difficulty.EASY),
])
def test_difficulty_from_key(key, expected):
    assert Difficulty.from_key(key) is expected


def test_difficulty_from_unknown_key():
    with pytest.raises(ValueError):
        Difficulty.from_key("x")


def test_ai_player_depth_from_difficulty_or_override():
    assert AIPlayer(Player.O, Difficulty.MEDIUM).depth == 3
    assert AIPlayer(Player.O, Difficulty.MEDIUM, depth=0).depth == 0
    with pytest.raises(ValueError):
        AIPlayer(Player.O, depth=-1)


def test_ai_player_set_difficulty():
    ai = AIPlayer(Player.O)
    ai.set_difficulty("easy")
    assert ai.difficulty is Difficulty.EASY
    assert ai.depth == 1


def test_ai_player_takes_the_win():
    ai = AIPlayer(Player.X, Difficulty.EASY)
    assert ai.get_best_move(Position.from_string("XX.OO....")) == 2
    assert ai.moves_evaluated > 0


def test_ai_player_blocks():
    ai = AIPlayer(Player.O, Difficulty.HARD)
    assert ai.get_best_move(Position.from_string("XX..O....")) == 2


def test_ai_player_waits_for_its_turn():
    ai = AIPlayer(Player.O)
    assert ai.get_best_move(Position.new()) is None
    assert ai.moves_evaluated == 0


def test_ai_player_on_full_board():
    ai = AIPlayer(Player.O)
    assert ai.get_best_move(Position.from_string(DRAWN_BOARD)) is None
