import pytest

from xo.game import (
    DRAW,
    EMPTY,
    IN_PROGRESS,
    O,
    WIN,
    WIN_LINES,
    X,
    GameResult,
    IllegalMoveError,
    apply_move,
    board_from_string,
    board_to_string,
    evaluate,
    format_board,
    is_legal_board,
    legal_moves,
    side_to_move,
    winners_set,
)


def line_board(line, player):
    board = [EMPTY] * 9
    for i in line:
        board[i] = player
    return board


@pytest.mark.parametrize("player", [X, O])
@pytest.mark.parametrize("line", WIN_LINES)
def test_evaluate_detects_every_line(line, player):
    result = evaluate(line_board(line, player))
    assert result == GameResult.win(player, line)
    assert result.status == WIN
    assert result.is_terminal


def test_first_line_in_order_wins_tie():
    # Row 0 and column 0 both complete
    board = board_from_string("XXXX..X..")
    assert evaluate(board).line == (0, 1, 2)


def test_tie_between_players_goes_to_earlier_line():
    board = board_from_string("OOOXXX...")
    result = evaluate(board)
    assert result.winner == O
    assert result.line == (0, 1, 2)


@pytest.mark.parametrize("text", ["XOXXOOOXX", "XOXOXOOXO", "OXOOXXXOX"])
def test_full_board_without_line_is_draw(text):
    result = evaluate(board_from_string(text))
    assert result == GameResult.draw()
    assert result.status == DRAW
    assert result.winner == EMPTY
    assert result.line is None


def test_full_board_with_line_is_win_not_draw():
    result = evaluate(board_from_string("XXXOOXOXO"))
    assert result.status == WIN
    assert result.winner == X


@pytest.mark.parametrize("text", [".........", "X........", "XO.......", "XOXXOO.XO"])
def test_open_board_without_line_is_in_progress(text):
    result = evaluate(board_from_string(text))
    assert result.status == IN_PROGRESS
    assert not result.is_terminal


def test_evaluate_accepts_tuples():
    assert evaluate(tuple(line_board((2, 4, 6), O))).line == (2, 4, 6)


@pytest.mark.parametrize("board", [[EMPTY] * 8, [EMPTY] * 10, [2] + [EMPTY] * 8, ["X"] + [EMPTY] * 8])
def test_evaluate_rejects_malformed_board(board):
    with pytest.raises(ValueError):
        evaluate(board)


def test_apply_move_returns_new_board():
    board = [EMPTY] * 9
    new = apply_move(board, X, 4)
    assert new[4] == X
    assert board == [EMPTY] * 9


@pytest.mark.parametrize("action", [0, -1, 9])
def test_apply_move_rejects_illegal_cells(action):
    board = board_from_string("X........")
    with pytest.raises(IllegalMoveError):
        apply_move(board, O, action)


def test_illegal_move_error_is_value_error():
    assert issubclass(IllegalMoveError, ValueError)


def test_legal_moves_and_side_to_move():
    board = board_from_string("X...O...X")
    assert legal_moves(board) == [1, 2, 3, 5, 6, 7]
    assert side_to_move(board) == O
    assert side_to_move([EMPTY] * 9) == X


def test_legal_board_checks():
    assert is_legal_board(board_from_string("XO......."))
    assert not is_legal_board(board_from_string("OO......."))
    assert not is_legal_board(board_from_string("XXXOOO..."))
    assert winners_set(board_from_string("XXXOOO...")) == {X, O}


def test_board_string_helpers():
    board = board_from_string("xo_-. ...")
    assert board == [X, O] + [EMPTY] * 7
    assert board_to_string(board) == "XO......."
    with pytest.raises(ValueError):
        board_from_string("XO")
    with pytest.raises(ValueError):
        board_from_string("XOZ......")


def test_format_board():
    text = format_board(board_from_string("XO......X"))
    assert text.splitlines() == [
        " X | O |   ",
        "---+---+---",
        "   |   |   ",
        "---+---+---",
        "   |   | X ",
    ]
