"""
Board rules and outcome evaluation.

Board representation: sequence of 9 ints, row-major (index = row * 3 + col)
  - 0: empty
  - +1: X
  - -1: O

Player: +1 (X) or -1 (O). X always moves first.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

EMPTY = 0
X = +1
O = -1

PLAYERS = (X, O)
CENTER = 4

SYMBOLS = {EMPTY: " ", X: "X", O: "O"}

# Winning lines (rows, columns, diagonals). Order is the tie-break when
# several lines are complete at once.
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),              # diagonals
)

IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"


class IllegalMoveError(ValueError):
    """Raised when a mark is placed on an occupied or nonexistent cell."""


@dataclass(frozen=True)
class GameResult:
    """Outcome of a board: in progress, a win along `line`, or a draw."""
    status: str
    winner: int = EMPTY
    line: Optional[Tuple[int, int, int]] = None

    @classmethod
    def in_progress(cls) -> "GameResult":
        return cls(IN_PROGRESS)

    @classmethod
    def win(cls, player: int, line: Tuple[int, int, int]) -> "GameResult":
        return cls(WIN, player, tuple(line))

    @classmethod
    def draw(cls) -> "GameResult":
        return cls(DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.status != IN_PROGRESS


def check_board(board: Sequence[int]) -> None:
    """Raise ValueError unless board is 9 cells of EMPTY/X/O."""
    if len(board) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(board)}")
    for i, v in enumerate(board):
        if v not in SYMBOLS:
            raise ValueError(f"Invalid cell value {v!r} at index {i}")


def check_player(player: int) -> None:
    """Raise ValueError unless player is X or O."""
    if player not in PLAYERS:
        raise ValueError(f"Player must be X (+1) or O (-1), got {player!r}")


def opponent(player: int) -> int:
    return -player


def winning_line(board: Sequence[int]) -> Optional[Tuple[int, int, int]]:
    """Return the first complete line in WIN_LINES order, or None."""
    for line in WIN_LINES:
        a, b, c = line
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return line
    return None


def _evaluate(board: Sequence[int]) -> GameResult:
    line = winning_line(board)
    if line is not None:
        return GameResult.win(board[line[0]], line)
    if all(v != EMPTY for v in board):
        return GameResult.draw()
    return GameResult.in_progress()


def evaluate(board: Sequence[int]) -> GameResult:
    """
    Determine whether the board is won, drawn or still in progress.

    Works on any well-formed board, including positions that cannot be
    reached by alternating play.

    Returns:
        GameResult with status WIN (winner and line set), DRAW or IN_PROGRESS
    """
    check_board(board)
    return _evaluate(board)


def winners_set(board: Sequence[int]) -> set:
    """Return set of winners (+1, -1, or both if illegal)."""
    wins = set()
    for a, b, c in WIN_LINES:
        s = board[a] + board[b] + board[c]
        if s == 3:
            wins.add(X)
        elif s == -3:
            wins.add(O)
    return wins


def legal_moves(board: Sequence[int]) -> List[int]:
    """Return list of legal move indices (empty squares)."""
    return [i for i, v in enumerate(board) if v == EMPTY]


def apply_move(board: Sequence[int], player: int, action: int) -> List[int]:
    """Apply move and return new board. The input board is left untouched."""
    if not 0 <= action < 9:
        raise IllegalMoveError(f"Cell {action} is off the board")
    if board[action] != EMPTY:
        raise IllegalMoveError(f"Cell {action} is already occupied by {SYMBOLS[board[action]]}")
    new_board = list(board)
    new_board[action] = player
    return new_board


def side_to_move(board: Sequence[int]) -> int:
    """Infer side to move from board state (X plays first)."""
    x_cnt = sum(1 for v in board if v == X)
    o_cnt = sum(1 for v in board if v == O)
    return X if x_cnt == o_cnt else O


def is_legal_board(board: Sequence[int]) -> bool:
    """Check if board respects game rules."""
    x_cnt = sum(1 for v in board if v == X)
    o_cnt = sum(1 for v in board if v == O)

    # X goes first, so x_cnt == o_cnt or x_cnt == o_cnt + 1
    if not (x_cnt == o_cnt or x_cnt == o_cnt + 1):
        return False

    # Can't have both winners
    if len(winners_set(board)) >= 2:
        return False

    return True


def board_from_string(text: str) -> List[int]:
    """
    Parse a 9-character board such as "XX.OO....".

    '.', '_', '-' and ' ' mark empty cells. Marks are case-insensitive.
    """
    marks = {"X": X, "O": O, ".": EMPTY, "_": EMPTY, " ": EMPTY, "-": EMPTY}
    if len(text) != 9:
        raise ValueError(f"Board string must have 9 characters, got {len(text)}")
    try:
        return [marks[ch.upper()] for ch in text]
    except KeyError as e:
        raise ValueError(f"Invalid board character {e.args[0]!r}") from None


def board_to_string(board: Sequence[int]) -> str:
    return "".join("." if v == EMPTY else SYMBOLS[v] for v in board)


def format_board(board: Sequence[int]) -> str:
    """Render the board as a 3-row grid."""
    rows = []
    for r in range(3):
        rows.append(" " + " | ".join(SYMBOLS[board[r * 3 + c]] for c in range(3)) + " ")
    return "\n---+---+---\n".join(rows)
