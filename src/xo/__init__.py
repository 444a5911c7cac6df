"""
xo - TicTacToe engine with an unbeatable minimax opponent.

The core is two pure functions: evaluate() decides whether a board is won,
drawn or still in progress, and best_move() returns the optimal cell for
the side to move. GameSession sequences turns and keeps the score.
"""

from .game import (
    EMPTY,
    X,
    O,
    PLAYERS,
    CENTER,
    WIN_LINES,
    IN_PROGRESS,
    WIN,
    DRAW,
    GameResult,
    IllegalMoveError,
    evaluate,
    winning_line,
    legal_moves,
    apply_move,
    side_to_move,
    opponent,
    board_from_string,
    board_to_string,
    format_board,
)
from .minimax import best_move, score_moves, minimax_value_and_moves, iter_all_legal_nonterminal_states
from .scores import ScoreTally, ScoreStore
from .session import SessionConfig, GameSession, HUMAN, AI, MODES
from .eval import (
    play_game,
    eval_vs_random,
    eval_all_opponent_lines,
    eval_solver_agreement_all_states,
)

__version__ = "0.1.0"
__all__ = [
    "EMPTY",
    "X",
    "O",
    "PLAYERS",
    "CENTER",
    "WIN_LINES",
    "IN_PROGRESS",
    "WIN",
    "DRAW",
    "GameResult",
    "IllegalMoveError",
    "evaluate",
    "winning_line",
    "legal_moves",
    "apply_move",
    "side_to_move",
    "opponent",
    "board_from_string",
    "board_to_string",
    "format_board",
    "best_move",
    "score_moves",
    "minimax_value_and_moves",
    "iter_all_legal_nonterminal_states",
    "ScoreTally",
    "ScoreStore",
    "SessionConfig",
    "GameSession",
    "HUMAN",
    "AI",
    "MODES",
    "play_game",
    "eval_vs_random",
    "eval_all_opponent_lines",
    "eval_solver_agreement_all_states",
]
