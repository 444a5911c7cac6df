"""
Minimax search for the perfect-play opponent.

best_move() runs an exhaustive depth-weighted minimax: a win for the mover
scores 10 - depth, a loss depth - 10, a draw 0, so the engine prefers quick
wins and slow losses. The exact solver below is a separate, cached
reference used to check the engine's choices.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .game import (
    CENTER,
    EMPTY,
    O,
    X,
    check_board,
    check_player,
    evaluate,
    is_legal_board,
    legal_moves,
    apply_move,
    side_to_move,
    winning_line,
)

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class _Search:
    """
    State for one search: a private working board, a transposition memo
    and a visit counter. Discarded when the search returns.
    """

    def __init__(self, board: Sequence[int], player: int):
        self.board = list(board)
        self.player = player
        # Within one search the depth of a position fixes the side to move,
        # so (board, depth) identifies a node.
        self.memo: Dict[Tuple[Tuple[int, ...], int], int] = {}
        self.positions = 0

    def score(self, depth: int, maximizing: bool) -> int:
        board = self.board
        key = (tuple(board), depth)
        cached = self.memo.get(key)
        if cached is not None:
            return cached
        self.positions += 1

        line = winning_line(board)
        if line is not None:
            if board[line[0]] == self.player:
                value = WIN_SCORE - depth
            else:
                value = depth - WIN_SCORE
        elif EMPTY not in board:
            value = 0
        else:
            mark = self.player if maximizing else -self.player
            value = None
            for i in range(9):
                if board[i] != EMPTY:
                    continue
                board[i] = mark
                s = self.score(depth + 1, not maximizing)
                board[i] = EMPTY
                if value is None or (s > value if maximizing else s < value):
                    value = s

        self.memo[key] = value
        return value


def score_moves(board: Sequence[int], player: int) -> Dict[int, int]:
    """
    Score every empty cell for `player`.

    Args:
        board: Current board state (not modified)
        player: Side to move (+1 or -1)

    Returns:
        {cell_index: score} in ascending index order. Positive scores are
        forced wins, 0 a draw, negative a forced loss.
    """
    check_board(board)
    check_player(player)

    search = _Search(board, player)
    scores: Dict[int, int] = {}
    for i in legal_moves(search.board):
        search.board[i] = player
        scores[i] = search.score(0, False)
        search.board[i] = EMPTY

    logger.debug(f"Scored {len(scores)} moves over {search.positions} positions: {scores}")
    return scores


def best_move(board: Sequence[int], player: int) -> Optional[int]:
    """
    Pick the optimal move for `player`.

    Among empty cells the one with the strictly greatest minimax score is
    chosen, lowest index first on ties, so the result is deterministic.
    On the second move of a game the center is taken without searching.

    Returns:
        Cell index 0-8, or None if the game is already over.
    """
    check_board(board)
    check_player(player)

    if evaluate(board).is_terminal:
        return None

    if sum(1 for v in board if v != EMPTY) == 1 and board[CENTER] == EMPTY:
        return CENTER

    move = None
    best_score = None
    for i, s in score_moves(board, player).items():
        if best_score is None or s > best_score:
            best_score = s
            move = i
    return move


# Cache: (board_tuple, player) -> (value, best_moves_tuple)
_SOLVER_CACHE: Dict[Tuple[Tuple[int, ...], int], Tuple[int, Tuple[int, ...]]] = {}


def minimax_value_and_moves(board: Sequence[int], player: int) -> Tuple[int, List[int]]:
    """
    Compute exact game value and all optimal moves from current state.

    Args:
        board: Current board state
        player: Current player (+1 or -1)

    Returns:
        (value, best_moves) where:
        - value: +1 (win), 0 (draw), -1 (loss) from current player's perspective
        - best_moves: list of actions achieving optimal value
    """
    key = (tuple(board), player)
    if key in _SOLVER_CACHE:
        v, best = _SOLVER_CACHE[key]
        return v, list(best)

    result = evaluate(board)
    if result.is_terminal:
        if result.winner == EMPTY:
            v = 0
        elif result.winner == player:
            v = +1
        else:
            v = -1
        _SOLVER_CACHE[key] = (v, tuple())
        return v, []

    best_v = -2
    best_moves: List[int] = []

    for action in legal_moves(board):
        next_board = apply_move(board, player, action)
        child_v, _ = minimax_value_and_moves(next_board, -player)
        v_here = -child_v  # Negate for opponent's perspective

        if v_here > best_v:
            best_v = v_here
            best_moves = [action]
        elif v_here == best_v:
            best_moves.append(action)

    _SOLVER_CACHE[key] = (best_v, tuple(best_moves))
    return best_v, best_moves


def clear_cache():
    """Clear solver cache (useful for memory management)."""
    _SOLVER_CACHE.clear()


def cache_size() -> int:
    """Return current cache size."""
    return len(_SOLVER_CACHE)


def iter_all_legal_nonterminal_states() -> Iterator[Tuple[List[int], int]]:
    """
    Iterate over all legal non-terminal board states.

    Yields:
        (board, player) tuples for exhaustive evaluation.
    """
    for n in range(3**9):
        # Decode base-3 representation
        x = n
        board = [EMPTY] * 9
        for i in range(9):
            d = x % 3
            x //= 3
            if d == 1:
                board[i] = X
            elif d == 2:
                board[i] = O

        if not is_legal_board(board):
            continue
        if evaluate(board).is_terminal:
            continue

        yield board, side_to_move(board)
