"""
Evaluation functions.

Tests engine strength against random and exhaustive opponents,
and measures agreement with the exact solver on all legal states.
"""

import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tqdm.auto import tqdm

from .game import EMPTY, O, X, GameResult, evaluate, legal_moves, opponent
from .minimax import best_move, iter_all_legal_nonterminal_states, minimax_value_and_moves

Policy = Callable[[Sequence[int], int], Optional[int]]


def play_game(x_policy: Policy, o_policy: Policy) -> Tuple[GameResult, List[int]]:
    """
    Play one game between two policies.

    Returns:
        (final result, list of cells in the order they were played)
    """
    board = [EMPTY] * 9
    player = X
    moves: List[int] = []

    while True:
        result = evaluate(board)
        if result.is_terminal:
            return result, moves

        policy = x_policy if player == X else o_policy
        action = policy(board, player)
        if action is None or board[action] != EMPTY:
            raise ValueError(f"Policy for {player:+d} returned illegal move {action!r}")

        board[action] = player
        moves.append(action)
        player = opponent(player)


def random_policy(rng: random.Random) -> Policy:
    """Policy choosing uniformly among empty cells."""
    def policy(board: Sequence[int], player: int) -> int:
        return rng.choice(legal_moves(board))
    return policy


def _tally(result: GameResult, ai_player: int, counts: Dict[str, int]):
    if result.winner == EMPTY:
        counts["ai_d"] += 1
    elif result.winner == ai_player:
        counts["ai_w"] += 1
    else:
        counts["ai_l"] += 1


def eval_vs_random(
    games: int = 500,
    ai_player: int = O,
    seed: int = 0,
) -> Tuple[float, float, float]:
    """
    Evaluate engine vs random opponent.

    Returns:
        (win_rate, draw_rate, loss_rate)
    """
    rng = random.Random(seed)
    opp = random_policy(rng)
    counts = {"ai_w": 0, "ai_d": 0, "ai_l": 0}

    for _ in range(games):
        if ai_player == X:
            result, _ = play_game(best_move, opp)
        else:
            result, _ = play_game(opp, best_move)
        _tally(result, ai_player, counts)

    total = max(1, games)
    return counts["ai_w"] / total, counts["ai_d"] / total, counts["ai_l"] / total


def eval_all_opponent_lines(ai_player: int = O, progress: bool = True) -> Dict[str, int]:
    """
    Evaluate engine against every possible opponent.

    The opponent branches on each legal move at each of its turns, the
    engine answers with best_move(). Every finished game is counted once.

    Returns:
        Dict with 'games', 'ai_w', 'ai_d', 'ai_l'
    """
    counts = {"ai_w": 0, "ai_d": 0, "ai_l": 0}
    # The engine's reply depends only on the position, so memoize it
    replies: Dict[Tuple[int, ...], Optional[int]] = {}

    def walk(board: List[int], player: int):
        result = evaluate(board)
        if result.is_terminal:
            _tally(result, ai_player, counts)
            return

        if player == ai_player:
            key = tuple(board)
            if key not in replies:
                replies[key] = best_move(board, player)
            action = replies[key]
            board[action] = player
            walk(board, opponent(player))
            board[action] = EMPTY
        else:
            for action in legal_moves(board):
                board[action] = player
                walk(board, opponent(player))
                board[action] = EMPTY

    start = [EMPTY] * 9
    if ai_player == X:
        walk(start, X)
    else:
        for action in tqdm(legal_moves(start), desc="Opponent openings", disable=not progress):
            start[action] = X
            walk(start, O)
            start[action] = EMPTY

    counts["games"] = counts["ai_w"] + counts["ai_d"] + counts["ai_l"]
    return counts


def eval_solver_agreement_all_states(progress: bool = True) -> Dict[str, object]:
    """
    Check best_move() against the exact solver on all legal non-terminal states.

    Returns:
        Dict with 'n_states', 'agree', 'agree_rate' and the disagreeing
        positions under 'disagreements' as (board, player, move) tuples.
    """
    states = list(iter_all_legal_nonterminal_states())
    agree = 0
    disagreements = []

    for board, player in tqdm(states, desc="Solver agreement", disable=not progress):
        move = best_move(board, player)
        _, optimal = minimax_value_and_moves(board, player)
        if move in optimal:
            agree += 1
        else:
            disagreements.append((board, player, move))

    n = len(states)
    return {
        "n_states": n,
        "agree": agree,
        "agree_rate": agree / n if n else float("nan"),
        "disagreements": disagreements,
    }
