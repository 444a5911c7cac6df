"""
Game session: turn order, human/automated moves and score bookkeeping.

The session owns the mutable board. Each turn it applies one mark, asks
evaluate() whether the game is over and, in "ai" mode, asks best_move()
for the automated player's reply.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .game import (
    EMPTY,
    O,
    SYMBOLS,
    WIN,
    X,
    GameResult,
    IllegalMoveError,
    apply_move,
    check_player,
    evaluate,
    opponent,
)
from .minimax import best_move
from .scores import DEFAULT_KEY, ScoreStore, ScoreTally

logger = logging.getLogger(__name__)

HUMAN = "human"
AI = "ai"
MODES = (HUMAN, AI)


@dataclass
class SessionConfig:
    """Session configuration."""

    # "human": two people share the board, "ai": the engine plays ai_player
    mode: str = HUMAN
    ai_player: int = O

    # Pause before the automated move, seconds (display only)
    ai_delay: float = 0.45

    # Score persistence; None keeps scores in memory
    scores_path: Optional[str] = None
    scores_key: str = DEFAULT_KEY


class GameSession:
    """
    One player-facing session: a sequence of games with a running tally.

    Args:
        config: Session configuration (defaults to SessionConfig())
        store: Score storage; built from config.scores_path when omitted
    """

    def __init__(self, config: Optional[SessionConfig] = None, store: Optional[ScoreStore] = None):
        self.config = config or SessionConfig()
        if self.config.mode not in MODES:
            raise ValueError(f"Unknown mode {self.config.mode!r}, expected one of {MODES}")
        check_player(self.config.ai_player)

        if store is None and self.config.scores_path:
            store = ScoreStore(self.config.scores_path, key=self.config.scores_key)
        self.store = store
        self.scores = store.load() if store is not None else ScoreTally()

        self.mode = self.config.mode
        self.board: List[int] = []
        self.current_player = X
        self.result = GameResult.in_progress()
        self.moves: List[Tuple[int, int]] = []
        self.new_game()

    @property
    def is_game_over(self) -> bool:
        return self.result.is_terminal

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return self.result.line

    @property
    def is_ai_turn(self) -> bool:
        return (
            self.mode == AI
            and not self.is_game_over
            and self.current_player == self.config.ai_player
        )

    @property
    def status_text(self) -> str:
        if self.result.status == WIN:
            return f"Game over! Winner: {SYMBOLS[self.result.winner]}"
        if self.is_game_over:
            return "Game over! Draw"
        return f"Player to move: {SYMBOLS[self.current_player]}"

    def new_game(self):
        self.board = [EMPTY] * 9
        self.current_player = X
        self.result = GameResult.in_progress()
        self.moves = []

    def set_mode(self, mode: str):
        """Switch between "human" and "ai" play. Starts a new game."""
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")
        self.mode = mode
        self.new_game()

    def reset_scores(self):
        self.scores.reset()
        self._save_scores()
        self.new_game()

    def play(self, index: int) -> GameResult:
        """
        Place the current player's mark at `index` on behalf of a human.

        Raises:
            IllegalMoveError: game over, automated player's turn, or the
                cell is occupied or off the board.
        """
        if self.is_game_over:
            raise IllegalMoveError("Game is already over")
        if self.is_ai_turn:
            raise IllegalMoveError(f"It is {SYMBOLS[self.current_player]}'s (computer) turn")
        return self._apply(index)

    def ai_move(self) -> Optional[int]:
        """
        Let the engine move if it is its turn.

        Returns:
            The chosen cell, or None when there is nothing to do.
        """
        if not self.is_ai_turn:
            return None
        index = best_move(self.board, self.current_player)
        if index is None:
            return None
        self._apply(index)
        return index

    def _apply(self, index: int) -> GameResult:
        player = self.current_player
        self.board = apply_move(self.board, player, index)
        self.moves.append((player, index))
        self.result = evaluate(self.board)

        if self.result.is_terminal:
            logger.info(f"Game finished: {self.result.status} after {len(self.moves)} moves")
            self.scores.record(self.result)
            self._save_scores()
        else:
            self.current_player = opponent(player)
        return self.result

    def _save_scores(self):
        if self.store is not None:
            self.store.save(self.scores)
