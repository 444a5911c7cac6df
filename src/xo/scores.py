"""
Score tally and its persistence.

Scores live in a JSON document under a fixed key, alongside anything else
stored in the same file:

    {"xoScores": {"X": 3, "O": 1, "draw": 5}}

Missing or damaged data never stops a game; the tally falls back to zero.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

from .game import DRAW, O, WIN, X, GameResult

logger = logging.getLogger(__name__)

DEFAULT_KEY = "xoScores"


@dataclass
class ScoreTally:
    """Wins per player and draws for the current session."""
    x: int = 0
    o: int = 0
    draw: int = 0

    def record(self, result: GameResult):
        """Count a finished game. In-progress results are ignored."""
        if result.status == WIN:
            if result.winner == X:
                self.x += 1
            elif result.winner == O:
                self.o += 1
        elif result.status == DRAW:
            self.draw += 1

    def reset(self):
        self.x = self.o = self.draw = 0

    def to_dict(self) -> Dict[str, int]:
        return {"X": self.x, "O": self.o, "draw": self.draw}

    @classmethod
    def from_dict(cls, data) -> "ScoreTally":
        """Build a tally from stored data, rejecting anything malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")
        values = []
        for key in ("X", "O", "draw"):
            v = data.get(key)
            # bool is an int subclass, but True is not a score
            if not isinstance(v, int) or isinstance(v, bool) or v < 0:
                raise ValueError(f"Invalid count for {key!r}: {v!r}")
            values.append(v)
        return cls(*values)


class ScoreStore:
    """
    Key-value score storage backed by a JSON file.

    Args:
        path: JSON document to read and write
        key: Entry holding the tally
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_KEY):
        self.path = Path(path).expanduser()
        self.key = key

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            doc = json.load(f)
        if not isinstance(doc, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return doc

    def load(self) -> ScoreTally:
        """Return the stored tally, or a zeroed one if none is usable."""
        try:
            doc = self._read_document()
            if self.key not in doc:
                return ScoreTally()
            return ScoreTally.from_dict(doc[self.key])
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"Ignoring stored scores in {self.path}: {e}")
            return ScoreTally()

    def save(self, tally: ScoreTally) -> bool:
        """
        Write the tally, keeping other entries of the document.

        Returns:
            True on success. Failures are logged, not raised.
        """
        try:
            doc = self._read_document()
        except (OSError, ValueError) as e:
            logger.warning(f"Overwriting unreadable score file {self.path}: {e}")
            doc = {}
        doc[self.key] = tally.to_dict()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save scores to {self.path}: {e}")
            return False
        return True
