"""Best-score persistence.

The session calls ``load()`` once at construction and ``save()`` only on
the Playing -> GameOver transition. Failures are not retried.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreError(Exception):
    """The best-score store exists but cannot be read or written."""


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Process-local store; used by tests and headless runs."""

    def __init__(self, initial: int = 0) -> None:
        self._score = initial
        self.saves: list[int] = []

    def load(self) -> int:
        return self._score

    def save(self, score: int) -> None:
        self._score = score
        self.saves.append(score)


class JsonHighScoreStore:
    """Stores ``{"best_score": N}`` in a JSON file."""

    KEY = "best_score"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> int:
        """Return the stored best score, or 0 if nothing has been saved yet."""
        if not self.path.exists():
            logger.info(f"No best score at {self.path}, starting from 0")
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise HighScoreError(f"Cannot read best score from {self.path}: {e}") from e

        score = data.get(self.KEY) if isinstance(data, dict) else None
        if not isinstance(score, int) or isinstance(score, bool) or score < 0:
            raise HighScoreError(f"Malformed best score in {self.path}: {data!r}")

        logger.info(f"Loaded best score {score}")
        return score

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.KEY: score}, f, indent=2)
        except OSError as e:
            raise HighScoreError(f"Cannot write best score to {self.path}: {e}") from e

        logger.info(f"Saved best score {score}")
