"""Persistence for ALLEYCAT."""

from .highscore import HighScoreError, HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore

__all__ = ["HighScoreError", "HighScoreStore", "JsonHighScoreStore", "MemoryHighScoreStore"]
