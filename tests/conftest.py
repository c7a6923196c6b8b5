"""Shared fixtures and test doubles."""

from __future__ import annotations

import os
from random import Random

import pytest

from alleycat.config.settings import Settings
from alleycat.game.obstacles import Obstacle, ObstacleKind
from alleycat.game.session import GameSession
from alleycat.storage.highscore import HighScoreError, MemoryHighScoreStore

# No real window or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class ScriptedSpawner:
    """Spawn policy double: emits queued obstacles, one per step, else nothing."""

    def __init__(self) -> None:
        self.pending: list[Obstacle] = []
        self.calls = 0

    def maybe_spawn(self, obstacles, speed):
        self.calls += 1
        if self.pending:
            return self.pending.pop(0)
        return None


class FailingHighScoreStore(MemoryHighScoreStore):
    """Loads normally, but every save fails like an unwritable file."""

    def save(self, score: int) -> None:
        raise HighScoreError(f"Cannot write best score {score}")


class ScriptedRandom:
    """Stands in for ``random.Random`` where only ``random()`` is drawn."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)


def overlapping_cactus(settings: Settings) -> Obstacle:
    """A cactus that lands right on top of the cat after one step at base speed."""
    ground = settings.playfield.ground_y
    x = settings.agent.x + settings.difficulty.base_speed
    return Obstacle(ObstacleKind.CACTUS, x=x, y=ground - 40, width=40, height=40)


@pytest.fixture
def settings() -> Settings:
    return Settings(seed=1234)


@pytest.fixture
def spawner() -> ScriptedSpawner:
    return ScriptedSpawner()


@pytest.fixture
def store() -> MemoryHighScoreStore:
    return MemoryHighScoreStore()


@pytest.fixture
def session(settings: Settings, spawner: ScriptedSpawner, store: MemoryHighScoreStore) -> GameSession:
    return GameSession(settings=settings, store=store, rng=Random(7), spawn_policy=spawner)
