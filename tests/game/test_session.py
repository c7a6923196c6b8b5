"""Tests for alleycat.game.session module."""

from __future__ import annotations

import json
from random import Random

import pytest

from alleycat.config.settings import Settings
from alleycat.core.events import EventBus, EventType
from alleycat.core.state import Phase
from alleycat.game.controls import Controls
from alleycat.game.obstacles import Obstacle, ObstacleKind
from alleycat.game.session import GameSession
from alleycat.storage.highscore import HighScoreError, JsonHighScoreStore, MemoryHighScoreStore

from conftest import FailingHighScoreStore, ScriptedSpawner, overlapping_cactus


def _run(session: GameSession, frames: int, controls: Controls | None = None) -> None:
    for _ in range(frames):
        session.step(controls)


class TestInitialState:
    def test_starts_idle_with_grounded_cat(self, session: GameSession) -> None:
        assert session.phase == Phase.IDLE
        assert session.score == 0
        assert session.frame == 0
        assert session.speed == 5.0
        assert session.obstacles == []
        assert session.agent.grounded
        assert session.agent.y == 175 - 40

    def test_idle_does_not_tick(self, session: GameSession, spawner: ScriptedSpawner) -> None:
        assert session.step() is False
        assert session.frame == 0
        assert spawner.calls == 0

    def test_best_score_loaded_from_store(self, settings: Settings) -> None:
        session = GameSession(settings=settings, store=MemoryHighScoreStore(initial=321))
        assert session.best_score == 321


class TestStart:
    def test_start_from_idle(self, session: GameSession) -> None:
        assert session.start() is True
        assert session.phase == Phase.PLAYING

    def test_start_ignored_while_playing(self, session: GameSession) -> None:
        session.start()
        _run(session, 10)
        assert session.start() is False
        assert session.frame == 10
        assert session.phase == Phase.PLAYING


class TestStep:
    def test_jump_scenario(self, session: GameSession) -> None:
        controls = Controls()
        controls.press_jump()
        session.start()

        y0 = session.agent.y
        session.step(controls)
        assert not session.agent.grounded
        assert session.agent.velocity == pytest.approx(-11 + 0.6)
        assert session.agent.y < y0

        y1 = session.agent.y
        controls.release_jump()
        session.step(controls)
        assert session.agent.y < y1

    def test_missing_controls_mean_nothing_pressed(self, session: GameSession) -> None:
        session.start()
        _run(session, 20)
        assert session.agent.grounded
        assert not session.agent.crouching

    def test_500_frames_ramp_speed_once_and_score_100(self, session: GameSession) -> None:
        session.start()
        _run(session, 499)
        assert session.speed == 5.0
        assert session.score == 99
        session.step()
        assert session.frame == 500
        assert session.speed == 5.5
        assert session.score == 100
        assert session.phase == Phase.PLAYING

    def test_spawned_obstacles_scroll_and_retire(
        self, session: GameSession, spawner: ScriptedSpawner
    ) -> None:
        session.start()
        spawner.pending.append(Obstacle(ObstacleKind.CACTUS, x=800, y=135, width=20, height=40))
        session.step()
        assert len(session.obstacles) == 1
        assert session.obstacles[0].x == pytest.approx(795)

        spawner.pending.append(Obstacle(ObstacleKind.CACTUS, x=-16, y=135, width=20, height=40))
        session.step()
        # The second one scrolled straight off the field
        assert len(session.obstacles) == 1
        assert all(not o.retired for o in session.obstacles)

    def test_real_spawner_fills_the_field(self, settings: Settings) -> None:
        session = GameSession(settings=settings, rng=Random(2))
        session.start()
        session.step()
        assert len(session.obstacles) == 1
        assert session.obstacles[0].x == pytest.approx(800 - 5)


class TestGameOver:
    def test_collision_ends_round_on_that_step(
        self, session: GameSession, spawner: ScriptedSpawner, settings: Settings
    ) -> None:
        session.start()
        spawner.pending.append(overlapping_cactus(settings))
        assert session.step() is True
        assert session.phase == Phase.GAME_OVER
        assert session.frame == 1

    def test_colliding_step_still_scores(
        self,
        session: GameSession,
        spawner: ScriptedSpawner,
        store: MemoryHighScoreStore,
        settings: Settings,
    ) -> None:
        session.start()
        _run(session, 24)
        assert session.score == 4
        spawner.pending.append(overlapping_cactus(settings))
        session.step()
        assert session.phase == Phase.GAME_OVER
        assert session.score == 5
        assert session.best_score == 5
        assert store.saves == [5]

    def test_best_score_kept_when_not_beaten(
        self, settings: Settings, spawner: ScriptedSpawner
    ) -> None:
        store = MemoryHighScoreStore(initial=50)
        session = GameSession(settings=settings, store=store, spawn_policy=spawner)
        session.start()
        _run(session, 30)
        spawner.pending.append(overlapping_cactus(settings))
        session.step()
        assert session.phase == Phase.GAME_OVER
        assert session.best_score == 50
        assert store.saves == []

    def test_equal_score_does_not_save(self, settings: Settings, spawner: ScriptedSpawner) -> None:
        store = MemoryHighScoreStore(initial=6)
        session = GameSession(settings=settings, store=store, spawn_policy=spawner)
        session.start()
        _run(session, 29)
        spawner.pending.append(overlapping_cactus(settings))
        session.step()
        assert session.score == 6
        assert store.saves == []

    def test_frozen_after_game_over(
        self, session: GameSession, spawner: ScriptedSpawner, settings: Settings
    ) -> None:
        session.start()
        spawner.pending.append(overlapping_cactus(settings))
        session.step()
        frame, score, speed = session.frame, session.score, session.speed
        obstacles = list(session.obstacles)
        _run(session, 50)
        assert (session.frame, session.score, session.speed) == (frame, score, speed)
        assert session.obstacles == obstacles

    def test_best_score_written_to_json(
        self, tmp_path, settings: Settings, spawner: ScriptedSpawner
    ) -> None:
        path = tmp_path / "best.json"
        session = GameSession(settings=settings, store=JsonHighScoreStore(path), spawn_policy=spawner)
        session.start()
        _run(session, 49)
        spawner.pending.append(overlapping_cactus(settings))
        session.step()
        assert json.loads(path.read_text()) == {"best_score": 10}

    def test_failed_save_ends_round_and_keeps_old_best(
        self, settings: Settings, spawner: ScriptedSpawner
    ) -> None:
        bus = EventBus()
        session = GameSession(
            settings=settings,
            store=FailingHighScoreStore(initial=1),
            spawn_policy=spawner,
            event_bus=bus,
        )
        session.start()
        _run(session, 9)
        spawner.pending.append(overlapping_cactus(settings))

        with pytest.raises(HighScoreError):
            session.step()

        assert session.phase == Phase.GAME_OVER
        assert session.score == 2
        assert session.best_score == 1
        assert bus.get_history(EventType.NEW_BEST_SCORE) == []

        # Frozen like any finished round, and restartable
        assert session.step() is False
        assert session.start() is True
        assert session.best_score == 1


class TestRestart:
    def test_restart_resets_round_but_keeps_best(
        self,
        session: GameSession,
        spawner: ScriptedSpawner,
        settings: Settings,
    ) -> None:
        controls = Controls()
        session.start()
        _run(session, 600)
        controls.press_jump()
        session.step(controls)
        spawner.pending.append(Obstacle(ObstacleKind.CACTUS, x=700, y=135, width=20, height=40))
        session.step(controls)
        # Land, then collide
        controls.release_jump()
        _run(session, 40)
        spawner.pending.append(overlapping_cactus(settings))
        while session.is_playing:
            session.step()
        best = session.best_score
        assert best > 0

        assert session.start() is True
        assert session.phase == Phase.PLAYING
        assert session.frame == 0
        assert session.score == 0
        assert session.speed == 5.0
        assert session.obstacles == []
        assert session.agent.grounded
        assert session.agent.y == 175 - 40
        assert session.best_score == best


class TestEvents:
    def test_lifecycle_events(self, settings: Settings, spawner: ScriptedSpawner) -> None:
        bus = EventBus()
        session = GameSession(settings=settings, spawn_policy=spawner, event_bus=bus)
        session.start()
        _run(session, 500)
        spawner.pending.append(overlapping_cactus(settings))
        session.step()

        types = [e.type for e in bus.get_history(limit=100)]
        assert types == [
            EventType.ROUND_STARTED,
            EventType.SPEED_UP,
            EventType.GAME_OVER,
            EventType.NEW_BEST_SCORE,
        ]
        game_over = bus.get_history(EventType.GAME_OVER)[0]
        assert game_over.data == {"score": 100, "best_score": 100}

    def test_snapshot_is_a_copy(self, session: GameSession, spawner: ScriptedSpawner) -> None:
        session.start()
        spawner.pending.append(Obstacle(ObstacleKind.BIRD, x=800, y=115, width=40, height=25))
        session.step()
        snap = session.snapshot()
        session.step()
        assert snap.frame == 1
        assert snap.obstacles[0].x == pytest.approx(794)
        assert snap.obstacles[0].kind is ObstacleKind.BIRD
        assert snap.phase == Phase.PLAYING
        assert snap.agent.grounded
