"""Tests for alleycat.graphics.renderer module."""

import numpy as np
import pytest

from alleycat.core.state import Phase
from alleycat.game.obstacles import ObstacleKind
from alleycat.game.snapshot import AgentPose, ObstacleView, SessionSnapshot
from alleycat.graphics.renderer import (
    BACKGROUND, BIRD, BIRD_BEAK, CACTUS, CAN_BODY, CAT, INK, Renderer
)

STANDING = AgentPose(x=50, y=135, width=44, height=40, crouching=False, grounded=True)


def _snapshot(phase=Phase.PLAYING, obstacles=(), agent=STANDING, frame=0, score=0, best=0):
    return SessionSnapshot(
        phase=phase,
        frame=frame,
        score=score,
        best_score=best,
        speed=5.0,
        agent=agent,
        obstacles=tuple(obstacles),
    )


def _pixel(buf, x, y):
    return tuple(int(c) for c in buf[y, x])


@pytest.fixture
def renderer() -> Renderer:
    return Renderer()


def test_buffer_shape(renderer: Renderer) -> None:
    assert renderer.shape == (200, 800, 3)
    assert renderer.new_buffer().shape == (200, 800, 3)


def test_rejects_wrong_buffer(renderer: Renderer) -> None:
    with pytest.raises(ValueError):
        renderer.render(_snapshot(), np.zeros((100, 100, 3), dtype=np.uint8))


def test_playing_frame(renderer: Renderer) -> None:
    buf = renderer.new_buffer()
    obstacles = [
        ObstacleView(ObstacleKind.CACTUS, x=300, y=135, width=20, height=40, cluster_size=1),
        ObstacleView(ObstacleKind.BIRD, x=400, y=110, width=40, height=25, cluster_size=1),
        ObstacleView(ObstacleKind.TRASH_CAN, x=600, y=140, width=60, height=35, cluster_size=2),
    ]
    renderer.render(_snapshot(obstacles=obstacles, score=12, best=99), buf)

    assert _pixel(buf, 72, 155) == CAT
    assert _pixel(buf, 310, 160) == CACTUS
    assert _pixel(buf, 405, 125) == BIRD
    assert _pixel(buf, 397, 120) == BIRD_BEAK
    assert _pixel(buf, 610, 165) == CAN_BODY
    assert _pixel(buf, 640, 165) == CAN_BODY
    assert _pixel(buf, 400, 175) == INK
    assert _pixel(buf, 700, 100) == BACKGROUND


def test_score_line_is_top_right(renderer: Renderer) -> None:
    buf = renderer.new_buffer()
    renderer.render(_snapshot(score=5), buf)
    score_rows = buf[12:27]
    assert (score_rows[:, 600:] == INK).all(axis=2).any()
    assert not (score_rows[:, :300] == INK).all(axis=2).any()


def test_idle_shows_prompt_without_score(renderer: Renderer) -> None:
    buf = renderer.new_buffer()
    renderer.render(_snapshot(phase=Phase.IDLE), buf)
    assert _pixel(buf, 72, 155) == CAT
    assert (buf[90:105] == INK).all(axis=2).any()
    assert not (buf[12:27] == INK).all(axis=2).any()


def test_game_over_overlay(renderer: Renderer) -> None:
    playing = renderer.new_buffer()
    over = renderer.new_buffer()
    renderer.render(_snapshot(), playing)
    renderer.render(_snapshot(phase=Phase.GAME_OVER), over)
    assert not (playing[90:105] == INK).all(axis=2).any()
    assert (over[90:105] == INK).all(axis=2).any()


def test_crouching_cat_is_lower(renderer: Renderer) -> None:
    crouched = AgentPose(x=50, y=150, width=44, height=25, crouching=True, grounded=True)
    buf = renderer.new_buffer()
    renderer.render(_snapshot(agent=crouched), buf)
    assert _pixel(buf, 72, 140) == BACKGROUND
    assert _pixel(buf, 72, 165) == CAT


def test_animation_frames_differ(renderer: Renderer) -> None:
    bird = ObstacleView(ObstacleKind.BIRD, x=400, y=110, width=40, height=25, cluster_size=1)
    up = renderer.new_buffer()
    down = renderer.new_buffer()
    renderer.render(_snapshot(obstacles=[bird], frame=0), up)
    renderer.render(_snapshot(obstacles=[bird], frame=10), down)
    assert _pixel(up, 425, 112) == BIRD
    assert _pixel(down, 425, 112) == BACKGROUND
