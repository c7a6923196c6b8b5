"""Simulation core: cat, obstacles, spawning, collisions and the session."""

from alleycat.game.agent import Agent
from alleycat.game.collision import Box, check_collision
from alleycat.game.controls import Controls
from alleycat.game.obstacles import Obstacle, ObstacleKind
from alleycat.game.session import GameSession
from alleycat.game.snapshot import AgentPose, ObstacleView, SessionSnapshot
from alleycat.game.spawner import SpawnPolicy

__all__ = [
    "Agent",
    "AgentPose",
    "Box",
    "Controls",
    "GameSession",
    "Obstacle",
    "ObstacleKind",
    "ObstacleView",
    "SessionSnapshot",
    "SpawnPolicy",
    "check_collision",
]
