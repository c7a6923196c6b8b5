"""Configuration for ALLEYCAT."""

from .settings import (
    AgentSettings,
    CollisionSettings,
    DifficultySettings,
    FieldSettings,
    Settings,
    SimulatorSettings,
    SpawnSettings,
    get_settings,
)

__all__ = [
    "AgentSettings",
    "CollisionSettings",
    "DifficultySettings",
    "FieldSettings",
    "Settings",
    "SimulatorSettings",
    "SpawnSettings",
    "get_settings",
]
