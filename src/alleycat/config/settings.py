"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Each group reads its own prefix, e.g. ``ALLEYCAT_AGENT_JUMP_FORCE``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FieldSettings(BaseSettings):
    """Playfield geometry."""

    model_config = SettingsConfigDict(env_prefix="ALLEYCAT_FIELD_")

    width: int = Field(default=800, gt=0)
    height: int = Field(default=200, gt=0)
    ground_y: float = Field(default=175.0, gt=0)


class AgentSettings(BaseSettings):
    """Cat size and physics."""

    model_config = SettingsConfigDict(env_prefix="ALLEYCAT_AGENT_")

    x: float = 50.0
    width: float = Field(default=44.0, gt=0)
    stand_height: float = Field(default=40.0, gt=0)
    crouch_height: float = Field(default=25.0, gt=0)

    # Per-frame units
    jump_force: float = Field(default=11.0, gt=0)
    gravity: float = Field(default=0.6, gt=0)

    @model_validator(mode="after")
    def _crouch_is_shorter(self) -> "AgentSettings":
        if self.crouch_height >= self.stand_height:
            raise ValueError("crouch_height must be smaller than stand_height")
        return self


class DifficultySettings(BaseSettings):
    """Score clock and speed ramp."""

    model_config = SettingsConfigDict(env_prefix="ALLEYCAT_DIFFICULTY_")

    base_speed: float = Field(default=5.0, gt=0)
    speed_step: float = Field(default=0.5, ge=0)
    speed_interval: int = Field(default=500, gt=0)  # frames
    score_interval: int = Field(default=5, gt=0)    # frames


class SpawnSettings(BaseSettings):
    """Obstacle spawn policy."""

    model_config = SettingsConfigDict(env_prefix="ALLEYCAT_SPAWN_")

    gap_base: float = 250.0
    gap_jitter: float = Field(default=200.0, ge=0)
    gap_per_speed: float = 15.0

    # Birds only show up once the speed has ramped past this
    flyer_speed_threshold: float = 5.2
    flyer_roll: float = Field(default=0.7, ge=0.0, le=1.0)
    tall_roll: float = Field(default=0.5, ge=0.0, le=1.0)


class CollisionSettings(BaseSettings):
    """Hitbox fairness margins."""

    model_config = SettingsConfigDict(env_prefix="ALLEYCAT_COLLISION_")

    agent_margin: float = Field(default=5.0, ge=0)
    obstacle_margin: float = Field(default=4.0, ge=0)


class SimulatorSettings(BaseSettings):
    """Desktop window settings."""

    model_config = SettingsConfigDict(env_prefix="ALLEYCAT_SIMULATOR_")

    scale: int = Field(default=1, ge=1)
    fps: int = Field(default=60, gt=0)
    fullscreen: bool = False
    title: str = "ALLEYCAT"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ALLEYCAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Fixed seed for reproducible runs; None draws from the OS
    seed: Optional[int] = None
    headless_frames: int = Field(default=3600, gt=0)

    # Paths
    base_path: Path = Field(default_factory=Path.cwd)
    highscore_path: Path = Field(default_factory=lambda: Path.cwd() / "alleycat_highscore.json")

    # Nested settings
    playfield: FieldSettings = Field(default_factory=FieldSettings)
    agent: AgentSettings = Field(default_factory=AgentSettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    spawn: SpawnSettings = Field(default_factory=SpawnSettings)
    collision: CollisionSettings = Field(default_factory=CollisionSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_headless(self) -> bool:
        """Check if running without a window."""
        return self.env == "headless"

    @property
    def log_path(self) -> Path:
        """Path to the log file."""
        return self.base_path / "alleycat.log"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
