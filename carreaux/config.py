"""Bot configuration."""

from pydantic_settings import BaseSettings

from .models.game import GameConfig


class Settings(BaseSettings):
    """Application settings."""

    # Board
    grid_size: int = 5
    win_score: int = 5
    hint_count: int = 3

    # Idle session cleanup
    idle_timeout_ms: int = 30 * 60 * 1000
    sweep_interval_ms: int = 5 * 60 * 1000

    # Chat front-end
    command_prefix: str = "."
    log_level: str = "INFO"

    class Config:
        env_prefix = "CARREAUX_"

    @property
    def idle_timeout_seconds(self) -> float:
        return self.idle_timeout_ms / 1000

    @property
    def sweep_interval_seconds(self) -> float:
        return self.sweep_interval_ms / 1000

    def game_config(self) -> GameConfig:
        """Build the rules config handed to the engine."""
        return GameConfig(
            grid_size=self.grid_size,
            win_score=self.win_score,
            hint_count=self.hint_count,
            idle_timeout_seconds=self.idle_timeout_seconds,
        )


settings = Settings()
