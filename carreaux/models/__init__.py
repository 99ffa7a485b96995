"""Pydantic models for game state and move results."""

from .game import (
    Marker,
    Grid,
    GameConfig,
    MoveRecord,
    Session,
    GameStats,
    Hint,
    MoveResult,
)

__all__ = [
    "Marker",
    "Grid",
    "GameConfig",
    "MoveRecord",
    "Session",
    "GameStats",
    "Hint",
    "MoveResult",
]
