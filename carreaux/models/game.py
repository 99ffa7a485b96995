"""Game state models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Marker(str, Enum):
    """Player marker."""

    RED = "R"
    BLUE = "B"

    @property
    def other(self) -> "Marker":
        return Marker.BLUE if self is Marker.RED else Marker.RED


Grid = list[list[Optional[Marker]]]


class GameConfig(BaseModel):
    """Rules configuration."""

    grid_size: int = Field(default=5, ge=2)
    win_score: int = Field(default=5, ge=1)
    hint_count: int = Field(default=3, ge=1)
    idle_timeout_seconds: float = Field(default=1800.0, gt=0)


class MoveRecord(BaseModel):
    """Last placement on the board."""

    x: int
    y: int
    player: Marker


class Session(BaseModel):
    """One game in one conversation."""

    session_id: str
    size: int
    grid: Grid  # indexed grid[y][x]
    score: dict[Marker, int]
    turn: Marker = Marker.RED
    move_count: int = 0
    last_move: Optional[MoveRecord] = None
    start_time: float
    last_activity: float

    def cell(self, x: int, y: int) -> Optional[Marker]:
        return self.grid[y][x]

    def grid_snapshot(self) -> Grid:
        """Copy of the grid, safe to hand out after the session is gone."""
        return [list(row) for row in self.grid]

    @property
    def is_full(self) -> bool:
        return self.move_count >= self.size * self.size


class GameStats(BaseModel):
    """Derived, read-only view of a session."""

    total_moves: int
    empty_cells: int
    elapsed_seconds: int
    elapsed: str  # e.g. "3m 12s"
    score_r: int
    score_b: int
    current_player: Marker


class Hint(BaseModel):
    """Empty cell that would complete at least one square."""

    x: int
    y: int
    squares: int


class MoveResult(BaseModel):
    """Outcome of a submitted move."""

    accepted: bool
    player: Marker
    squares_formed: int = 0
    game_over: bool = False
    winner: Optional[Marker] = None
    draw: bool = False
    turn: Marker
    score: dict[Marker, int]
    stats: Optional[GameStats] = None
    grid: Grid = Field(default_factory=list)
