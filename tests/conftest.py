"""Root conftest for path setup and shared fixtures.

This file is loaded first by pytest and ensures the project root
is on sys.path before any test modules are imported.
"""

import sys
from pathlib import Path

# Add project root to path IMMEDIATELY
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from typing import Iterable

import pytest

from carreaux.game.engine import CarreauxEngine
from carreaux.game.session import SessionStore
from carreaux.models.game import GameConfig, Marker, Session


# =============================================================================
# Board Helpers
# =============================================================================


def place(session: Session, cells: Iterable[tuple[int, int]], marker: Marker) -> None:
    """Put markers straight onto the grid, bypassing turns and scoring."""
    for x, y in cells:
        session.grid[y][x] = marker
        session.move_count += 1


# Moves (red, blue, red, ...) where red fills the square at (0,0)-(1,1) on its 4th move
RED_SQUARE_SEQUENCE = [
    (0, 0),  # R
    (4, 4),  # B
    (1, 0),  # R
    (4, 3),  # B
    (0, 1),  # R
    (3, 4),  # B
    (1, 1),  # R completes the square
]


# =============================================================================
# Engine and Store Fixtures
# =============================================================================


@pytest.fixture
def game_config() -> GameConfig:
    """Default 5x5 rules."""
    return GameConfig(grid_size=5, win_score=5, hint_count=3, idle_timeout_seconds=1800)


@pytest.fixture
def engine(game_config) -> CarreauxEngine:
    """Engine with default rules."""
    return CarreauxEngine(game_config)


@pytest.fixture
def session(engine) -> Session:
    """Fresh session."""
    return engine.create_session("chat-1")


@pytest.fixture
def store(engine) -> SessionStore:
    """Empty session store."""
    return SessionStore(engine)
