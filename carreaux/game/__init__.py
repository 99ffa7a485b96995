"""Game engine components."""

from .engine import CarreauxEngine
from .errors import CarreauxError, InvalidMoveError, UnknownSessionError
from .reaper import SessionReaper
from .session import SessionStore

__all__ = [
    "CarreauxEngine",
    "CarreauxError",
    "InvalidMoveError",
    "UnknownSessionError",
    "SessionReaper",
    "SessionStore",
]
