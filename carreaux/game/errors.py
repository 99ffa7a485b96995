"""Game errors."""


class CarreauxError(ValueError):
    """Base class for game errors."""


class InvalidMoveError(CarreauxError):
    """Coordinates out of the grid or cell already taken."""

    def __init__(self, x, y):
        super().__init__(f"Invalid move at ({x}, {y})")
        self.x = x
        self.y = y


class UnknownSessionError(CarreauxError):
    """No game in progress for this conversation."""

    def __init__(self, session_id: str):
        super().__init__(f"No active game for {session_id}")
        self.session_id = session_id
