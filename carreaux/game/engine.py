"""Carreaux rules engine."""

import logging
import time
from typing import Optional

from ..models.game import (
    Marker,
    GameConfig,
    MoveRecord,
    Session,
    GameStats,
    Hint,
    MoveResult,
)
from .errors import InvalidMoveError

logger = logging.getLogger(__name__)

# Top-left corners of the 2x2 squares that can contain (x, y), as offsets.
SQUARE_ANCHORS = ((-1, -1), (0, -1), (-1, 0), (0, 0))


def format_time(seconds: int) -> str:
    """Format a duration as minutes and seconds, e.g. '3m 12s'."""
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}m {secs}s"


class CarreauxEngine:
    """Game rules applied to a single session.

    The engine holds no sessions itself; the session store owns them and
    serializes access per conversation.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def create_session(self, session_id: str) -> Session:
        """Create a fresh session with an empty grid, red to play."""
        now = time.time()
        size = self.config.grid_size
        return Session(
            session_id=session_id,
            size=size,
            grid=[[None] * size for _ in range(size)],
            score={Marker.RED: 0, Marker.BLUE: 0},
            turn=Marker.RED,
            move_count=0,
            last_move=None,
            start_time=now,
            last_activity=now,
        )

    def is_valid_move(self, session: Session, x, y) -> bool:
        """Check that (x, y) is an integer cell inside the grid and empty."""
        for coord in (x, y):
            if not isinstance(coord, int) or isinstance(coord, bool):
                return False
            if coord < 0 or coord >= session.size:
                return False
        return session.cell(x, y) is None

    def apply_move(self, session: Session, x: int, y: int) -> None:
        """Place the current player's marker. Turn and score are left alone."""
        if not self.is_valid_move(session, x, y):
            raise InvalidMoveError(x, y)

        session.grid[y][x] = session.turn
        session.last_move = MoveRecord(x=x, y=y, player=session.turn)
        session.move_count += 1
        session.last_activity = time.time()

    def count_squares_at(
        self,
        session: Session,
        x: int,
        y: int,
        marker: Optional[Marker] = None,
    ) -> int:
        """
        Count the 2x2 squares through (x, y) whose corners all hold `marker`.

        The cell (x, y) itself is counted as holding `marker` whatever the
        grid says, so the same check scores a real placement and evaluates a
        hypothetical one without touching the grid.

        Args:
            session: Session to inspect
            x: Column of the placement
            y: Row of the placement
            marker: Marker to check for (defaults to the player to move)
        """
        player = marker or session.turn
        size = session.size
        squares = 0

        for dx, dy in SQUARE_ANCHORS:
            top_x, top_y = x + dx, y + dy
            if top_x < 0 or top_y < 0 or top_x + 1 >= size or top_y + 1 >= size:
                continue

            corners = (
                (top_x, top_y),
                (top_x + 1, top_y),
                (top_x, top_y + 1),
                (top_x + 1, top_y + 1),
            )
            if all(
                (cx, cy) == (x, y) or session.grid[cy][cx] == player
                for cx, cy in corners
            ):
                squares += 1

        return squares

    def get_stats(self, session: Session, now: Optional[float] = None) -> GameStats:
        """Derive counters, elapsed time and scores."""
        now = time.time() if now is None else now
        elapsed = max(0, int(now - session.start_time))
        return GameStats(
            total_moves=session.move_count,
            empty_cells=session.size * session.size - session.move_count,
            elapsed_seconds=elapsed,
            elapsed=format_time(elapsed),
            score_r=session.score[Marker.RED],
            score_b=session.score[Marker.BLUE],
            current_player=session.turn,
        )

    def get_hints(self, session: Session, max_count: Optional[int] = None) -> list[Hint]:
        """Best empty cells for the player to move, most squares first."""
        max_count = self.config.hint_count if max_count is None else max_count
        hints = []

        for y in range(session.size):
            for x in range(session.size):
                if session.cell(x, y) is not None:
                    continue
                squares = self.count_squares_at(session, x, y, session.turn)
                if squares > 0:
                    hints.append(Hint(x=x, y=y, squares=squares))

        # sorted() is stable, so ties keep row-major order
        hints = sorted(hints, key=lambda h: h.squares, reverse=True)
        return hints[:max_count]

    def play_move(self, session: Session, x, y) -> MoveResult:
        """
        Validate and play a move, then apply the scoring and game-end rules.

        A winning score ends the game before a full grid is considered, so a
        move that does both is reported as a win. The caller is responsible
        for discarding the session when `game_over` is set.
        """
        player = session.turn

        if not self.is_valid_move(session, x, y):
            return MoveResult(
                accepted=False,
                player=player,
                turn=session.turn,
                score=dict(session.score),
            )

        self.apply_move(session, x, y)
        squares = self.count_squares_at(session, x, y, player)
        if squares > 0:
            session.score[player] += squares

        winner = None
        for marker in (Marker.RED, Marker.BLUE):
            if session.score[marker] >= self.config.win_score:
                winner = marker
                break

        draw = winner is None and session.is_full
        game_over = winner is not None or draw

        if game_over:
            if winner is not None:
                logger.info(
                    "Game %s won by %s (%d-%d)",
                    session.session_id,
                    winner.value,
                    session.score[Marker.RED],
                    session.score[Marker.BLUE],
                )
            else:
                logger.info("Game %s drawn", session.session_id)
        else:
            session.turn = player.other

        return MoveResult(
            accepted=True,
            player=player,
            squares_formed=squares,
            game_over=game_over,
            winner=winner,
            draw=draw,
            turn=session.turn,
            score=dict(session.score),
            stats=self.get_stats(session),
            grid=session.grid_snapshot(),
        )
