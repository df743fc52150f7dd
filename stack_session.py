
"""
Game session: the command/query surface of the stacking game.

The session owns one playfield and one piece controller. Hosts feed it two
kinds of stimuli, player commands and gravity ticks, one at a time; every
command returns a ``Status`` and never raises for bad player input.
Rendering reads the query side (``display_grid``, ``piece``, ``score`` ...)
after each command.

Scoring is ``rows * POINTS_PER_LINE * level`` with the level in effect when
the rows are cleared; the level itself is derived from the line count.
"""
import enum
import logging
from typing import List, Optional, Tuple

from stack_board import Cell, Playfield
from stack_config import CONFIG
from stack_controller import Direction, MoveOutcome, MoveStatus, PieceController
from stack_piece import Piece, ShapeDef, definition_for
from stack_rng import KindSource

log = logging.getLogger(__name__)


class Status(enum.Enum):
    NOOP = "noop"
    APPLIED = "applied"
    BLOCKED = "blocked"
    LOCKED = "locked"
    GAME_OVER = "game_over"


def level_for_lines(lines: int) -> int:
    return lines // CONFIG["LINES_PER_LEVEL"] + 1


def clear_score(rows: int, level: int) -> int:
    return rows * CONFIG["POINTS_PER_LINE"] * level


def tick_interval_ms(level: int) -> int:
    """Gravity period for ``level``; shrinks per level down to a floor."""
    ms = CONFIG["BASE_TICK_MS"] - (level - 1) * CONFIG["TICK_STEP_MS"]
    return max(CONFIG["MIN_TICK_MS"], ms)


class GameSession:
    def __init__(self, cols: Optional[int] = None, rows: Optional[int] = None,
                 kind_source: Optional[KindSource] = None):
        self.playfield = Playfield(cols, rows)
        self.controller = PieceController(self.playfield, kind_source)
        self.score = 0
        self.lines = 0
        self.last_cleared = 0
        self.playing = False
        self.paused = False
        self.over = False

    # ---------- derived state ----------
    @property
    def level(self) -> int:
        return level_for_lines(self.lines)

    @property
    def active(self) -> bool:
        return self.playing and not self.paused and not self.over

    @property
    def piece(self) -> Optional[Piece]:
        return self.controller.piece

    @property
    def next_kind(self) -> Optional[str]:
        return self.controller.next_kind

    def next_definition(self) -> Optional[ShapeDef]:
        k = self.controller.next_kind
        return definition_for(k) if k is not None else None

    def tick_interval_ms(self) -> int:
        return tick_interval_ms(self.level)

    # ---------- lifecycle ----------
    def start(self) -> Status:
        if self.over:
            return Status.GAME_OVER
        if self.playing:
            return Status.NOOP
        if self.controller.piece is None and not self.controller.spawn():
            self._game_over()
            return Status.GAME_OVER
        self.playing = True
        log.debug("session started")
        return Status.APPLIED

    def pause(self) -> Status:
        if not self.playing or self.paused or self.over:
            return Status.NOOP
        self.paused = True
        return Status.APPLIED

    def resume(self) -> Status:
        if not self.paused:
            return Status.NOOP
        self.paused = False
        return Status.APPLIED

    def toggle_pause(self) -> Status:
        return self.resume() if self.paused else self.pause()

    def reset(self) -> Status:
        self.playfield.reset()
        self.controller.reset()
        self.score = 0
        self.lines = 0
        self.last_cleared = 0
        self.playing = False
        self.paused = False
        self.over = False
        return Status.APPLIED

    # ---------- commands ----------
    def tick(self) -> Status:
        """One gravity step."""
        if not self.active:
            return Status.NOOP
        return self._apply(self.controller.try_move(Direction.DOWN))

    def soft_drop(self) -> Status:
        return self.tick()

    def move_left(self) -> Status:
        if not self.active:
            return Status.NOOP
        return self._apply(self.controller.try_move(Direction.LEFT))

    def move_right(self) -> Status:
        if not self.active:
            return Status.NOOP
        return self._apply(self.controller.try_move(Direction.RIGHT))

    def rotate(self) -> Status:
        if not self.active or self.controller.piece is None:
            return Status.NOOP
        return Status.APPLIED if self.controller.try_rotate() else Status.BLOCKED

    def hard_drop(self) -> Status:
        """Drop straight down and lock; scored like any other lock."""
        if not self.active or self.controller.piece is None:
            return Status.NOOP
        return self._apply(self.controller.hard_drop())

    # ---------- queries ----------
    def grid(self) -> Tuple[Tuple[Cell, ...], ...]:
        return self.playfield.snapshot()

    def display_grid(self) -> List[List[Cell]]:
        """Locked cells with the falling piece drawn on top."""
        out = [list(row) for row in self.playfield.grid]
        p = self.controller.piece
        if p is not None:
            for x, y in p.cells():
                if y >= 0:
                    out[y][x] = p.color
        return out

    def ghost_y(self) -> Optional[int]:
        p = self.controller.piece
        if p is None:
            return None
        return self.playfield.landing_y(p.shape, p.x, p.y)

    # ---------- internals ----------
    def _apply(self, outcome: MoveOutcome) -> Status:
        if outcome.status is MoveStatus.MOVED:
            return Status.APPLIED
        if outcome.status is MoveStatus.BLOCKED:
            return Status.BLOCKED
        if outcome.status is MoveStatus.IDLE:
            return Status.NOOP
        return self._on_lock(outcome.rows_cleared)

    def _on_lock(self, rows: int) -> Status:
        self.last_cleared = rows
        if rows:
            gained = clear_score(rows, self.level)
            self.score += gained
            self.lines += rows
            log.debug("+%d points, lines=%d level=%d", gained, self.lines, self.level)
        if not self.controller.spawn():
            self._game_over()
            return Status.GAME_OVER
        return Status.LOCKED

    def _game_over(self) -> None:
        self.over = True
        self.playing = False
        self.paused = False
        log.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
