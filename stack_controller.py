
"""Falling-piece controller: spawn, move, rotate, lock"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from stack_board import Playfield
from stack_piece import Piece, rotate_cw
from stack_rng import KindSource, UniformRandom

log = logging.getLogger(__name__)


class Direction(enum.Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class ControllerState(enum.Enum):
    EMPTY = "empty"
    FALLING = "falling"
    LOCKING = "locking"  # only while try_move resolves a lock


class MoveStatus(enum.Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    LOCKED = "locked"
    IDLE = "idle"  # no active piece


@dataclass(frozen=True)
class MoveOutcome:
    status: MoveStatus
    rows_cleared: int = 0


class PieceController:
    """
    Owns the active piece and the one-piece lookahead.

    Every position or orientation change is checked against the playfield
    first; rejected moves leave the state untouched and are reported as a
    status, never raised. A DOWN move that is rejected locks the piece at
    its last valid position and clears full rows.
    """

    def __init__(self, playfield: Playfield, kind_source: Optional[KindSource] = None):
        self.playfield = playfield
        self.kind_source: KindSource = kind_source or UniformRandom()
        self.piece: Optional[Piece] = None
        self.next_kind: Optional[str] = None
        self.state = ControllerState.EMPTY

    def reset(self) -> None:
        self.piece = None
        self.next_kind = None
        self.state = ControllerState.EMPTY

    def peek_next(self) -> str:
        """Return the queued kind, drawing one if the queue is empty."""
        if self.next_kind is None:
            self.next_kind = self.kind_source()
        return self.next_kind

    def spawn(self, kind: Optional[str] = None) -> bool:
        """Place a new piece at the top centre. False means no room (game over)."""
        assert self.state is not ControllerState.FALLING, "spawn while a piece is falling"
        if kind is None:
            kind = self.peek_next()
        p = Piece.spawn(kind, self.playfield.cols)
        if not self.playfield.is_valid_placement(p.shape, p.x, p.y):
            log.debug("spawn of %s blocked at (%d, %d)", kind, p.x, p.y)
            return False
        self.piece = p
        self.state = ControllerState.FALLING
        self.next_kind = self.kind_source()
        return True

    def try_move(self, direction: Direction) -> MoveOutcome:
        if self.piece is None:
            return MoveOutcome(MoveStatus.IDLE)
        p = self.piece
        if self.playfield.is_valid_placement(p.shape, p.x + direction.dx, p.y + direction.dy):
            self.piece = p.moved(direction.dx, direction.dy)
            return MoveOutcome(MoveStatus.MOVED)
        if direction is not Direction.DOWN:
            return MoveOutcome(MoveStatus.BLOCKED)
        return MoveOutcome(MoveStatus.LOCKED, self._lock())

    def try_rotate(self) -> bool:
        """Rotate clockwise in place; no kicks, so a blocked rotation is refused."""
        if self.piece is None:
            return False
        p = self.piece
        shape = rotate_cw(p.shape)
        if not self.playfield.is_valid_placement(shape, p.x, p.y):
            return False
        self.piece = p.with_shape(shape)
        return True

    def drop_distance(self) -> int:
        if self.piece is None:
            return 0
        p = self.piece
        return self.playfield.landing_y(p.shape, p.x, p.y) - p.y

    def hard_drop(self) -> MoveOutcome:
        """Move straight to the landing row, then lock there."""
        if self.piece is None:
            return MoveOutcome(MoveStatus.IDLE)
        self.piece = self.piece.moved(0, self.drop_distance())
        return self.try_move(Direction.DOWN)

    def _lock(self) -> int:
        p = self.piece
        self.state = ControllerState.LOCKING
        self.playfield.commit(p.shape, p.x, p.y, p.color)
        cleared = self.playfield.clear_full_rows()
        log.debug("locked %s at (%d, %d), %d row(s) cleared", p.kind, p.x, p.y, cleared)
        self.piece = None
        self.state = ControllerState.EMPTY
        return cleared
