
"""Key mapping, DAS/ARR auto-repeat and the gravity clock"""
from typing import Optional

import pygame

from stack_config import CONFIG
from stack_session import GameSession, Status


class ShiftRepeat:
    """Horizontal auto-shift: one step on press, then one every ARR ms once
    the key has been held for DAS ms. ARR 0 steps every frame."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.dir = 0
        self.held_ms = 0
        self.since_step_ms = 0

    def update(self, dt, left, right) -> int:
        nd = int(bool(right)) - int(bool(left))
        if nd != self.dir:
            self.reset()
            self.dir = nd
            return nd
        if nd == 0:
            return 0
        self.held_ms += dt
        if self.held_ms < CONFIG["DAS_MS"]:
            return 0
        if CONFIG["ARR_MS"] <= 0:
            return nd
        self.since_step_ms += dt
        if self.since_step_ms < CONFIG["ARR_MS"]:
            return 0
        self.since_step_ms = 0
        return nd


class GravityClock:
    """Turns frame time into ``tick()`` calls at the session's level cadence."""

    def __init__(self):
        self.acc = 0

    def reset(self):
        self.acc = 0

    def update(self, session: GameSession, dt) -> Status:
        """Deliver every tick that fell due; returns the last tick's status."""
        status = Status.NOOP
        if not session.active:
            return status
        self.acc += dt
        while session.active and self.acc >= session.tick_interval_ms():
            self.acc -= session.tick_interval_ms()
            status = session.tick()
        return status


def shift(session: GameSession, step: int) -> Status:
    if step < 0: return session.move_left()
    if step > 0: return session.move_right()
    return Status.NOOP


def restart(session: GameSession) -> Status:
    session.reset()
    return session.start()


# Left/Right go through ShiftRepeat, not through this table.
KEY_COMMANDS = {
    pygame.K_UP: GameSession.rotate,
    pygame.K_DOWN: GameSession.soft_drop,
    pygame.K_SPACE: GameSession.hard_drop,
    pygame.K_RETURN: GameSession.start,
    pygame.K_p: GameSession.toggle_pause,
    pygame.K_r: restart,
}

# Commands that begin a fresh gravity interval when they take effect.
FRESH_PIECE = (GameSession.start, restart)


def dispatch_key(session: GameSession, key: int, gravity: Optional[GravityClock] = None) -> Status:
    cmd = KEY_COMMANDS.get(key)
    if cmd is None:
        return Status.NOOP
    status = cmd(session)
    if gravity is not None and (status is Status.LOCKED or
                                (cmd in FRESH_PIECE and status is Status.APPLIED)):
        gravity.reset()
    return status
