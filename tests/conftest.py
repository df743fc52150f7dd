# tests/conftest.py
from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from typing import Callable, Optional, Sequence

import pytest

from stack_rng import SequenceSource
from stack_session import GameSession


@pytest.fixture
def make_session() -> Callable[..., GameSession]:
    def _make(kinds: Sequence[str] = ("O",), cols: Optional[int] = 10, rows: Optional[int] = 20) -> GameSession:
        return GameSession(cols, rows, SequenceSource(kinds))

    return _make
