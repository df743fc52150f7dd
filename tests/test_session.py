# tests/test_session.py
from __future__ import annotations

import pytest

from stack_config import CONFIG
from stack_piece import SHAPES
from stack_session import GameSession, Status, clear_score, level_for_lines, tick_interval_ms


def test_commands_before_start_are_noops(make_session) -> None:
    s = make_session()
    for cmd in (s.tick, s.move_left, s.move_right, s.rotate, s.hard_drop, s.soft_drop, s.pause, s.resume):
        assert cmd() is Status.NOOP
    assert s.piece is None
    assert s.grid() == GameSession(10, 20).grid()


def test_start_spawns_once_and_is_idempotent(make_session) -> None:
    s = make_session(("O", "T"))
    assert s.start() is Status.APPLIED
    assert s.playing and s.piece.kind == "O" and s.next_kind == "T"
    first = s.piece
    assert s.start() is Status.NOOP
    assert s.piece == first


def test_centered_o_spawn_is_valid_on_empty_field(make_session) -> None:
    s = make_session(("O",))
    s.start()
    p = s.piece
    assert (p.x, p.y) == (4, 0)
    assert s.playfield.is_valid_placement(p.shape, p.x, p.y)


def test_tick_moves_piece_down(make_session) -> None:
    s = make_session()
    s.start()
    assert s.tick() is Status.APPLIED
    assert s.piece.y == 1


def test_pause_gates_tick_and_moves(make_session) -> None:
    s = make_session()
    s.start()
    assert s.pause() is Status.APPLIED
    assert s.pause() is Status.NOOP
    assert s.tick() is Status.NOOP
    assert s.move_left() is Status.NOOP
    assert s.rotate() is Status.NOOP
    assert s.piece.y == 0 and s.piece.x == 4
    assert s.resume() is Status.APPLIED
    assert s.tick() is Status.APPLIED
    assert s.piece.y == 1


def test_toggle_pause(make_session) -> None:
    s = make_session()
    s.start()
    s.toggle_pause()
    assert s.paused
    s.toggle_pause()
    assert not s.paused


def test_blocked_move_reports_blocked(make_session) -> None:
    s = make_session(("O",))
    s.start()
    for _ in range(4):
        assert s.move_left() is Status.APPLIED
    assert s.move_left() is Status.BLOCKED
    assert s.piece.x == 0


def test_four_rotations_restore_piece(make_session) -> None:
    s = make_session(("T",))
    s.start()
    before = s.piece
    for _ in range(4):
        assert s.rotate() is Status.APPLIED
    assert s.piece.shape == SHAPES["T"] == before.shape
    assert (s.piece.x, s.piece.y) == (before.x, before.y)


def test_hard_drop_locks_and_spawns_next(make_session) -> None:
    s = make_session(("O", "I"))
    s.start()
    assert s.hard_drop() is Status.LOCKED
    assert s.playfield.cell(4, 19) == "yellow"
    assert s.piece.kind == "I"
    assert s.score == 0 and s.lines == 0


def test_tick_lock_clears_row_and_scores(make_session) -> None:
    s = make_session(("I",))
    for x in range(6):
        s.playfield.commit(((1,),), x, 19, "red")
    s.start()
    for _ in range(3):
        s.move_right()
    statuses = [s.tick() for _ in range(20)]
    assert statuses.count(Status.LOCKED) == 1
    assert s.last_cleared == 1
    assert s.lines == 1 and s.score == 100 and s.level == 1


@pytest.mark.parametrize(
    "lines_before,gained,level_after",
    [(20, 600, 3), (18, 400, 3), (0, 200, 1), (9, 200, 2)],
)
def test_double_clear_uses_level_in_effect(make_session, lines_before, gained, level_after) -> None:
    s = make_session(("O",))
    s.lines = lines_before
    s.playfield.commit(((1,) * 8,) * 2, 0, 18, "red")
    s.start()
    score_before = s.score
    for _ in range(4):
        s.move_right()
    assert s.hard_drop() is Status.LOCKED
    assert s.last_cleared == 2
    assert s.score - score_before == gained
    assert s.lines == lines_before + 2
    assert s.level == level_after


def test_spawn_failure_at_start_is_game_over(make_session) -> None:
    s = make_session(("T",))
    s.playfield.commit(((1,) * 10,) * 2, 0, 0, "red")
    assert s.start() is Status.GAME_OVER
    assert s.over and not s.playing
    assert s.score == 0 and s.level == 1
    assert s.start() is Status.GAME_OVER
    assert s.tick() is Status.NOOP


def test_stack_to_top_ends_game(make_session) -> None:
    s = make_session(("O",), cols=4, rows=4)
    s.start()
    assert s.hard_drop() is Status.LOCKED
    assert s.hard_drop() is Status.GAME_OVER
    assert s.over and not s.playing
    assert s.piece is None
    assert s.score == 0


def test_score_never_decreases_and_level_tracks_lines(make_session) -> None:
    s = make_session(("I", "O", "T", "S", "Z", "J", "L"))
    s.start()
    last = 0
    while not s.over:
        s.hard_drop()
        assert s.score >= last
        assert s.level == s.lines // 10 + 1
        last = s.score


def test_reset_restores_fresh_state(make_session) -> None:
    s = make_session(("O",))
    s.start()
    s.hard_drop()
    s.lines = 12
    s.score = 900
    s.pause()
    assert s.reset() is Status.APPLIED
    assert (s.score, s.lines, s.level) == (0, 0, 1)
    assert not s.playing and not s.paused and not s.over
    assert s.piece is None and s.next_kind is None
    assert s.playfield.is_empty()
    assert s.start() is Status.APPLIED


def test_display_grid_overlays_piece_without_touching_playfield(make_session) -> None:
    s = make_session(("O",))
    s.start()
    shown = s.display_grid()
    assert shown[0][4] == "yellow" and shown[1][5] == "yellow"
    assert s.playfield.is_empty()
    assert s.ghost_y() == 18
    assert s.next_definition().kind == "O"


def test_sessions_are_independent(make_session) -> None:
    a = make_session(("O",))
    b = make_session(("I",))
    a.start()
    a.hard_drop()
    b.start()
    assert b.playfield.is_empty()
    assert b.piece.kind == "I"


@pytest.mark.parametrize("lines", range(0, 60, 7))
def test_level_formula(lines: int) -> None:
    assert level_for_lines(lines) == lines // 10 + 1


def test_clear_score_formula() -> None:
    assert clear_score(2, 3) == 600
    assert clear_score(4, 1) == 400
    assert clear_score(0, 9) == 0


@pytest.mark.parametrize("level,ms", [(1, 1000), (2, 900), (5, 600), (10, 100), (15, 100)])
def test_tick_interval(level: int, ms: int) -> None:
    assert tick_interval_ms(level) == ms


def test_tick_interval_follows_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(CONFIG, "MIN_TICK_MS", 250)
    assert tick_interval_ms(10) == 250


def test_reset_reports_applied_in_any_state(make_session) -> None:
    s = make_session(("T",))
    assert s.reset() is Status.APPLIED
    s.playfield.commit(((1,) * 10,) * 2, 0, 0, "red")
    assert s.start() is Status.GAME_OVER
    assert s.reset() is Status.APPLIED
    assert not s.over
    assert s.start() is Status.APPLIED
