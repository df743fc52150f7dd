# tests/test_best.py
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from stack_best import BestScore


def test_missing_file_reads_as_zero(tmp_path: Path) -> None:
    assert BestScore(tmp_path / "nope.json").load() == 0


def test_record_only_saves_improvements(tmp_path: Path) -> None:
    path = tmp_path / "sub" / "best.json"
    best = BestScore(path)
    best.load()
    assert best.record(300) is True
    assert json.loads(path.read_text(encoding="utf-8")) == {"best": 300}
    assert best.record(200) is False
    assert best.record(300) is False
    assert BestScore(path).load() == 300


def test_corrupt_file_is_ignored_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "best.json"
    path.write_text("{not-json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="stack_best"):
        assert BestScore(path).load() == 0
    assert "ignoring best score file" in caplog.text


@pytest.mark.parametrize("payload", ['{"best": -5}', '{"best": "lots"}', "[1, 2]"])
def test_unexpected_payload_reads_as_zero(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "best.json"
    path.write_text(payload, encoding="utf-8")
    assert BestScore(path).load() == 0
