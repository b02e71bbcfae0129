# tests/test_leaderboard.py
import json
import os
import sys

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from leaderboard import Leaderboard, ScoreEntry
from session import Difficulty


def _times(board, difficulty="easy"):
    return [entry.time for entry in board.load(difficulty)]


def test_scores_are_sorted_fastest_first():
    board = Leaderboard()
    for name, time in [("a", 12.0), ("b", 5.0), ("c", 8.0)]:
        board.submit("easy", name, time)

    assert _times(board) == [5.0, 8.0, 12.0]
    assert [entry.name for entry in board.load("easy")] == ["b", "c", "a"]


def test_board_is_capped_at_ten():
    board = Leaderboard()
    for i in range(10):
        assert board.submit("hard", f"p{i}", 10.0 + i)

    assert not board.submit("hard", "slow", 99.0)
    assert len(board.load("hard")) == 10
    assert "slow" not in [entry.name for entry in board.load("hard")]

    assert board.submit("hard", "fast", 1.0)
    assert _times(board, "hard")[0] == 1.0
    assert _times(board, "hard")[-1] == 18.0


def test_equal_times_keep_the_earlier_entry_first():
    board = Leaderboard()
    board.submit("easy", "first", 7.0)
    board.submit("easy", "second", 7.0)

    assert [entry.name for entry in board.load("easy")] == ["first", "second"]


def test_blank_name_is_a_no_op():
    board = Leaderboard()

    assert not board.submit("easy", "", 3.0)
    assert not board.submit("easy", "   ", 3.0)
    assert not board.submit("easy", None, 3.0)
    assert board.load("easy") == []


def test_boards_are_per_difficulty():
    board = Leaderboard()
    board.submit(Difficulty.EASY, "ann", 4.0)
    board.submit("medium", "bob", 9.0)

    assert board.load("easy") == [ScoreEntry("ann", 4.0)]
    assert board.load(Difficulty.MEDIUM) == [ScoreEntry("bob", 9.0)]
    assert board.load("hard") == []


def test_scores_persist_as_json(tmp_path):
    path = tmp_path / "nested" / "scores.json"
    Leaderboard(str(path)).submit("easy", "ann", 4.5)

    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"easy": [{"name": "ann", "time": 4.5}]}

    reopened = Leaderboard(str(path))
    assert reopened.load("easy") == [ScoreEntry("ann", 4.5)]


def test_load_sorts_and_truncates_stored_rows(tmp_path):
    path = tmp_path / "scores.json"
    rows = [{"name": f"p{i}", "time": float(20 - i)} for i in range(12)]
    path.write_text(json.dumps({"medium": rows}), encoding="utf-8")

    times = _times(Leaderboard(str(path)), "medium")
    assert len(times) == 10
    assert times == sorted(times)
    assert times[0] == 9.0


def test_missing_file_is_an_empty_board(tmp_path):
    board = Leaderboard(str(tmp_path / "nope.json"))

    assert board.load("easy") == []


def test_corrupt_file_is_an_empty_board(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    board = Leaderboard(str(path))

    assert board.load("easy") == []

    # Next submit replaces the broken file
    board.submit("easy", "ann", 2.0)
    assert Leaderboard(str(path)).load("easy") == [ScoreEntry("ann", 2.0)]


def test_bad_rows_are_skipped(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({"easy": [{"name": "ok", "time": 3}, {"time": "x"}, "junk"]}),
                    encoding="utf-8")

    assert Leaderboard(str(path)).load("easy") == [ScoreEntry("ok", 3.0)]


def test_failed_save_leaves_the_board_unchanged(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    board = Leaderboard(str(blocker / "scores.json"))

    for _ in range(2):
        with pytest.raises(OSError):
            board.submit("easy", "ann", 4.0)

    assert board.load("easy") == []


def test_failed_save_keeps_earlier_scores(tmp_path):
    path = tmp_path / "scores.json"
    board = Leaderboard(str(path))
    board.submit("easy", "ann", 4.0)

    # Parent directory replaced by a file: the next save cannot land
    board.path = tmp_path / "blocker" / "scores.json"
    (tmp_path / "blocker").write_text("x", encoding="utf-8")
    with pytest.raises(OSError):
        board.submit("easy", "bob", 2.0)

    assert board.load("easy") == [ScoreEntry("ann", 4.0)]
