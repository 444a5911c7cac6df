import json
import logging

import pytest

from xo.game import GameResult, O, X
from xo.scores import DEFAULT_KEY, ScoreStore, ScoreTally


def test_record_counts_finished_games():
    tally = ScoreTally()
    tally.record(GameResult.win(X, (0, 1, 2)))
    tally.record(GameResult.win(O, (2, 4, 6)))
    tally.record(GameResult.win(O, (0, 3, 6)))
    tally.record(GameResult.draw())
    tally.record(GameResult.in_progress())
    assert tally == ScoreTally(x=1, o=2, draw=1)
    assert tally.to_dict() == {"X": 1, "O": 2, "draw": 1}

    tally.reset()
    assert tally == ScoreTally()


def test_from_dict_roundtrip():
    assert ScoreTally.from_dict({"X": 4, "O": 0, "draw": 7}) == ScoreTally(4, 0, 7)


@pytest.mark.parametrize("data", [
    None,
    [1, 2, 3],
    {"X": 1, "O": 2},
    {"X": 1, "O": 2, "draw": "3"},
    {"X": -1, "O": 2, "draw": 3},
    {"X": 1.5, "O": 2, "draw": 3},
    {"X": True, "O": 2, "draw": 3},
])
def test_from_dict_rejects_malformed(data):
    with pytest.raises(ValueError):
        ScoreTally.from_dict(data)


def test_load_missing_file_gives_zero(tmp_path):
    store = ScoreStore(tmp_path / "scores.json")
    assert store.load() == ScoreTally()


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "scores.json"
    store = ScoreStore(path)
    assert store.save(ScoreTally(2, 1, 3))
    assert json.loads(path.read_text())[DEFAULT_KEY] == {"X": 2, "O": 1, "draw": 3}
    assert ScoreStore(path).load() == ScoreTally(2, 1, 3)


def test_save_keeps_other_entries(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"theme": "dark"}))
    ScoreStore(path).save(ScoreTally(1, 0, 0))
    doc = json.loads(path.read_text())
    assert doc["theme"] == "dark"
    assert doc[DEFAULT_KEY]["X"] == 1


def test_custom_key(tmp_path):
    path = tmp_path / "scores.json"
    ScoreStore(path, key="other").save(ScoreTally(0, 5, 0))
    assert ScoreStore(path).load() == ScoreTally()
    assert ScoreStore(path, key="other").load() == ScoreTally(0, 5, 0)


@pytest.mark.parametrize("content", [
    "not json",
    "[1, 2, 3]",
    json.dumps({DEFAULT_KEY: {"X": "many"}}),
    json.dumps({DEFAULT_KEY: [0, 0, 0]}),
])
def test_load_malformed_falls_back_to_zero(tmp_path, caplog, content):
    path = tmp_path / "scores.json"
    path.write_text(content)
    with caplog.at_level(logging.WARNING, logger="xo.scores"):
        assert ScoreStore(path).load() == ScoreTally()
    assert "Ignoring stored scores" in caplog.text


def test_save_over_malformed_file(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("{broken")
    assert ScoreStore(path).save(ScoreTally(1, 1, 1))
    assert ScoreStore(path).load() == ScoreTally(1, 1, 1)


def test_unwritable_path_is_logged_not_raised(tmp_path, caplog):
    # A directory cannot be read or written as a file
    store = ScoreStore(tmp_path)
    with caplog.at_level(logging.WARNING, logger="xo.scores"):
        assert store.load() == ScoreTally()
        assert store.save(ScoreTally(1, 0, 0)) is False
    assert "Could not save scores" in caplog.text
