"""Tests for session defaults and JSON persistence."""

import json
import os
from decimal import Decimal

from config import (
    DEFAULT_MONEY_STEP,
    default_session_path,
    dict_to_session,
    get_default_session,
    load_session,
    load_session_or_default,
    save_session,
    session_to_dict,
)
from models import GameRound

from conftest import make_round


def test_default_session_has_three_players():
    s = get_default_session()
    assert [p.name for p in s.players] == ["Player 1", "Player 2", "Player 3"]
    assert s.rounds == []
    assert s.money_step == DEFAULT_MONEY_STEP


def test_save_and_load_preserves_session(tmp_path, session):
    session.rounds = [make_round("r1", "a", b=Decimal("50"), c=Decimal("-20.5"))]
    path = str(tmp_path / "s.json")
    save_session(session, path)

    loaded = load_session(path)
    assert loaded.players == session.players
    assert loaded.rounds[0].banker_id == "a"
    assert loaded.rounds[0].values == {"b": 50, "c": -20.5}


def test_decimals_written_as_plain_numbers(session):
    session.rounds = [make_round("r1", "a", b=Decimal("50"), c=Decimal("-0.5"))]
    d = session_to_dict(session)
    assert d["rounds"][0]["values"] == {"b": 50, "c": -0.5}
    assert isinstance(d["rounds"][0]["values"]["b"], int)
    json.dumps(d)


def test_missing_file_gives_default_session(tmp_path):
    s = load_session(str(tmp_path / "nope.json"))
    assert len(s.players) == 3


def test_default_path_lives_in_app_dir():
    path = default_session_path()
    assert path.endswith("session.json")
    assert os.path.isdir(os.path.dirname(path))


def test_camel_case_keys_accepted():
    s = dict_to_session({
        "players": [{"id": "a", "name": "A"}],
        "rounds": [{"id": "r1", "bankerId": "a", "values": {}}],
        "moneyStep": 5000,
    })
    assert s.rounds == [GameRound("r1", "a", {})]
    assert s.money_step == 5000


def test_null_banker_becomes_empty():
    s = dict_to_session({"players": [], "rounds": [{"id": "r1", "banker_id": None}]})
    assert s.rounds[0].banker_id == ""


def test_corrupt_file_falls_back_to_default(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    s, err = load_session_or_default(str(path))
    assert isinstance(err, json.JSONDecodeError)
    assert len(s.players) == 3
    assert s.rounds == []
    # file left as it was
    assert path.read_text(encoding="utf-8") == "{not json"


def test_round_without_id_falls_back_to_default(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"players": [], "rounds": [{"banker_id": "a"}]}), encoding="utf-8")
    s, err = load_session_or_default(str(path))
    assert isinstance(err, KeyError)
    assert len(s.players) == 3


def test_good_file_loads_without_error(tmp_path, session):
    path = str(tmp_path / "s.json")
    save_session(session, path)
    s, err = load_session_or_default(path)
    assert err is None
    assert s.players == session.players
