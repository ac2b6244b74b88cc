"""Shared fixtures: a small roster and helpers to build rounds."""

import pytest

from models import GameRound, Player, Session


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    # keep app_dir() out of the real home directory
    monkeypatch.setenv("BANKER_LEDGER_HOME", str(tmp_path / "home"))


@pytest.fixture
def abc():
    return [Player("a", "A"), Player("b", "B"), Player("c", "C")]


@pytest.fixture
def session(abc):
    return Session(players=abc, rounds=[])


def make_round(rid, banker, **values):
    return GameRound(id=rid, banker_id=banker, values=dict(values))
