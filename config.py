"""
Configuration and session loading/saving for BankerLedger
"""
from __future__ import annotations
import json
import logging
import os
from typing import Optional, Tuple

from models import GameRound, Player, Session
from utils import amount_to_json, app_dir, new_id

logger = logging.getLogger(__name__)

DEFAULT_MONEY_STEP = 10000
DEFAULT_PLAYER_COUNT = 3
SESSION_FILENAME = "session.json"


def default_session_path() -> str:
    return os.path.join(app_dir(), SESSION_FILENAME)


def get_default_session() -> Session:
    """Create a fresh session with the default roster and no rounds"""
    players = [Player(id=new_id(), name=f"Player {i + 1}") for i in range(DEFAULT_PLAYER_COUNT)]
    return Session(players=players, rounds=[], money_step=DEFAULT_MONEY_STEP)


def session_to_dict(session: Session) -> dict:
    """Convert Session object to dictionary for JSON serialization"""
    return {
        "version": session.version,
        "money_step": session.money_step,
        "players": [{"id": p.id, "name": p.name} for p in session.players],
        "rounds": [
            {
                "id": r.id,
                "banker_id": r.banker_id,
                "values": {pid: amount_to_json(v) for pid, v in r.values.items()},
            } for r in session.rounds
        ],
    }


def dict_to_session(d: dict) -> Session:
    """Convert dictionary from JSON to Session object (camelCase keys accepted)"""
    players = [Player(id=str(p["id"]), name=str(p.get("name", ""))) for p in d.get("players", [])]
    rounds = [
        GameRound(
            id=str(r["id"]),
            banker_id=str(r.get("banker_id", r.get("bankerId")) or ""),
            values=dict(r.get("values") or {}),
        ) for r in d.get("rounds", [])
    ]
    return Session(
        version=d.get("version", 1),
        players=players,
        rounds=rounds,
        money_step=int(d.get("money_step", d.get("moneyStep", DEFAULT_MONEY_STEP)) or DEFAULT_MONEY_STEP),
    )


def load_session(path: Optional[str] = None) -> Session:
    """Load session from JSON file; a missing file gives the default session"""
    path = path or default_session_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No session file at %s, starting a new session", path)
        return get_default_session()
    session = dict_to_session(data)
    logger.info("Loaded session from %s (%d players, %d rounds)", path, len(session.players), len(session.rounds))
    return session


def load_session_or_default(path: Optional[str] = None) -> Tuple[Session, Optional[Exception]]:
    """
    Load session for startup; an unreadable or malformed file gives the
    default session plus the error that was raised
    """
    try:
        return load_session(path), None
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as ex:
        logger.exception("Could not load session from %s, starting a new session", path or default_session_path())
        return get_default_session(), ex


def save_session(session: Session, path: Optional[str] = None) -> str:
    """Write session to JSON file, returning the path written"""
    path = path or default_session_path()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(session_to_dict(session), f, ensure_ascii=False, indent=2)
    logger.info("Saved session to %s", path)
    return path
