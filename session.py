"""
Roster and round editing for a BankerLedger session.
These are the only operations that mutate a Session.
"""
from __future__ import annotations
from typing import Any, List, Optional

from config import DEFAULT_MONEY_STEP
from models import GameRound, Player, Session
from utils import new_id, to_amount


def player_name(players: List[Player], player_id: str) -> str:
    """Display name for a player id, or the id itself when unknown"""
    return next((p.name for p in players if p.id == player_id), player_id)


def find_round(session: Session, round_id: str) -> Optional[GameRound]:
    return next((r for r in session.rounds if r.id == round_id), None)


# ---------- Players ----------
def add_player(session: Session, name: Optional[str] = None) -> Player:
    """Append a player; default name is 'Player N'"""
    p = Player(id=new_id(), name=name or f"Player {len(session.players) + 1}")
    session.players.append(p)
    return p


def rename_player(session: Session, player_id: str, name: str) -> None:
    for p in session.players:
        if p.id == player_id:
            p.name = name
            break


def remove_player(session: Session, player_id: str) -> None:
    """Remove a player and their entries; rounds they banked lose their banker"""
    session.players = [p for p in session.players if p.id != player_id]
    for r in session.rounds:
        r.values.pop(player_id, None)
        if r.banker_id == player_id:
            r.banker_id = ""


# ---------- Rounds ----------
def add_round(session: Session) -> GameRound:
    """Append an empty round; the banker carries over from the last round"""
    last_banker = session.rounds[-1].banker_id if session.rounds else ""
    r = GameRound(id=new_id(), banker_id=last_banker, values={})
    session.rounds.append(r)
    return r


def set_banker(session: Session, round_id: str, banker_id: str) -> None:
    r = find_round(session, round_id)
    if r is None:
        return
    r.banker_id = banker_id or ""
    # the banker's value is always derived
    r.values.pop(r.banker_id, None)


def set_round_value(session: Session, round_id: str, player_id: str, value: Any) -> None:
    """Record a player's result for a round; ignored for the banker"""
    r = find_round(session, round_id)
    if r is None or player_id == r.banker_id:
        return
    r.values[player_id] = to_amount(value)


def remove_round(session: Session, round_id: str) -> None:
    session.rounds = [r for r in session.rounds if r.id != round_id]


def reset_game(session: Session) -> None:
    """Clear all rounds, keep the roster"""
    session.rounds = []
    session.money_step = DEFAULT_MONEY_STEP


def import_rounds(session: Session, rounds: List[GameRound], append: bool = True) -> None:
    """Append or replace rounds; ids already in use get a fresh id"""
    taken = {r.id for r in session.rounds} if append else set()
    fresh = []
    for r in rounds:
        if r.id in taken:
            r = GameRound(id=new_id(), banker_id=r.banker_id, values=dict(r.values))
        taken.add(r.id)
        fresh.append(r)
    session.rounds = session.rounds + fresh if append else fresh
