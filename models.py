"""
Data models for BankerLedger application
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List


@dataclass
class Player:
    """Player on the roster"""
    id: str
    name: str


@dataclass
class GameRound:
    """Single round: the banker plays against everyone else"""
    id: str
    banker_id: str = ""  # "" when no banker is chosen yet
    values: Dict[str, Any] = field(default_factory=dict)  # non-banker player id -> signed amount


@dataclass
class DebtItem:
    """One round's result restated as a payment between banker and player"""
    round_index: int  # 1-based position in the round list
    banker_id: str
    from_id: str
    to_id: str
    amount: Decimal


@dataclass
class Transaction:
    """Settlement payment from a debtor to a creditor"""
    from_id: str
    to_id: str
    amount: Decimal


@dataclass
class PersonSettlement:
    """Totals of one player's settlement payments"""
    person_id: str
    pay: Decimal
    receive: Decimal
    net: Decimal  # receive - pay


@dataclass
class SettlementReport:
    """Everything the engine derives from a session in one pass"""
    balances: Dict[str, Decimal]
    debts: List[DebtItem]
    transactions: List[Transaction]
    by_person: List[PersonSettlement]


@dataclass
class Session:
    """Roster and round list, the only mutable state"""
    players: List[Player]
    rounds: List[GameRound]
    money_step: int = 10000  # increment used by the round editor
    version: int = 1
