"""
Settlement engine for BankerLedger.
Every function is pure: roster + rounds in, derived values out.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Dict, List

from models import DebtItem, GameRound, PersonSettlement, Player, Session, SettlementReport, Transaction
from utils import ZERO, to_amount


def has_banker(r: GameRound, players: List[Player]) -> bool:
    """Round counts only if its banker is set and still on the roster"""
    return bool(r.banker_id) and any(p.id == r.banker_id for p in players)


def normalize_round(r: GameRound, players: List[Player]) -> Dict[str, Decimal]:
    """
    Fill in the banker's value as minus the sum of everyone else's.
    Returns {} for a round without a (known) banker.
    """
    if not has_banker(r, players):
        return {}
    out = {p.id: to_amount(r.values.get(p.id)) for p in players if p.id != r.banker_id}
    out[r.banker_id] = -sum(out.values(), ZERO)
    return {p.id: out[p.id] for p in players}


def round_row(r: GameRound, players: List[Player]) -> Dict[str, Decimal]:
    """Per-player values for display; raw entries when the round has no banker"""
    if has_banker(r, players):
        return normalize_round(r, players)
    return {p.id: to_amount(r.values.get(p.id)) for p in players}


def compute_balances(players: List[Player], rounds: List[GameRound]) -> Dict[str, Decimal]:
    """Running total per roster player over all rounds"""
    totals = {p.id: ZERO for p in players}
    for r in rounds:
        for pid, v in normalize_round(r, players).items():
            totals[pid] += v
    return totals


def expand_round_debts(players: List[Player], rounds: List[GameRound]) -> List[DebtItem]:
    """
    Restate each round as banker <-> player payments.
    Positive value: banker pays the player. Negative: player pays the banker.
    """
    items = []
    for idx, r in enumerate(rounds, start=1):
        if not has_banker(r, players):
            continue
        for p in players:
            if p.id == r.banker_id:
                continue
            v = to_amount(r.values.get(p.id))
            if v == 0:
                continue
            if v > 0:
                items.append(DebtItem(idx, r.banker_id, r.banker_id, p.id, v))
            else:
                items.append(DebtItem(idx, r.banker_id, p.id, r.banker_id, -v))
    return items


def compute_settlement(balances: Dict[str, Decimal]) -> List[Transaction]:
    """
    Greedy settlement: the smallest debtor pays the smallest creditor.
    balance<0 debtor; balance>0 creditor.
    Yields at most debtors + creditors - 1 transactions, which is not always
    the fewest possible. Sorted by amount, largest first.
    """
    debtors = [[p, -to_amount(v)] for p, v in balances.items() if to_amount(v) < 0]
    creditors = [[p, to_amount(v)] for p, v in balances.items() if to_amount(v) > 0]
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1])

    transactions = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        x = min(debtor[1], creditor[1])
        if x > 0:
            transactions.append(Transaction(debtor[0], creditor[0], x))
            debtor[1] -= x
            creditor[1] -= x
        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1

    transactions.sort(key=lambda t: t.amount, reverse=True)
    return transactions


def summarize_by_person(players: List[Player], transactions: List[Transaction]) -> List[PersonSettlement]:
    """Pay/receive/net per player, largest net movement first"""
    out = []
    for p in players:
        pay = sum((t.amount for t in transactions if t.from_id == p.id), ZERO)
        receive = sum((t.amount for t in transactions if t.to_id == p.id), ZERO)
        out.append(PersonSettlement(p.id, pay, receive, receive - pay))
    out.sort(key=lambda s: abs(s.net), reverse=True)
    return out


def compute_report(session: Session) -> SettlementReport:
    """Run the whole pipeline over a session"""
    players = session.players
    balances = compute_balances(players, session.rounds)
    transactions = compute_settlement(balances)
    return SettlementReport(
        balances=balances,
        debts=expand_round_debts(players, session.rounds),
        transactions=transactions,
        by_person=summarize_by_person(players, transactions),
    )
