"""
Utility functions for BankerLedger application
"""
from __future__ import annotations
import os
import random
import time
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

ZERO = Decimal(0)


def new_id() -> str:
    """Opaque identifier: hex millisecond timestamp plus random suffix"""
    return f"{int(time.time() * 1000):x}-{random.getrandbits(52):x}"


def to_amount(x: Any) -> Decimal:
    """
    Convert an entered amount to Decimal.
    Missing, unparsable and non-finite values become 0.
    """
    if x is None or isinstance(x, bool):
        return ZERO
    if isinstance(x, Decimal):
        d = x
    elif isinstance(x, float):
        # shortest repr, so 0.1 -> Decimal("0.1")
        d = Decimal(repr(x))
    elif isinstance(x, (int, str)):
        try:
            d = Decimal(x.strip() if isinstance(x, str) else x)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    return d if d.is_finite() else ZERO


def amount_to_json(d: Decimal) -> Union[int, float]:
    """Plain JSON number for a Decimal amount"""
    d = to_amount(d)
    if d == d.to_integral_value():
        return int(d)
    return float(d)


def parse_amount(s: str, default: Optional[Decimal] = ZERO) -> Optional[Decimal]:
    """Parse user-typed amount, allowing thousands separators; default on error"""
    raw = (s or "").replace(",", "").replace("_", "").replace(" ", "").strip()
    if not raw:
        return default
    try:
        d = Decimal(raw)
    except InvalidOperation:
        return default
    return d if d.is_finite() else default


def format_amount(d: Decimal) -> str:
    """Thousands-grouped amount, without trailing zero decimals"""
    d = to_amount(d)
    if d == d.to_integral_value():
        return f"{int(d):,}"
    return f"{d.normalize():,f}"


def default_export_name(today: Optional[date] = None) -> str:
    """Default Excel report filename: results-YYYYMMDD.xlsx"""
    today = today or date.today()
    return f"results-{today.strftime('%Y%m%d')}.xlsx"


def app_dir() -> str:
    """
    Get application data directory: ~/.banker_ledger
    BANKER_LEDGER_HOME overrides it. Creates directory if it doesn't exist.
    """
    path = os.environ.get("BANKER_LEDGER_HOME") or os.path.expanduser("~/.banker_ledger")
    os.makedirs(path, exist_ok=True)
    return path
