"""
CSV export and import of round history for BankerLedger
"""
from __future__ import annotations
import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import List

from models import GameRound
from utils import amount_to_json

logger = logging.getLogger(__name__)


def export_rounds_to_csv(rounds: List[GameRound], filepath: str) -> None:
    """
    Export rounds list to CSV file
    CSV columns: id, banker_id, values (player_id:amount;player_id:amount)
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['id', 'banker_id', 'values'])
        for r in rounds:
            values_str = ';'.join([f"{k}:{amount_to_json(v)}" for k, v in r.values.items()])
            writer.writerow([r.id, r.banker_id, values_str])
    logger.info("Exported %d rounds to %s", len(rounds), filepath)


def import_rounds_from_csv(filepath: str) -> List[GameRound]:
    """
    Import rounds list from CSV file
    Raises ValueError on a malformed amount
    """
    rounds = []

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        for row in reader:
            values = {}
            if row.get('values'):
                for pair in row['values'].split(';'):
                    if ':' not in pair:
                        continue
                    k, v = pair.rsplit(':', 1)
                    try:
                        values[k.strip()] = Decimal(v.strip())
                    except InvalidOperation:
                        raise ValueError(f"Invalid amount {v!r} in round {row['id']}") from None

            rounds.append(GameRound(
                id=row['id'],
                banker_id=row.get('banker_id') or "",
                values=values,
            ))

    logger.info("Imported %d rounds from %s", len(rounds), filepath)
    return rounds
