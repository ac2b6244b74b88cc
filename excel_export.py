"""
Excel export functionality for BankerLedger
"""
from __future__ import annotations
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Session
from computations import compute_report, has_banker, round_row
from session import player_name
from utils import amount_to_json

logger = logging.getLogger(__name__)

AMOUNT_FORMAT = "#,##0.##"
INTEGER_FORMAT = "#,##0"


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F46E5")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            v = cell.value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _new_sheet(wb, title, headers):
    ws = wb.create_sheet(title)
    ws.append(headers)
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    return ws


def _finish(ws, amount_cols):
    for r in range(2, ws.max_row + 1):
        for c in amount_cols:
            cell = ws.cell(r, c)
            # whole amounts get no decimal point
            cell.number_format = INTEGER_FORMAT if isinstance(cell.value, int) else AMOUNT_FORMAT
    _autosize_columns(ws)


def export_excel(session: Session, filepath: str) -> None:
    """
    Export session to Excel file with five sheets:
    - Summary (balance per player)
    - Rounds (history with the banker's value filled in)
    - Debts by round
    - Settlement
    - Settlement by person
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    players = session.players
    report = compute_report(session)

    def name(pid):
        return player_name(players, pid)

    ws = _new_sheet(wb, "Summary", ["Name", "Total"])
    for p in players:
        ws.append([p.name, amount_to_json(report.balances[p.id])])
    _finish(ws, [2])

    # one column per player, banker's value filled in
    ws = _new_sheet(wb, "Rounds", ["Round", "Banker"] + [p.name for p in players])
    for i, r in enumerate(session.rounds, start=1):
        banker = name(r.banker_id) if has_banker(r, players) else "N/A"
        row = round_row(r, players)
        ws.append([i, banker] + [amount_to_json(row[p.id]) for p in players])
    _finish(ws, range(3, 3 + len(players)))

    ws = _new_sheet(wb, "Debts by round", ["Round", "Banker", "Payer", "Payee", "Amount"])
    for d in report.debts:
        ws.append([d.round_index, name(d.banker_id), name(d.from_id), name(d.to_id), amount_to_json(d.amount)])
    _finish(ws, [5])

    ws = _new_sheet(wb, "Settlement", ["Payer", "Payee", "Amount"])
    for t in report.transactions:
        ws.append([name(t.from_id), name(t.to_id), amount_to_json(t.amount)])
    _finish(ws, [3])

    ws = _new_sheet(wb, "Settlement by person", ["Person", "Pay", "Receive", "Net (receive - pay)"])
    for s in report.by_person:
        ws.append([name(s.person_id), amount_to_json(s.pay), amount_to_json(s.receive), amount_to_json(s.net)])
    _finish(ws, [2, 3, 4])

    wb.save(filepath)
    logger.info("Exported Excel report to %s", filepath)
