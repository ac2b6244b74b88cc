"""Tests for the Excel report."""

from openpyxl import load_workbook

from excel_export import export_excel
from models import Session

from conftest import make_round


def _rows(ws):
    return [list(r) for r in ws.iter_rows(values_only=True)]


def test_report_has_five_sheets(tmp_path, abc):
    s = Session(players=abc, rounds=[make_round("r1", "a", b=50, c=-20), make_round("r2", "", b=5)])
    path = str(tmp_path / "out.xlsx")
    export_excel(s, path)

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Rounds", "Debts by round", "Settlement", "Settlement by person"]

    assert _rows(wb["Summary"]) == [["Name", "Total"], ["A", -30], ["B", 50], ["C", -20]]
    assert _rows(wb["Rounds"])[1:] == [[1, "A", -30, 50, -20], [2, "N/A", 0, 5, 0]]
    assert _rows(wb["Debts by round"])[1:] == [[1, "A", "A", "B", 50], [1, "A", "C", "A", 20]]
    assert _rows(wb["Settlement"])[1:] == [["A", "B", 30], ["C", "B", 20]]
    assert _rows(wb["Settlement by person"])[1] == ["B", 0, 50, 50]


def test_empty_session_exports_headers_only(tmp_path, abc):
    path = str(tmp_path / "empty.xlsx")
    export_excel(Session(players=abc, rounds=[]), path)
    wb = load_workbook(path)
    assert _rows(wb["Settlement"]) == [["Payer", "Payee", "Amount"]]


def test_whole_amounts_use_integer_format(tmp_path, abc):
    s = Session(players=abc, rounds=[make_round("r1", "a", b=50, c=-20.5)])
    path = str(tmp_path / "fmt.xlsx")
    export_excel(s, path)
    ws = load_workbook(path)["Summary"]
    # B total 50, C total -20.5
    assert ws.cell(3, 2).number_format == "#,##0"
    assert ws.cell(4, 2).number_format == "#,##0.##"
