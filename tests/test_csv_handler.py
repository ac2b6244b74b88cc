"""Tests for CSV round history export/import."""

from decimal import Decimal

import pytest

from csv_handler import export_rounds_to_csv, import_rounds_from_csv

from conftest import make_round


def test_rounds_survive_csv(tmp_path):
    rounds = [
        make_round("r1", "a", b=Decimal(50), c=Decimal("-20.25")),
        make_round("r2", "", b=Decimal(0)),
        make_round("r3", "b"),
    ]
    path = str(tmp_path / "rounds.csv")
    export_rounds_to_csv(rounds, path)
    back = import_rounds_from_csv(path)
    assert [(r.id, r.banker_id) for r in back] == [("r1", "a"), ("r2", ""), ("r3", "b")]
    assert back[0].values == {"b": 50, "c": Decimal("-20.25")}
    assert back[2].values == {}


def test_malformed_amount_raises(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("id,banker_id,values\nr1,a,b:lots\n", encoding="utf-8")
    with pytest.raises(ValueError):
        import_rounds_from_csv(str(path))
