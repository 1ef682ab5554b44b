import datetime as dt
import json
from pathlib import Path

import pytest

from budget_core.domain.models import BudgetConfig, Transaction
from budget_core.io import config as config_io
from budget_core.io import ledger as ledger_io

FIXTURE = Path(__file__).parent / "data" / "ledger.csv"


def test_load_ledger_fixture():
    entries = ledger_io.load_ledger(FIXTURE)
    assert len(entries) == 12
    assert entries[0] == Transaction(date="01/05/2024", category="Compensation", amount=3000.0)
    assert entries[1].month == 1
    assert entries[-1].year == 2024


def test_load_ledger_skips_incomplete_rows(tmp_path: Path):
    path = tmp_path / "ledger.csv"
    path.write_text("date, category ,AMOUNT\n01/01/2024,Food,-5\n01/02/2024,,-7\n01/03/2024,Food,abc\n")
    entries = ledger_io.load_ledger(path)
    assert entries == [Transaction("01/01/2024", "Food", -5.0)]


def test_load_ledger_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ledger_io.load_ledger(tmp_path / "missing.csv")

    bad = tmp_path / "bad.csv"
    bad.write_text("Date,Amount\n01/01/2024,5\n")
    with pytest.raises(ValueError):
        ledger_io.load_ledger(bad)


def test_save_then_load_keeps_rows(tmp_path: Path):
    path = ledger_io.ledger_path(tmp_path / "data", "alice", 2024)
    assert path.name == "alice_2024.csv"
    rows = [
        Transaction(dt.date(2024, 2, 3), "Food", -12.5),
        Transaction("11/30/2024", "Compensation", 900.0),
    ]
    ledger_io.save_ledger(path, rows)
    loaded = ledger_io.load_ledger(path)
    assert [(t.date, t.category, t.amount) for t in loaded] == [
        ("02/03/2024", "Food", -12.5),
        ("11/30/2024", "Compensation", 900.0),
    ]


def test_load_budget_config_overrides_defaults(tmp_path: Path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"fixed_categories": ["Rent"], "flat_reduction_rate": 0.2}))
    config = config_io.load_budget_config(path)
    assert config.fixed_categories == ("Rent",)
    assert config.flat_reduction_rate == 0.2
    assert config.expense_categories == BudgetConfig().expense_categories
    assert config.is_fixed_category("rent")
    assert not config.is_fixed_category("Home")


def test_load_scenario_change(tmp_path: Path):
    path = tmp_path / "change.json"
    path.write_text(json.dumps({"name": "Lean", "expense_changes": {"Food": "200"}}))
    change = config_io.load_scenario_change(path)
    assert change.name == "Lean"
    assert change.expense_changes == {"Food": 200.0}
    assert change.income_changes == {}

    path.write_text(json.dumps({"expense_changes": {}}))
    with pytest.raises(ValueError):
        config_io.load_scenario_change(path)
