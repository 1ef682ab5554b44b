import pytest

from budget_core.domain.models import Transaction
from budget_core.services.source import LedgerSource
from budget_core.services.surplus import SurplusOptimizer


def _optimizer(rows) -> SurplusOptimizer:
    return SurplusOptimizer(LedgerSource([Transaction("06/01/2024", c, a) for c, a in rows]))


def test_allocation_plan_splits_surplus_by_spend_share():
    optimizer = _optimizer([("Compensation", 1300), ("Food", -300), ("Entertainment", -100), ("Rent", -600)])
    assert optimizer.surplus() == 300
    plan = optimizer.allocation_plan()
    assert list(plan) == ["Food", "Entertainment", "Rent"]
    assert plan["Food"] == pytest.approx(90)
    assert plan["Entertainment"] == pytest.approx(30)
    assert plan["Rent"] == pytest.approx(180)


def test_rounding_residue_goes_to_largest_category():
    optimizer = _optimizer([("Compensation", 400), ("Food", -100), ("Entertainment", -100), ("Education", -100)])
    plan = optimizer.allocation_plan()
    assert sum(plan.values()) == pytest.approx(100)
    assert plan["Food"] == pytest.approx(33.34)
    assert plan["Entertainment"] == pytest.approx(33.33)


def test_no_surplus_means_empty_plan():
    optimizer = _optimizer([("Compensation", 100), ("Food", -300)])
    assert optimizer.surplus() == 0
    assert optimizer.allocation_plan() == {}


def test_suggestion_names_largest_expense():
    assert "Rent" in _optimizer([("Compensation", 10), ("Food", -5), ("Rent", -50)]).suggestion()
    assert _optimizer([("Compensation", 10)]).suggestion() == "No expenses available to analyze."
