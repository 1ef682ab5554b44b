import datetime as dt

from budget_core.domain.models import Transaction
from budget_core.services import aggregator


def test_group_by_month_accepts_iso_and_date_objects():
    entries = [
        Transaction(dt.date(2024, 4, 2), "Food", -10),
        Transaction("2024-04-30", "Food", -5),
        Transaction("12/01/2024", "Compensation", 100),
    ]
    buckets = aggregator.group_by_month(entries)
    assert len(buckets[3]) == 2
    assert len(buckets[11]) == 1
    assert aggregator.monthly_totals(entries)[3] == -15


def test_category_totals_keep_first_seen_order():
    entries = [
        Transaction("01/01/2024", "Food", -10),
        Transaction("01/02/2024", "Compensation", 100),
        Transaction("01/03/2024", "Food", -15),
        Transaction("01/04/2024", "Appearance", -20),
    ]
    totals = aggregator.category_totals(entries)
    assert list(totals.items()) == [("Food", -25), ("Compensation", 100), ("Appearance", -20)]


def test_annual_summary_of_nothing_is_zero():
    summary = aggregator.annual_summary([])
    assert tuple(summary) == (0.0, 0.0, 0.0)


def test_month_name():
    assert aggregator.month_name(1) == "January"
    assert aggregator.month_name(12) == "December"
