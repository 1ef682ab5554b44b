import pytest

from budget_core.domain.models import ReportRecord, Transaction
from budget_core.services.reports import ReportAnalyzer, records_from_transactions


def _rec(month, category, amount, year=2024):
    return ReportRecord(
        year=year,
        month=month,
        category=category,
        amount=amount,
        kind="income" if amount > 0 else "expense",
    )


def _analyzer() -> ReportAnalyzer:
    return ReportAnalyzer(
        [
            _rec(1, "Compensation", 3000),
            _rec(1, "Rent", -1200),
            _rec(1, "Food", -300),
            _rec(2, "Compensation", 3000),
            _rec(2, "Rent", -1200),
            _rec(2, "Entertainment", -1800),
            _rec(3, "Compensation", 1000),
            _rec(3, "Food", -1600),
            _rec(5, "Food", -50, year=2023),
        ]
    )


def test_highest_spending_month():
    leader = _analyzer().find_highest_spending_month(2024)
    assert leader.found
    assert leader.label == "February"
    assert leader.total == pytest.approx(-3000)


def test_top_spending_category():
    leader = _analyzer().find_top_spending_category(2024)
    assert leader.label == "Rent"
    assert leader.total == pytest.approx(-2400)
    assert str(leader) == "Rent -2400.00"


def test_ties_keep_first_month_and_category():
    analyzer = ReportAnalyzer(
        [
            _rec(4, "Food", -100),
            _rec(2, "Entertainment", -100),
            _rec(6, "Food", -50),
            _rec(6, "Entertainment", -50),
        ]
    )
    assert analyzer.find_highest_spending_month(2024).label == "February"
    assert analyzer.find_top_spending_category(2024).label == "Food"


def test_no_data_and_no_expense_data():
    analyzer = ReportAnalyzer([_rec(1, "Compensation", 100)])
    missing = analyzer.find_highest_spending_month(1999)
    assert missing.status == "no_data"
    assert missing.label is None
    assert str(missing) == "No data for this year"

    no_spend = analyzer.find_top_spending_category(2024)
    assert no_spend.status == "no_expense_data"
    assert no_spend.total == 0.0


def test_empty_snapshot():
    analyzer = ReportAnalyzer([])
    assert len(analyzer) == 0
    assert analyzer.find_highest_spending_month(2024).status == "no_data"
    assert analyzer.list_negative_balance_months(2024) == []
    assert analyzer.monthly_average(2024) == 0.0


def test_negative_balance_months():
    months = _analyzer().list_negative_balance_months(2024)
    assert [m.name for m in months] == ["March"]
    assert months[0].deficit == pytest.approx(600)
    assert str(months[0]) == "March: deficit 600.00"


def test_year_without_negative_months_is_empty():
    analyzer = ReportAnalyzer([_rec(1, "Compensation", 500), _rec(1, "Food", -100)])
    assert analyzer.list_negative_balance_months(2024) == []


def test_inconsistent_records_are_dropped():
    analyzer = ReportAnalyzer(
        [
            _rec(1, "Food", -10),
            ReportRecord(year=2024, month=1, category="Food", amount=-500, kind="income"),
        ]
    )
    assert len(analyzer) == 1
    assert analyzer.find_top_spending_category(2024).total == pytest.approx(-10)


def test_savings_trend_average_and_period_comparison():
    analyzer = _analyzer()
    trend = analyzer.savings_trend(2024)
    assert trend[:4] == pytest.approx([1500, 0, -600, 0])
    assert len(trend) == 12
    assert analyzer.monthly_average(2024) == pytest.approx(300)

    diff = analyzer.compare_periods(2023, 2024)
    assert list(diff) == ["Food", "Compensation", "Rent", "Entertainment"]
    assert diff["Food"] == pytest.approx(-1850)
    assert diff["Compensation"] == pytest.approx(7000)


def test_records_from_transactions_tag_kind_and_skip_bad_dates():
    records = records_from_transactions(
        [
            Transaction("03/02/2024", "Compensation", 100),
            Transaction("03/09/2024", "Food", -20),
            Transaction("garbage", "Food", -1),
        ]
    )
    assert [(r.year, r.month, r.kind) for r in records] == [(2024, 3, "income"), (2024, 3, "expense")]


def test_records_with_month_outside_calendar_are_dropped():
    analyzer = ReportAnalyzer(
        [
            _rec(13, "Food", -10),
            _rec(0, "Entertainment", -40),
            _rec(2, "Food", -5),
        ]
    )
    assert len(analyzer) == 1
    leader = analyzer.find_highest_spending_month(2024)
    assert leader.label == "February"
    assert leader.total == pytest.approx(-5)
    assert analyzer.find_top_spending_category(2024).label == "Food"


def test_only_out_of_range_months_means_no_data():
    analyzer = ReportAnalyzer([_rec(13, "Food", -10)])
    assert analyzer.find_highest_spending_month(2024).status == "no_data"
    assert analyzer.list_negative_balance_months(2024) == []


def test_monthly_average_uses_months_with_records():
    analyzer = ReportAnalyzer([_rec(1, "Compensation", 1200)])
    assert analyzer.monthly_average(2024) == pytest.approx(1200)
