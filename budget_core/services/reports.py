from __future__ import annotations

import dataclasses
from collections import OrderedDict
from typing import Callable, Dict, Iterable, List, Optional

import pandas as pd

from budget_core.domain.models import NegativeBalanceMonth, ReportRecord, SpendingLeader, Transaction, parse_date
from budget_core.logging_setup import get_logger
from budget_core.services.aggregator import MONTHS_PER_YEAR, month_name

logger = get_logger(__name__)

COLUMNS = ["year", "month", "category", "amount", "kind"]


def records_from_transactions(transactions: Iterable[Transaction], year: Optional[int] = None) -> List[ReportRecord]:
    """
    Tags transactions with year, month and kind for ``ReportAnalyzer``.
    Transactions with unparseable dates are left out; ``year`` fills in when given.
    """
    records: List[ReportRecord] = []
    for txn in transactions:
        parsed = parse_date(txn.date)
        if parsed is None:
            logger.debug("Skipping transaction with unusable date %r", txn.date)
            continue
        records.append(
            ReportRecord(
                year=year if year is not None else parsed.year,
                month=parsed.month,
                category=txn.category,
                amount=float(txn.amount),
                kind="income" if txn.amount > 0 else "expense",
            )
        )
    return records


class ReportAnalyzer:
    """Analytical queries over a read-only snapshot of year-tagged records."""

    def __init__(self, records: Iterable[ReportRecord]):
        rows = []
        for record in records:
            if not record.is_consistent:
                logger.warning(
                    "Dropping %s record for %s: kind %r disagrees with amount %.2f",
                    record.year,
                    record.category,
                    record.kind,
                    record.amount,
                )
                continue
            if not 1 <= record.month <= MONTHS_PER_YEAR:
                logger.warning(
                    "Dropping %s record for %s: month %r is outside 1-12",
                    record.year,
                    record.category,
                    record.month,
                )
                continue
            rows.append(dataclasses.asdict(record))
        self._frame = pd.DataFrame(rows, columns=COLUMNS)
        self._frame["amount"] = self._frame["amount"].astype(float)

    def __len__(self) -> int:
        return len(self._frame)

    def _for_year(self, year: int) -> pd.DataFrame:
        return self._frame[self._frame["year"] == year]

    @staticmethod
    def _most_negative(totals: pd.Series, label: Callable[[object], str]) -> SpendingLeader:
        negative = totals[totals < 0]
        if negative.empty:
            return SpendingLeader(label=None, total=0.0, status="no_expense_data")
        # idxmin keeps the first of equal minima
        key = negative.idxmin()
        return SpendingLeader(label=label(key), total=float(negative[key]))

    def find_highest_spending_month(self, year: int) -> SpendingLeader:
        df = self._for_year(year)
        if df.empty:
            return SpendingLeader(label=None, total=0.0, status="no_data")
        expenses = df[df["kind"] == "expense"]
        totals = expenses.groupby("month", sort=True)["amount"].sum()
        return self._most_negative(totals, lambda m: month_name(int(m)))

    def find_top_spending_category(self, year: int) -> SpendingLeader:
        df = self._for_year(year)
        if df.empty:
            return SpendingLeader(label=None, total=0.0, status="no_data")
        expenses = df[df["kind"] == "expense"]
        totals = expenses.groupby("category", sort=False)["amount"].sum()
        return self._most_negative(totals, str)

    def savings_trend(self, year: int) -> List[float]:
        """Income plus expenses for each month, January first; months without records are 0."""
        df = self._for_year(year)
        nets = df.groupby("month")["amount"].sum()
        return [float(nets.get(month, 0.0)) for month in range(1, MONTHS_PER_YEAR + 1)]

    def list_negative_balance_months(self, year: int) -> List[NegativeBalanceMonth]:
        return [
            NegativeBalanceMonth(month=month, balance=balance)
            for month, balance in enumerate(self.savings_trend(year), start=1)
            if balance < 0
        ]

    def monthly_average(self, year: int) -> float:
        """Mean monthly net over the months that have records."""
        df = self._for_year(year)
        if df.empty:
            return 0.0
        return float(df.groupby("month")["amount"].sum().mean())

    def category_totals(self, year: int) -> Dict[str, float]:
        df = self._for_year(year)
        totals = df.groupby("category", sort=False)["amount"].sum()
        return OrderedDict((str(k), float(v)) for k, v in totals.items())

    def compare_periods(self, year_a: int, year_b: int) -> Dict[str, float]:
        """Category totals of ``year_b`` minus those of ``year_a`` over both years' categories."""
        totals_a = self.category_totals(year_a)
        totals_b = self.category_totals(year_b)
        keys = list(totals_a) + [k for k in totals_b if k not in totals_a]
        return OrderedDict((k, totals_b.get(k, 0.0) - totals_a.get(k, 0.0)) for k in keys)
