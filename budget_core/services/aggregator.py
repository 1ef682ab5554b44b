from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, List

from budget_core.domain.models import MONTH_NAMES, AnnualSummary, CategoryGroup, Transaction
from budget_core.logging_setup import get_logger

logger = get_logger(__name__)

MONTHS_PER_YEAR = 12


def month_name(month: int) -> str:
    """Name for a 1-based calendar month."""
    return MONTH_NAMES[month - 1]


def group_by_month(transactions: Iterable[Transaction]) -> List[List[Transaction]]:
    """
    Buckets transactions into twelve lists, January first.
    Entries whose month cannot be derived from their date are skipped.
    """
    buckets: List[List[Transaction]] = [[] for _ in range(MONTHS_PER_YEAR)]
    for txn in transactions:
        month = txn.month
        if month is None or not 1 <= month <= MONTHS_PER_YEAR:
            logger.debug("Skipping transaction with unusable date %r", txn.date)
            continue
        buckets[month - 1].append(txn)
    return buckets


def group_by_category(transactions: Iterable[Transaction]) -> "OrderedDict[str, CategoryGroup]":
    """Groups transactions by category, keeping the order categories first appear in."""
    groups: "OrderedDict[str, CategoryGroup]" = OrderedDict()
    for txn in transactions:
        group = groups.get(txn.category)
        if group is None:
            group = CategoryGroup(category=txn.category)
            groups[txn.category] = group
        group.transactions.append(txn)
        group.total += txn.amount
    return groups


def category_totals(transactions: Iterable[Transaction]) -> "OrderedDict[str, float]":
    return OrderedDict((name, group.total) for name, group in group_by_category(transactions).items())


def monthly_totals(transactions: Iterable[Transaction]) -> List[float]:
    return [sum(t.amount for t in bucket) for bucket in group_by_month(transactions)]


def annual_summary(transactions: Iterable[Transaction]) -> AnnualSummary:
    income = 0.0
    expenses = 0.0
    for txn in transactions:
        # zero amounts land on the expense side with no effect
        if txn.amount > 0:
            income += txn.amount
        else:
            expenses += txn.amount
    return AnnualSummary(total_income=income, total_expenses=expenses)
