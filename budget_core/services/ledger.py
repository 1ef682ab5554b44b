from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Iterator, List, Optional

from budget_core.domain.models import AnnualSummary, BudgetConfig, CategoryGroup, DateLike, Transaction
from budget_core.logging_setup import get_logger
from budget_core.services import aggregator
from budget_core.services.source import LedgerSource

logger = get_logger(__name__)


class Ledger:
    """
    Ordered transactions for one user-year.

    Indices are positions in insertion order and shift down after a removal,
    so callers should not hold on to them across mutations. Input is taken
    as-is; validating dates, categories and amounts is the caller's job.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: List[Transaction] = [t.copy() for t in transactions or []]

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.get_all_transactions())

    def _valid_index(self, index: int, action: str) -> bool:
        if 0 <= index < len(self._transactions):
            return True
        logger.warning("Cannot %s transaction %d: ledger has %d entries", action, index, len(self._transactions))
        return False

    def add_transaction(self, date: DateLike, category: str, amount: float) -> None:
        self._transactions.append(Transaction(date=date, category=category, amount=amount))

    def remove_transaction(self, index: int) -> bool:
        if not self._valid_index(index, "remove"):
            return False
        del self._transactions[index]
        return True

    def update_transaction(self, index: int, new_date: DateLike, new_category: str, new_amount: float) -> bool:
        if not self._valid_index(index, "update"):
            return False
        txn = self._transactions[index]
        txn.date = new_date
        txn.category = new_category
        txn.amount = new_amount
        return True

    def get_transactions_by_month(self) -> List[List[Transaction]]:
        return aggregator.group_by_month(self.get_all_transactions())

    def get_transactions_by_category(self) -> "OrderedDict[str, CategoryGroup]":
        return aggregator.group_by_category(self.get_all_transactions())

    def calculate_monthly_totals(self) -> List[float]:
        return aggregator.monthly_totals(self._transactions)

    def calculate_annual_summary(self) -> AnnualSummary:
        return aggregator.annual_summary(self._transactions)

    def get_all_transactions(self) -> List[Transaction]:
        return [t.copy() for t in self._transactions]

    def as_source(self, config: Optional[BudgetConfig] = None) -> LedgerSource:
        return LedgerSource(self._transactions, config)
