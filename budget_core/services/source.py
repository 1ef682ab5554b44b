from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Tuple

from budget_core.domain.models import BudgetConfig, Transaction


class TransactionSource(Protocol):
    """Year-wide view of transactions consumed by the resolver and the simulator."""

    def total_income(self) -> float: ...

    def total_expenses(self) -> float: ...

    def categories(self) -> List[str]: ...

    def amounts(self) -> List[float]: ...

    def is_expense_category(self, category: str) -> bool: ...

    def is_income_category(self, category: str) -> bool: ...

    def is_fixed_category(self, category: str) -> bool: ...


class LedgerSource:
    """
    ``TransactionSource`` over a sequence of transactions.
    Income is the sum of positive amounts, expenses the (negative) sum of the rest.
    """

    def __init__(self, transactions: Iterable[Transaction], config: Optional[BudgetConfig] = None):
        self._rows: List[Tuple[str, float]] = [(t.category, float(t.amount)) for t in transactions]
        self.config = config or BudgetConfig()

    def __len__(self) -> int:
        return len(self._rows)

    def total_income(self) -> float:
        return sum(amount for _, amount in self._rows if amount > 0)

    def total_expenses(self) -> float:
        return sum(amount for _, amount in self._rows if amount < 0)

    def categories(self) -> List[str]:
        return [category for category, _ in self._rows]

    def amounts(self) -> List[float]:
        return [amount for _, amount in self._rows]

    def is_expense_category(self, category: str) -> bool:
        return self.config.is_expense_category(category)

    def is_income_category(self, category: str) -> bool:
        return self.config.is_income_category(category)

    def is_fixed_category(self, category: str) -> bool:
        return self.config.is_fixed_category(category)
