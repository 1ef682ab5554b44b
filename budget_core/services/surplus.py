from __future__ import annotations

from collections import OrderedDict
from typing import Dict

from budget_core.logging_setup import get_logger
from budget_core.services.source import TransactionSource

logger = get_logger(__name__)


class SurplusOptimizer:
    """Suggests where a yearly surplus could go, mirroring ``DeficitResolver`` for the opposite case."""

    def __init__(self, source: TransactionSource):
        self.total_income = float(source.total_income())
        self.total_expenses = float(source.total_expenses())
        self.expenses: "OrderedDict[str, float]" = OrderedDict()
        for category, amount in zip(source.categories(), source.amounts()):
            if amount < 0 and source.is_expense_category(category):
                self.expenses[category] = self.expenses.get(category, 0.0) + -float(amount)

    def surplus(self) -> float:
        return max(0.0, self.total_income + self.total_expenses)

    def allocation_plan(self) -> Dict[str, float]:
        """
        Splits the surplus across expense categories by their share of spending.
        Any rounding residue is added to the largest category.
        """
        surplus = self.surplus()
        spend = sum(self.expenses.values())
        if surplus <= 0 or spend <= 0:
            return OrderedDict()

        plan: "OrderedDict[str, float]" = OrderedDict(
            (category, round(amount / spend * surplus, 2)) for category, amount in self.expenses.items()
        )
        residue = round(surplus - sum(plan.values()), 2)
        if residue:
            largest = max(self.expenses, key=self.expenses.__getitem__)
            plan[largest] = round(plan[largest] + residue, 2)
        return plan

    def suggestion(self) -> str:
        if not self.expenses:
            return "No expenses available to analyze."
        largest = max(self.expenses, key=self.expenses.__getitem__)
        msg = f"Consider reducing expenses in category: {largest}. Current amount: {self.expenses[largest]:.2f}"
        logger.debug(msg)
        return msg
