from __future__ import annotations

import copy
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from budget_core.domain.models import CategoryDelta, Scenario, ScenarioChange, ScenarioComparison
from budget_core.logging_setup import get_logger
from budget_core.services.source import TransactionSource

logger = get_logger(__name__)


def _seed_lists(source: TransactionSource) -> Tuple[Dict[str, float], Dict[str, float]]:
    income: "OrderedDict[str, float]" = OrderedDict()
    expense: "OrderedDict[str, float]" = OrderedDict()
    for category, amount in zip(source.categories(), source.amounts()):
        if amount > 0:
            income[category] = income.get(category, 0.0) + float(amount)
        elif amount < 0:
            expense[category] = expense.get(category, 0.0) + -float(amount)
    return income, expense


def _find(categories: List[str], category: str) -> Optional[int]:
    key = category.strip().lower()
    for idx, name in enumerate(categories):
        if name.lower() == key:
            return idx
    return None


class ScenarioSimulator:
    """
    Named what-if variants of a base dataset's income and expense allocations.
    Expense values are kept as positive magnitudes.
    """

    def __init__(self, source: Optional[TransactionSource] = None):
        self._base: Optional[Tuple[Dict[str, float], Dict[str, float]]] = (
            _seed_lists(source) if source is not None else None
        )
        self._scenarios: "OrderedDict[str, Scenario]" = OrderedDict()

    def scenario_names(self) -> List[str]:
        return list(self._scenarios)

    def get_scenario(self, name: str) -> Optional[Scenario]:
        scenario = self._scenarios.get(name)
        return copy.deepcopy(scenario) if scenario is not None else None

    def create_scenario(self, name: str) -> bool:
        if self._base is None:
            logger.warning("Cannot create scenario %r: no base data loaded", name)
            return False
        if name in self._scenarios:
            logger.warning("Scenario %r already exists", name)
            return False
        income, expense = self._base
        self._scenarios[name] = Scenario(
            name=name,
            income_categories=list(income.keys()),
            income_values=list(income.values()),
            expense_categories=list(expense.keys()),
            expense_values=list(expense.values()),
        )
        return True

    def _apply(self, scenario_name: str, category: str, new_amount: float, side: str) -> bool:
        scenario = self._scenarios.get(scenario_name)
        if scenario is None:
            logger.warning("Unknown scenario %r", scenario_name)
            return False
        categories = scenario.income_categories if side == "income" else scenario.expense_categories
        values = scenario.income_values if side == "income" else scenario.expense_values
        idx = _find(categories, category)
        if idx is None:
            logger.warning("Scenario %r has no %s category %r", scenario_name, side, category)
            return False
        values[idx] = float(new_amount)
        return True

    def apply_expense_change(self, scenario_name: str, category: str, new_amount: float) -> bool:
        return self._apply(scenario_name, category, new_amount, "expense")

    def apply_income_change(self, scenario_name: str, category: str, new_amount: float) -> bool:
        return self._apply(scenario_name, category, new_amount, "income")

    def apply_change(self, change: ScenarioChange) -> bool:
        """Creates ``change.name`` if needed and applies every listed change; False if any fails."""
        if change.name not in self._scenarios and not self.create_scenario(change.name):
            return False
        ok = True
        for category, amount in change.income_changes.items():
            ok = self.apply_income_change(change.name, category, amount) and ok
        for category, amount in change.expense_changes.items():
            ok = self.apply_expense_change(change.name, category, amount) and ok
        return ok

    def compare_scenarios(self, name_a: str, name_b: str) -> ScenarioComparison:
        missing = [n for n in (name_a, name_b) if n not in self._scenarios]
        if missing:
            return ScenarioComparison(
                name_a=name_a,
                name_b=name_b,
                found=False,
                message=f"Unknown scenario(s): {', '.join(missing)}",
            )

        a = self._scenarios[name_a]
        b = self._scenarios[name_b]
        deltas: List[CategoryDelta] = []
        for side, map_a, map_b in (
            ("income", a.income_map(), b.income_map()),
            ("expense", a.expense_map(), b.expense_map()),
        ):
            keys = list(map_a) + [k for k in map_b if k not in map_a]
            for key in keys:
                deltas.append(
                    CategoryDelta(category=key, side=side, value_a=map_a.get(key, 0.0), value_b=map_b.get(key, 0.0))
                )

        return ScenarioComparison(
            name_a=name_a,
            name_b=name_b,
            found=True,
            category_deltas=deltas,
            income_delta=b.total_income - a.total_income,
            expense_delta=b.total_expenses - a.total_expenses,
            net_delta=b.net - a.net,
        )
