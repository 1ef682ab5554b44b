from __future__ import annotations

from collections import OrderedDict
from typing import List, Optional, Sequence

import numpy as np

from budget_core.domain.models import AdjustmentSnapshot, WhatIfResult
from budget_core.logging_setup import get_logger
from budget_core.services.source import TransactionSource

logger = get_logger(__name__)

RENT_CATEGORY = "rent"


class DeficitResolver:
    """
    Works out how much of an income shortfall can be closed by cutting
    adjustable (non-fixed) expense categories, and proposes the cuts.

    The deficit is the overall shortfall ``-(income + expenses)`` capped at
    what the adjustable categories hold in total. The resolver keeps one
    undo slot for the most recent ``apply_adjustments`` call.
    """

    def __init__(self, source: TransactionSource, flat_reduction_rate: float = 0.10):
        self._source = source
        self.flat_reduction_rate = flat_reduction_rate
        self.total_income = float(source.total_income())
        self._total_expenses = float(source.total_expenses())  # negative

        totals: "OrderedDict[str, float]" = OrderedDict()
        for category, amount in zip(source.categories(), source.amounts()):
            if amount >= 0 or not source.is_expense_category(category):
                continue
            if source.is_fixed_category(category):
                continue
            totals[category] = totals.get(category, 0.0) + -float(amount)

        self._categories: List[str] = list(totals.keys())
        self._expenses: List[float] = list(totals.values())
        self._last_adjustment: Optional[AdjustmentSnapshot] = None

    @property
    def total_expenses(self) -> float:
        return self._total_expenses

    @property
    def overall_deficit(self) -> float:
        return max(0.0, -(self.total_income + self._total_expenses))

    def total_adjustable(self) -> float:
        return float(sum(self._expenses))

    def get_categories(self) -> List[str]:
        return list(self._categories)

    def get_expenses(self) -> List[float]:
        return list(self._expenses)

    def calculate_deficit(self) -> float:
        adjustable = self.total_adjustable()
        if self.overall_deficit <= 0.0 or adjustable <= 0.0:
            return 0.0
        return min(self.overall_deficit, adjustable)

    def identify_adjustments(self) -> List[float]:
        """
        Flat-rate plan: every adjustable category is cut by the flat rate of
        its spend, Rent is never cut. The plan is not scaled to the deficit.
        """
        if self.calculate_deficit() == 0:
            return [0.0] * len(self._categories)
        return [
            0.0 if category.lower() == RENT_CATEGORY else expense * self.flat_reduction_rate
            for category, expense in zip(self._categories, self._expenses)
        ]

    def proportional_reductions(self) -> List[float]:
        """Spreads the deficit across categories by each one's share of adjustable spend."""
        adjustable = self.total_adjustable()
        if self.overall_deficit <= 0.0 or adjustable <= 0.0:
            return [0.0] * len(self._categories)

        amount_to_cut = min(self.overall_deficit, adjustable)
        expenses = np.asarray(self._expenses, dtype=float)
        reductions = expenses / adjustable * amount_to_cut
        return np.minimum(reductions, expenses).tolist()

    def get_total_for_category(self, category: str) -> float:
        key = category.strip().lower()
        return float(sum(e for c, e in zip(self._categories, self._expenses) if c.lower() == key))

    def what_if_reduce_category(self, category: str) -> WhatIfResult:
        deficit = self.calculate_deficit()
        cat_total = self.get_total_for_category(category)
        if cat_total >= deficit:
            return WhatIfResult(category=category, amount_reduced=deficit, remaining_deficit=0.0)
        return WhatIfResult(category=category, amount_reduced=cat_total, remaining_deficit=deficit - cat_total)

    def generate_what_if_summary(self, category: str) -> str:
        result = self.what_if_reduce_category(category)
        lines = [
            f"=== What-If Scenario: Reduce {category} ===",
            f"Amount reduced: {result.amount_reduced:.2f}",
        ]
        if self.calculate_deficit() == 0.0:
            lines.append("There is no deficit to cover.")
        elif result.remaining_deficit == 0.0:
            lines.append(f"This eliminates your deficit of {self.calculate_deficit():.2f}")
        else:
            lines.append(f"Reducing {category} to zero covers {result.amount_reduced:.2f} of the deficit.")
            lines.append(f"Remaining deficit: {result.remaining_deficit:.2f}")
        return "\n".join(lines)

    def essential_expenses_cause_deficit(self) -> bool:
        """True when fixed-category spending alone is larger than income."""
        fixed_total = sum(
            -amount
            for category, amount in zip(self._source.categories(), self._source.amounts())
            if amount < 0 and self._source.is_fixed_category(category)
        )
        return fixed_total > self.total_income

    def generate_detailed_summary(self) -> str:
        if self.essential_expenses_cause_deficit():
            return (
                "Your essential expenses (such as rent, utilities and work costs) exceed your total income.\n"
                "Reducing adjustable spending alone cannot close the deficit."
            )

        deficit = self.overall_deficit
        lines = [
            "=== Annual Budget Deficit Summary ===",
            f"Annual deficit: {deficit:.2f}",
            f"Monthly equivalent: {deficit / 12.0:.2f}",
            "",
            "Reductions are proportional: categories with more spending receive larger cuts.",
            "",
            "=== Recommended Annual Reductions ===",
        ]
        for category, annual in zip(self._categories, self.proportional_reductions()):
            lines.append(f" - {category}: reduce {annual:.2f} annually (about {annual / 12.0:.2f}/month)")
        return "\n".join(lines)

    def apply_adjustments(self, plan: Optional[Sequence[float]] = None) -> bool:
        """
        Subtracts ``plan`` (default: the proportional plan) from the live category
        totals and remembers the previous state so one ``undo_adjustment`` can restore it.
        """
        if plan is None:
            plan = self.proportional_reductions()
        cuts = [float(v) for v in plan]
        if len(cuts) != len(self._categories):
            logger.warning(
                "Adjustment plan has %d entries, expected %d; not applied", len(cuts), len(self._categories)
            )
            return False
        if any(v < 0 for v in cuts):
            logger.warning("Adjustment plan contains negative reductions; not applied")
            return False

        snapshot = AdjustmentSnapshot(
            plan=tuple(cuts),
            previous_expenses=tuple(self._expenses),
            previous_total_expenses=self._total_expenses,
        )
        applied = 0.0
        new_expenses = []
        for expense, cut in zip(self._expenses, cuts):
            taken = min(expense, cut)
            applied += taken
            new_expenses.append(expense - taken)

        self._expenses = new_expenses
        self._total_expenses += applied
        self._last_adjustment = snapshot
        logger.info("Applied adjustments totalling %.2f across %d categories", applied, len(cuts))
        return True

    def undo_adjustment(self) -> bool:
        snapshot = self._last_adjustment
        if snapshot is None:
            logger.info("No adjustment to undo")
            return False
        self._expenses = list(snapshot.previous_expenses)
        self._total_expenses = snapshot.previous_total_expenses
        self._last_adjustment = None
        return True

    @property
    def last_adjustment(self) -> Optional[AdjustmentSnapshot]:
        return self._last_adjustment
