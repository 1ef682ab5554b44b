from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Dict, Iterator, List, Optional, Tuple, Union

DateLike = Union[dt.date, str]

_DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_date(value: DateLike) -> Optional[dt.date]:
    """Return a ``date`` for ``value`` or ``None`` when it cannot be parsed."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


@dataclasses.dataclass
class Transaction:
    date: DateLike
    category: str
    amount: float  # > 0 income, < 0 expense

    @property
    def month(self) -> Optional[int]:
        parsed = parse_date(self.date)
        return parsed.month if parsed is not None else None

    @property
    def year(self) -> Optional[int]:
        parsed = parse_date(self.date)
        return parsed.year if parsed is not None else None

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    def copy(self) -> "Transaction":
        return dataclasses.replace(self)


@dataclasses.dataclass
class CategoryGroup:
    category: str
    transactions: List[Transaction] = dataclasses.field(default_factory=list)
    total: float = 0.0


@dataclasses.dataclass(frozen=True)
class AnnualSummary:
    total_income: float
    total_expenses: float

    @property
    def net_balance(self) -> float:
        return self.total_income + self.total_expenses

    def __iter__(self) -> Iterator[float]:
        return iter((self.total_income, self.total_expenses, self.net_balance))


@dataclasses.dataclass(frozen=True)
class AdjustmentSnapshot:
    plan: Tuple[float, ...]
    previous_expenses: Tuple[float, ...]
    previous_total_expenses: float


@dataclasses.dataclass(frozen=True)
class WhatIfResult:
    category: str
    amount_reduced: float
    remaining_deficit: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.amount_reduced, self.remaining_deficit))


@dataclasses.dataclass(frozen=True)
class ReportRecord:
    year: int
    month: int
    category: str
    amount: float
    kind: str  # "income" or "expense"

    @property
    def is_consistent(self) -> bool:
        if self.kind == "income":
            return self.amount >= 0
        if self.kind == "expense":
            return self.amount <= 0
        return False


@dataclasses.dataclass(frozen=True)
class SpendingLeader:
    label: Optional[str]
    total: float
    status: str = "ok"  # "ok", "no_data", "no_expense_data"

    @property
    def found(self) -> bool:
        return self.status == "ok"

    def __str__(self) -> str:
        if self.status == "no_data":
            return "No data for this year"
        if self.status == "no_expense_data":
            return "No expense data for this year"
        return f"{self.label} {self.total:.2f}"


@dataclasses.dataclass(frozen=True)
class NegativeBalanceMonth:
    month: int
    balance: float

    @property
    def name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def deficit(self) -> float:
        return abs(self.balance)

    def __str__(self) -> str:
        return f"{self.name}: deficit {self.deficit:.2f}"


@dataclasses.dataclass
class Scenario:
    name: str
    income_categories: List[str]
    income_values: List[float]
    expense_categories: List[str]
    expense_values: List[float]  # positive magnitudes

    def __post_init__(self) -> None:
        self.income_categories = list(self.income_categories)
        self.income_values = [float(v) for v in self.income_values]
        self.expense_categories = list(self.expense_categories)
        self.expense_values = [float(v) for v in self.expense_values]
        if len(self.income_categories) != len(self.income_values):
            raise ValueError("Income categories and values must be the same length")
        if len(self.expense_categories) != len(self.expense_values):
            raise ValueError("Expense categories and values must be the same length")

    @property
    def total_income(self) -> float:
        return sum(self.income_values)

    @property
    def total_expenses(self) -> float:
        return sum(self.expense_values)

    @property
    def net(self) -> float:
        return self.total_income - self.total_expenses

    def income_map(self) -> Dict[str, float]:
        return dict(zip(self.income_categories, self.income_values))

    def expense_map(self) -> Dict[str, float]:
        return dict(zip(self.expense_categories, self.expense_values))


@dataclasses.dataclass(frozen=True)
class CategoryDelta:
    category: str
    side: str  # "income" or "expense"
    value_a: float
    value_b: float

    @property
    def delta(self) -> float:
        return self.value_b - self.value_a


@dataclasses.dataclass
class ScenarioComparison:
    name_a: str
    name_b: str
    found: bool
    message: str = ""
    category_deltas: List[CategoryDelta] = dataclasses.field(default_factory=list)
    income_delta: float = 0.0
    expense_delta: float = 0.0
    net_delta: float = 0.0

    def summary(self) -> str:
        if not self.found:
            return self.message
        lines = [f"=== {self.name_a} vs {self.name_b} ==="]
        for item in self.category_deltas:
            lines.append(
                f" - {item.side} {item.category}: {item.value_a:.2f} -> {item.value_b:.2f} ({item.delta:+.2f})"
            )
        lines.append(f"Income change: {self.income_delta:+.2f}")
        lines.append(f"Expense change: {self.expense_delta:+.2f}")
        lines.append(f"Net change: {self.net_delta:+.2f}")
        return "\n".join(lines)


DEFAULT_FIXED_CATEGORIES = ("Rent", "Home", "Utilities", "Work")
DEFAULT_INCOME_CATEGORIES = ("Compensation", "Allowance", "Investments", "Other")
DEFAULT_EXPENSE_CATEGORIES = (
    "Home",
    "Rent",
    "Utilities",
    "Food",
    "Appearance",
    "Work",
    "Education",
    "Transportation",
    "Entertainment",
    "Professional Services",
    "Other",
)


def _contains(names: Tuple[str, ...], category: str) -> bool:
    key = category.strip().lower()
    return any(name.lower() == key for name in names)


@dataclasses.dataclass(frozen=True)
class BudgetConfig:
    fixed_categories: Tuple[str, ...] = DEFAULT_FIXED_CATEGORIES
    income_categories: Tuple[str, ...] = DEFAULT_INCOME_CATEGORIES
    expense_categories: Tuple[str, ...] = DEFAULT_EXPENSE_CATEGORIES
    flat_reduction_rate: float = 0.10

    def is_fixed_category(self, category: str) -> bool:
        return _contains(self.fixed_categories, category)

    def is_income_category(self, category: str) -> bool:
        return _contains(self.income_categories, category)

    def is_expense_category(self, category: str) -> bool:
        return _contains(self.expense_categories, category)


@dataclasses.dataclass
class ScenarioChange:
    name: str
    income_changes: Dict[str, float]
    expense_changes: Dict[str, float]
