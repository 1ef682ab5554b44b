from budget_core.domain.models import (  # noqa: F401
    AdjustmentSnapshot,
    AnnualSummary,
    BudgetConfig,
    CategoryDelta,
    CategoryGroup,
    NegativeBalanceMonth,
    ReportRecord,
    Scenario,
    ScenarioChange,
    ScenarioComparison,
    SpendingLeader,
    Transaction,
    WhatIfResult,
)

__all__ = [
    "AdjustmentSnapshot",
    "AnnualSummary",
    "BudgetConfig",
    "CategoryDelta",
    "CategoryGroup",
    "NegativeBalanceMonth",
    "ReportRecord",
    "Scenario",
    "ScenarioChange",
    "ScenarioComparison",
    "SpendingLeader",
    "Transaction",
    "WhatIfResult",
]
