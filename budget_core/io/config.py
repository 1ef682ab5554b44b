from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from budget_core.domain.models import (
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_FIXED_CATEGORIES,
    DEFAULT_INCOME_CATEGORIES,
    BudgetConfig,
    ScenarioChange,
)


def load_budget_config(path: str | Path) -> BudgetConfig:
    data = _read_json(path)
    return BudgetConfig(
        fixed_categories=tuple(data.get("fixed_categories", DEFAULT_FIXED_CATEGORIES)),
        income_categories=tuple(data.get("income_categories", DEFAULT_INCOME_CATEGORIES)),
        expense_categories=tuple(data.get("expense_categories", DEFAULT_EXPENSE_CATEGORIES)),
        flat_reduction_rate=float(data.get("flat_reduction_rate", 0.10)),
    )


def load_scenario_change(path: str | Path) -> ScenarioChange:
    data = _read_json(path)
    if "name" not in data:
        raise ValueError("Scenario change file needs a 'name'")
    return ScenarioChange(
        name=str(data["name"]),
        income_changes={k: float(v) for k, v in (data.get("income_changes") or {}).items()},
        expense_changes={k: float(v) for k, v in (data.get("expense_changes") or {}).items()},
    )


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
