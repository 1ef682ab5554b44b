from budget_core.io.ledger import ledger_path, load_ledger, save_ledger  # noqa: F401
from budget_core.io.config import load_budget_config, load_scenario_change  # noqa: F401

__all__ = ["ledger_path", "load_ledger", "save_ledger", "load_budget_config", "load_scenario_change"]
