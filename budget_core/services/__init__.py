from budget_core.services.deficit import DeficitResolver  # noqa: F401
from budget_core.services.ledger import Ledger  # noqa: F401
from budget_core.services.reports import ReportAnalyzer, records_from_transactions  # noqa: F401
from budget_core.services.scenario import ScenarioSimulator  # noqa: F401
from budget_core.services.source import LedgerSource, TransactionSource  # noqa: F401
from budget_core.services.surplus import SurplusOptimizer  # noqa: F401

__all__ = [
    "DeficitResolver",
    "Ledger",
    "LedgerSource",
    "ReportAnalyzer",
    "ScenarioSimulator",
    "SurplusOptimizer",
    "TransactionSource",
    "records_from_transactions",
]
