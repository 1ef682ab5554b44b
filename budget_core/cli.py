from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from budget_core.domain.models import BudgetConfig, Transaction
from budget_core.io import config as config_io
from budget_core.io import ledger as ledger_io
from budget_core.logging_setup import configure_logging
from budget_core.services import aggregator
from budget_core.services.deficit import DeficitResolver
from budget_core.services.ledger import Ledger
from budget_core.services.reports import ReportAnalyzer, records_from_transactions
from budget_core.services.scenario import ScenarioSimulator
from budget_core.services.surplus import SurplusOptimizer

app = typer.Typer(help="Yearly budget analytics: summaries, deficits, surpluses and what-if scenarios.")

BASELINE_SCENARIO = "baseline"


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)"),
):
    configure_logging(log_level)


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload: dict, out: Optional[Path], label: str) -> None:
    if out:
        _save_json(out, payload)
        typer.echo(f"{label} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _load_entries(ledger: Path) -> List[Transaction]:
    try:
        return ledger_io.load_ledger(ledger)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot read ledger {ledger}: {exc}") from exc


def _load_config(config: Optional[Path]) -> BudgetConfig:
    if config is None:
        return BudgetConfig()
    try:
        return config_io.load_budget_config(config)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot read config {config}: {exc}") from exc


def _resolver(ledger: Path, config: Optional[Path]) -> DeficitResolver:
    cfg = _load_config(config)
    book = Ledger(_load_entries(ledger))
    return DeficitResolver(book.as_source(cfg), flat_reduction_rate=cfg.flat_reduction_rate)


@app.command()
def summary(
    ledger: Path = typer.Option(..., help="CSV ledger with Date,Category,Amount"),
    table: bool = typer.Option(False, help="Render a monthly table instead of JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for summary JSON"),
):
    """Annual, monthly and per-category totals."""
    book = Ledger(_load_entries(ledger))
    annual = book.calculate_annual_summary()
    monthly = book.calculate_monthly_totals()

    if table:
        console = Console()
        grid = Table(title="Monthly totals")
        grid.add_column("Month")
        grid.add_column("Net", justify="right")
        for idx, total in enumerate(monthly, start=1):
            style = "red" if total < 0 else "green"
            grid.add_row(aggregator.month_name(idx), f"[{style}]{total:,.2f}[/{style}]")
        grid.add_section()
        grid.add_row("Income", f"{annual.total_income:,.2f}")
        grid.add_row("Expenses", f"{annual.total_expenses:,.2f}")
        grid.add_row("Net balance", f"{annual.net_balance:,.2f}")
        console.print(grid)
        return

    payload = {
        "annual": {
            "total_income": annual.total_income,
            "total_expenses": annual.total_expenses,
            "net_balance": annual.net_balance,
        },
        "monthly": {aggregator.month_name(i): total for i, total in enumerate(monthly, start=1)},
        "categories": {name: group.total for name, group in book.get_transactions_by_category().items()},
    }
    _emit(payload, out, "Summary")


@app.command()
def deficit(
    ledger: Path = typer.Option(..., help="CSV ledger with Date,Category,Amount"),
    config: Optional[Path] = typer.Option(None, help="Budget config JSON"),
    plan: str = typer.Option("proportional", help="Reduction plan: proportional|flat"),
    out: Optional[Path] = typer.Option(None, help="Output path for deficit JSON"),
):
    """Deficit figures and a reduction plan for adjustable categories."""
    resolver = _resolver(ledger, config)
    if plan == "flat":
        reductions = resolver.identify_adjustments()
    elif plan == "proportional":
        reductions = resolver.proportional_reductions()
    else:
        raise typer.BadParameter("plan must be 'proportional' or 'flat'")

    payload = {
        "overall_deficit": resolver.overall_deficit,
        "deficit": resolver.calculate_deficit(),
        "total_adjustable": resolver.total_adjustable(),
        "essential_expenses_exceed_income": resolver.essential_expenses_cause_deficit(),
        "plan": plan,
        "reductions": dict(zip(resolver.get_categories(), reductions)),
    }
    _emit(payload, out, "Deficit plan")


@app.command("what-if")
def what_if(
    category: str = typer.Argument(..., help="Adjustable category to cut first"),
    ledger: Path = typer.Option(..., help="CSV ledger with Date,Category,Amount"),
    config: Optional[Path] = typer.Option(None, help="Budget config JSON"),
):
    """Show how far cutting one category goes toward the deficit."""
    resolver = _resolver(ledger, config)
    typer.echo(resolver.generate_what_if_summary(category))


@app.command()
def surplus(
    ledger: Path = typer.Option(..., help="CSV ledger with Date,Category,Amount"),
    config: Optional[Path] = typer.Option(None, help="Budget config JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for surplus JSON"),
):
    """Surplus amount and a proportional allocation plan."""
    cfg = _load_config(config)
    optimizer = SurplusOptimizer(Ledger(_load_entries(ledger)).as_source(cfg))
    payload = {
        "surplus": optimizer.surplus(),
        "allocation": dict(optimizer.allocation_plan()),
        "suggestion": optimizer.suggestion(),
    }
    _emit(payload, out, "Surplus plan")


@app.command()
def insights(
    ledger: Path = typer.Option(..., help="CSV ledger with Date,Category,Amount"),
    year: int = typer.Option(..., help="Year to analyze"),
    out: Optional[Path] = typer.Option(None, help="Output path for insights JSON"),
):
    """Highest spending month, top category and negative-balance months."""
    analyzer = ReportAnalyzer(records_from_transactions(_load_entries(ledger)))
    month = analyzer.find_highest_spending_month(year)
    category = analyzer.find_top_spending_category(year)
    payload = {
        "year": year,
        "highest_spending_month": {"label": month.label, "total": month.total, "status": month.status},
        "top_spending_category": {"label": category.label, "total": category.total, "status": category.status},
        "negative_balance_months": [
            {"month": m.name, "balance": m.balance, "deficit": m.deficit}
            for m in analyzer.list_negative_balance_months(year)
        ],
        "monthly_average": analyzer.monthly_average(year),
    }
    _emit(payload, out, "Insights")


@app.command()
def scenario(
    change: Path = typer.Option(..., help="Scenario change JSON (name, income_changes, expense_changes)"),
    ledger: Path = typer.Option(..., help="CSV ledger with Date,Category,Amount"),
    out: Optional[Path] = typer.Option(None, help="Output path for comparison JSON"),
):
    """Apply a scenario change on top of the ledger and compare it with the baseline."""
    try:
        change_obj = config_io.load_scenario_change(change)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot read scenario change {change}: {exc}") from exc
    if change_obj.name == BASELINE_SCENARIO:
        raise typer.BadParameter(f"Scenario name {BASELINE_SCENARIO!r} is reserved for the unchanged ledger")

    simulator = ScenarioSimulator(Ledger(_load_entries(ledger)).as_source())
    simulator.create_scenario(BASELINE_SCENARIO)
    applied = simulator.apply_change(change_obj)
    comparison = simulator.compare_scenarios(BASELINE_SCENARIO, change_obj.name)
    if not comparison.found:
        raise typer.BadParameter(comparison.message)

    payload = {
        "baseline": BASELINE_SCENARIO,
        "scenario": change_obj.name,
        "all_changes_applied": applied,
        "category_deltas": [
            {"category": d.category, "side": d.side, "baseline": d.value_a, "scenario": d.value_b, "delta": d.delta}
            for d in comparison.category_deltas
        ],
        "income_delta": comparison.income_delta,
        "expense_delta": comparison.expense_delta,
        "net_delta": comparison.net_delta,
    }
    _emit(payload, out, "Scenario comparison")


if __name__ == "__main__":
    app()
