from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from budget_core.domain.models import Transaction, parse_date
from budget_core.logging_setup import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ["date", "category", "amount"]
DATE_FORMAT = "%m/%d/%Y"


def ledger_path(data_dir: str | Path, username: str, year: int) -> Path:
    return Path(data_dir) / f"{username}_{year}.csv"


def load_ledger(csv_path: str | Path) -> List[Transaction]:
    """Reads a ``Date,Category,Amount`` CSV; dates stay as written (``MM/DD/YYYY``)."""
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = set(REQUIRED_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in ledger CSV: {missing}")

    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")
    complete = df.dropna(subset=REQUIRED_COLUMNS)
    if len(complete) != len(df):
        logger.warning("Skipped %d incomplete rows in %s", len(df) - len(complete), path)

    entries: List[Transaction] = []
    for _, row in complete.iterrows():
        entries.append(
            Transaction(
                date=str(row["date"]).strip(),
                category=str(row["category"]).strip(),
                amount=float(row["amount"]),
            )
        )
    logger.info("Loaded %d transactions from %s", len(entries), path)
    return entries


def save_ledger(csv_path: str | Path, transactions: Iterable[Transaction]) -> Path:
    path = Path(csv_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = []
    for txn in transactions:
        parsed = parse_date(txn.date)
        rows.append(
            {
                "Date": parsed.strftime(DATE_FORMAT) if parsed is not None else str(txn.date),
                "Category": txn.category,
                "Amount": txn.amount,
            }
        )
    pd.DataFrame(rows, columns=["Date", "Category", "Amount"]).to_csv(path, index=False)
    logger.info("Wrote %d transactions to %s", len(rows), path)
    return path
