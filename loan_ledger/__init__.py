"""Installment accrual, portfolio aggregation and backup reconciliation for informal loans."""

from loan_ledger.backup import export_snapshot, merge_snapshot, parse_snapshot
from loan_ledger.config import InterestPolicy, LedgerConfig
from loan_ledger.engine import (
    breakdown,
    classify,
    collect_alerts,
    filter_summaries,
    originate,
    portfolio_totals,
    summarize_loan,
    summarize_portfolio,
)
from loan_ledger.ledger import LoanLedger

__version__ = "0.1.0"

__all__ = [
    "InterestPolicy",
    "LedgerConfig",
    "LoanLedger",
    "breakdown",
    "classify",
    "collect_alerts",
    "export_snapshot",
    "filter_summaries",
    "merge_snapshot",
    "originate",
    "parse_snapshot",
    "portfolio_totals",
    "summarize_loan",
    "summarize_portfolio",
]
