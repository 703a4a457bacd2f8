"""Pure calculation rules of the loan ledger."""

from loan_ledger.engine.accrual import breakdown, days_late
from loan_ledger.engine.alerts import classify, collect_alerts
from loan_ledger.engine.origination import new_loan, originate
from loan_ledger.engine.payments import record_payment, settle_installment, toggle_paid
from loan_ledger.engine.portfolio import (
    filter_summaries,
    portfolio_totals,
    summarize_client,
    summarize_portfolio,
)
from loan_ledger.engine.summary import summarize_loan

__all__ = [
    "breakdown",
    "classify",
    "collect_alerts",
    "days_late",
    "filter_summaries",
    "new_loan",
    "originate",
    "portfolio_totals",
    "record_payment",
    "settle_installment",
    "summarize_client",
    "summarize_loan",
    "summarize_portfolio",
    "toggle_paid",
]
