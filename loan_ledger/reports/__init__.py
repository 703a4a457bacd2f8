"""Report tables and reminder messages built from the calculation engine."""

from loan_ledger.reports.reminders import (
    PaymentReminder,
    format_brl,
    payment_reminder,
    reminder_message,
)
from loan_ledger.reports.tables import (
    ClientOverviewRow,
    InstallmentRow,
    PortfolioIndicators,
    client_overview_rows,
    installment_rows,
    late_installment_rows,
    portfolio_indicators,
    upcoming_installment_rows,
)

__all__ = [
    "ClientOverviewRow",
    "InstallmentRow",
    "PaymentReminder",
    "PortfolioIndicators",
    "client_overview_rows",
    "format_brl",
    "installment_rows",
    "late_installment_rows",
    "payment_reminder",
    "portfolio_indicators",
    "reminder_message",
    "upcoming_installment_rows",
]
