"""Domain models for the loan ledger."""

from loan_ledger.models.client import Client
from loan_ledger.models.enums import (
    AlertKind,
    ClientStatus,
    InstallmentStatus,
    LoanStatus,
    OverallStatus,
)
from loan_ledger.models.loan import Installment, Loan
from loan_ledger.models.summaries import (
    AlertBoard,
    AlertEntry,
    ClientSummary,
    DueNotice,
    InstallmentBreakdown,
    LoanSummary,
    MergeResult,
    PortfolioTotals,
)

__all__ = [
    "AlertBoard",
    "AlertEntry",
    "AlertKind",
    "Client",
    "ClientStatus",
    "ClientSummary",
    "DueNotice",
    "Installment",
    "InstallmentBreakdown",
    "InstallmentStatus",
    "Loan",
    "LoanStatus",
    "LoanSummary",
    "MergeResult",
    "OverallStatus",
    "PortfolioTotals",
]
