"""Derived read models.

These are recomputed for an explicit ``as_of`` date on every read and are
never persisted: late interest changes at every midnight.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from loan_ledger.models.client import Client
from loan_ledger.models.enums import (
    AlertKind,
    ClientStatus,
    InstallmentStatus,
    LoanStatus,
)
from loan_ledger.models.loan import Installment, Loan


@dataclass(frozen=True)
class InstallmentBreakdown:
    """Point-in-time financial state of one installment."""

    number: int
    due_date: date
    contract_amount: Decimal
    late_interest: Decimal
    total_due: Decimal
    amount_paid: Decimal
    outstanding_balance: Decimal
    days_late: int
    status: InstallmentStatus


@dataclass(frozen=True)
class LoanSummary:
    """Loan-level fold of all installment breakdowns."""

    loan_id: str
    client_id: str
    principal: Decimal
    installment_count: int
    contract_total: Decimal
    total_late_interest: Decimal
    total_with_late_interest: Decimal
    total_paid: Decimal
    outstanding_balance: Decimal
    max_days_late: int
    status: LoanStatus
    installments: tuple[InstallmentBreakdown, ...] = ()


@dataclass(frozen=True)
class ClientSummary:
    """Active-portfolio view of one client."""

    client_id: str
    name: str
    phone: str
    loan_count: int
    total_principal: Decimal
    total_outstanding: Decimal
    max_days_late: int
    status: ClientStatus
    loans: tuple[LoanSummary, ...] = ()


@dataclass(frozen=True)
class PortfolioTotals:
    """Roll-up over a (possibly filtered) list of client summaries."""

    client_count: int = 0
    loan_count: int = 0
    total_principal: Decimal = Decimal("0.00")
    total_outstanding: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class AlertEntry:
    """Due-date classification of one installment."""

    kind: AlertKind
    days_remaining: int | None = None  # None for paid installments

    @property
    def urgency(self) -> int:
        return self.kind.urgency


@dataclass(frozen=True)
class DueNotice:
    """An alert together with the records it refers to."""

    client: Client
    loan: Loan
    installment: Installment
    alert: AlertEntry
    breakdown: InstallmentBreakdown


@dataclass
class AlertBoard:
    """Alerts grouped by bucket."""

    overdue: list[DueNotice] = field(default_factory=list)
    due_today: list[DueNotice] = field(default_factory=list)
    due_soon: list[DueNotice] = field(default_factory=list)

    @property
    def badge_count(self) -> int:
        return len(self.overdue) + len(self.due_today) + len(self.due_soon)


@dataclass
class MergeResult:
    """Counts reported by a backup merge."""

    clients_created: int = 0
    clients_matched: int = 0
    loans_inserted: int = 0
