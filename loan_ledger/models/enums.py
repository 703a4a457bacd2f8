"""Enumeration types for loan-ledger entities."""

from enum import Enum


class InstallmentStatus(str, Enum):
    PAID = "paid"
    LATE = "late"
    OPEN = "open"
    PENDING = "pending"


class LoanStatus(str, Enum):
    PAID = "paid"
    LATE = "late"
    ACTIVE = "active"


class ClientStatus(str, Enum):
    LATE = "late"
    ACTIVE = "active"


class AlertKind(str, Enum):
    NONE = "none"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"

    @property
    def urgency(self) -> int:
        """Badge urgency: 3 overdue, 2 due today, 1 due soon, 0 otherwise."""
        return _URGENCY[self]


_URGENCY = {
    AlertKind.NONE: 0,
    AlertKind.DUE_SOON: 1,
    AlertKind.DUE_TODAY: 2,
    AlertKind.OVERDUE: 3,
}


class OverallStatus(str, Enum):
    """Client status across all loans, settled ones included."""

    PAID = "paid"
    LATE = "late"
    ACTIVE = "active"
    NO_LOANS = "no_loans"
