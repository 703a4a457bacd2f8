"""Tests for domain models."""

from decimal import Decimal

import pytest
from conftest import make_loan

from loan_ledger.exceptions import EntityNotFoundError
from loan_ledger.models import AlertBoard, AlertEntry, AlertKind, InstallmentStatus


class TestLoan:
    """Tests for Loan."""

    def test_get_installment(self) -> None:
        loan = make_loan("l-1", "c-1", "1000", 2)

        assert loan.get_installment(2).number == 2

    def test_get_missing_installment(self) -> None:
        loan = make_loan("l-1", "c-1", "1000", 2)

        with pytest.raises(EntityNotFoundError, match="no installment 3"):
            loan.get_installment(3)

    def test_installment_default_paid(self) -> None:
        loan = make_loan("l-1", "c-1")

        assert loan.installments[0].amount_paid == Decimal("0")


class TestEnums:
    """Tests for enumerations."""

    def test_string_values(self) -> None:
        assert InstallmentStatus("late") == InstallmentStatus.LATE
        assert InstallmentStatus.PAID == "paid"

    def test_alert_urgency(self) -> None:
        assert AlertEntry(kind=AlertKind.OVERDUE, days_remaining=-2).urgency == 3
        assert AlertEntry(kind=AlertKind.DUE_TODAY, days_remaining=0).urgency == 2
        assert AlertEntry(kind=AlertKind.DUE_SOON, days_remaining=2).urgency == 1
        assert AlertEntry(kind=AlertKind.NONE).urgency == 0


class TestAlertBoard:
    """Tests for AlertBoard."""

    def test_empty(self) -> None:
        board = AlertBoard()

        assert board.badge_count == 0
        assert board.overdue == []
