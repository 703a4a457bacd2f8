"""Tests for payment reminder messages."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest
from conftest import make_client

from loan_ledger import LoanLedger
from loan_ledger.config import InterestPolicy
from loan_ledger.engine import settle_installment
from loan_ledger.exceptions import InvalidPaymentError
from loan_ledger.models import Installment
from loan_ledger.reports import format_brl, payment_reminder, reminder_message
from loan_ledger.store import InMemoryLedgerStore


@pytest.fixture
def client():
    return make_client("c-1", "(11) 98888-0001", name="Ana")


class TestFormatBrl:
    """Tests for format_brl."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("0"), "R$ 0,00"),
            (Decimal("840"), "R$ 840,00"),
            (Decimal("1234.5"), "R$ 1.234,50"),
            (Decimal("1000000.005"), "R$ 1.000.000,01"),
        ],
    )
    def test_format(self, value: Decimal, expected: str) -> None:
        assert format_brl(value) == expected


class TestReminderMessage:
    """Tests for reminder_message."""

    def test_open_installment(self, client, installment: Installment) -> None:
        message = reminder_message(client, installment, date(2024, 1, 20))

        assert message.startswith("Prezado(a), Ana!")
        assert "acréscimo de 1% de juros ao dia" in message
        assert "*Parcela 1*" in message
        assert "Valor: R$ 800,00" in message
        assert "Vencimento: 31/01/2024" in message
        assert "Atraso" not in message
        assert "Já Pago" not in message

    def test_late_installment_quotes_late_interest(
        self, client, installment: Installment
    ) -> None:
        message = reminder_message(client, installment, date(2024, 2, 5))

        assert "Valor: R$ 840,00" in message
        assert message.endswith("Atraso: 5 dias")

    def test_partial_payment_shows_balance(self, client, installment: Installment) -> None:
        partial = replace(installment, amount_paid=Decimal("100.00"))
        message = reminder_message(client, partial, date(2024, 2, 5))

        assert "Já Pago: R$ 100,00" in message
        assert message.endswith("Saldo: R$ 740,00")

    def test_uses_policy_rate(self, client, installment: Installment) -> None:
        policy = InterestPolicy(daily_late_rate=Decimal("0.015"))
        message = reminder_message(client, installment, date(2024, 2, 2), policy)

        assert "acréscimo de 1,5% de juros" in message
        assert "Valor: R$ 824,00" in message

    def test_paid_installment(self, client, installment: Installment) -> None:
        paid = settle_installment(installment, date(2024, 1, 20))

        with pytest.raises(InvalidPaymentError, match="already paid"):
            reminder_message(client, paid, date(2024, 1, 25))


class TestPaymentReminder:
    """Tests for payment_reminder."""

    def test_phone_digits_with_country_code(self, client, installment: Installment) -> None:
        reminder = payment_reminder(client, installment, date(2024, 1, 20))

        assert reminder.phone == "5511988880001"
        assert reminder.message == reminder_message(client, installment, date(2024, 1, 20))

    def test_custom_country_code(self, client, installment: Installment) -> None:
        reminder = payment_reminder(client, installment, date(2024, 1, 20), country_code="351")

        assert reminder.phone.startswith("35111")

    def test_from_ledger(self, start_date: date) -> None:
        ledger = LoanLedger(InMemoryLedgerStore())
        ana = ledger.register_client("Ana", "11 98888-0001")
        loan = ledger.register_loan(ana.client_id, "1000", 1, start_date)

        reminder = ledger.payment_reminder(loan.loan_id, 1, date(2024, 1, 20))

        assert reminder.phone == "5511988880001"
        assert "Valor: R$ 1.300,00" in reminder.message
