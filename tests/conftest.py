"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_ledger.engine import originate
from loan_ledger.models import Client, Installment, Loan
from loan_ledger.store import InMemoryLedgerStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def start_date() -> date:
    """Origination date used across tests."""
    return date(2024, 1, 1)


@pytest.fixture
def store() -> InMemoryLedgerStore:
    """Create a fresh store for each test."""
    return InMemoryLedgerStore()


@pytest.fixture
def installment() -> Installment:
    """Unpaid installment of 800.00 due on 2024-01-31."""
    return Installment(
        number=1,
        principal_share=Decimal("500.00"),
        contract_amount=Decimal("800.00"),
        due_date=date(2024, 1, 31),
    )


def make_client(client_id: str, phone: str, name: str | None = None) -> Client:
    """Build a client without going through a store."""
    return Client(
        client_id=client_id,
        name=name or f"Client {client_id}",
        phone=phone,
        registered_at=datetime(2024, 1, 1, 9, 0),
    )


def make_loan(
    loan_id: str,
    client_id: str,
    principal: str = "1000",
    installment_count: int = 1,
    start: date = date(2024, 1, 1),
) -> Loan:
    """Build an originated loan without going through a store."""
    return Loan(
        loan_id=loan_id,
        client_id=client_id,
        principal=Decimal(principal),
        installment_count=installment_count,
        origination_date=start,
        installments=originate(principal, installment_count, start),
    )
