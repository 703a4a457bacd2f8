"""Loan and installment models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_ledger.exceptions import EntityNotFoundError


@dataclass
class Installment:
    """One scheduled payment (parcela) of a loan."""

    number: int  # 1, 2, ...
    principal_share: Decimal
    contract_amount: Decimal  # principal share plus contract interest
    due_date: date
    amount_paid: Decimal = Decimal("0")


@dataclass
class Loan:
    """Loan contract with its full installment schedule."""

    loan_id: str
    client_id: str
    principal: Decimal
    installment_count: int
    origination_date: date
    installments: list[Installment] = field(default_factory=list)
    created_at: datetime | None = None

    def get_installment(self, number: int) -> Installment:
        """Return the installment with the given 1-based number."""
        for installment in self.installments:
            if installment.number == number:
                return installment
        raise EntityNotFoundError(f"Loan {self.loan_id} has no installment {number}")
