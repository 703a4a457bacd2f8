"""Loan generator and payment behavior for sample portfolios."""

from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.accrual import breakdown
from loan_ledger.engine.money import ZERO, round_money
from loan_ledger.engine.origination import new_loan
from loan_ledger.engine.payments import record_payment, settle_installment
from loan_ledger.generators.base import BaseGenerator
from loan_ledger.models import InstallmentStatus, Loan


class LoanGenerator(BaseGenerator):
    """Generate synthetic loans with origination schedules."""

    INSTALLMENT_COUNTS = [1, 2]
    INSTALLMENT_WEIGHTS = [0.6, 0.4]

    # Principal in multiples of R$ 50
    PRINCIPAL_RANGE = (2, 100)

    def __init__(
        self,
        seed: int | None = None,
        policy: InterestPolicy | None = None,
        max_age_days: int = 90,
    ) -> None:
        super().__init__(seed)
        self.policy = policy
        self.max_age_days = max_age_days

    def generate(self, client_id: str, as_of: date) -> Loan:
        """Generate a loan originated up to ``max_age_days`` before ``as_of``.

        Parameters
        ----------
        client_id : str
            Owner of the loan.
        as_of : date
            Reference date.

        Returns
        -------
        Loan
            Loan with its full schedule and nothing paid.
        """
        principal = Decimal(self.random.randint(*self.PRINCIPAL_RANGE) * 50)
        count = self.random.choices(
            self.INSTALLMENT_COUNTS, weights=self.INSTALLMENT_WEIGHTS, k=1
        )[0]
        start = as_of - timedelta(days=self.random.randint(0, self.max_age_days))
        return new_loan(
            loan_id=self.fake.uuid4(),
            client_id=client_id,
            principal=principal,
            installment_count=count,
            start_date=start,
            policy=self.policy,
        )


class PaymentBehavior:
    """Simulate how informal borrowers pay.

    Borrowers are either ``good`` (settle everything already due),
    ``partial`` (pay part of what is due) or ``late`` (pay nothing).
    """

    BEHAVIORS = ["good", "partial", "late"]

    def __init__(self, seed: int | None = None, policy: InterestPolicy | None = None) -> None:
        self.random = random.Random(seed)
        self.policy = policy

    def apply_payment_behavior(
        self,
        loan: Loan,
        as_of: date,
        good_rate: float = 0.6,
        partial_rate: float = 0.25,
        late_rate: float = 0.15,
    ) -> Loan:
        """Return a copy of ``loan`` with payments recorded on ``as_of``.

        Only installments due within the next week or earlier receive
        payments.
        """
        behavior = self.random.choices(
            self.BEHAVIORS, weights=[good_rate, partial_rate, late_rate], k=1
        )[0]
        if behavior == "late":
            return loan

        horizon = as_of + timedelta(days=7)
        installments = []
        for inst in loan.installments:
            state = breakdown(inst, as_of, self.policy)
            if inst.due_date > horizon or state.status == InstallmentStatus.PAID:
                installments.append(inst)
            elif behavior == "good":
                installments.append(settle_installment(inst, as_of, self.policy))
            else:
                fraction = Decimal(str(round(self.random.uniform(0.2, 0.8), 2)))
                amount = round_money(state.outstanding_balance * fraction)
                if amount > ZERO:
                    inst = record_payment(inst, amount, as_of, self.policy)
                installments.append(inst)

        return replace(loan, installments=installments)
