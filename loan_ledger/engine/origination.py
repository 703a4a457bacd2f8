"""Loan origination: principal and installment count to a schedule."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.accrual import DEFAULT_POLICY
from loan_ledger.engine.money import ZERO, round_money, to_decimal
from loan_ledger.exceptions import InvalidAmountError, InvalidScheduleError
from loan_ledger.models import Installment, Loan


def originate(
    principal: Decimal | int | float | str,
    installment_count: int,
    start_date: date,
    policy: InterestPolicy | None = None,
) -> list[Installment]:
    """Build the installment schedule of a new loan.

    Every installment carries the contract rate independently. With the
    default table, R$ 1.000 in 1x is one installment of 1.300,00 and in 2x
    two installments of 800,00.

    Parameters
    ----------
    principal : Decimal | int | float | str
        Amount lent. Must be positive.
    installment_count : int
        Number of installments. Must be at least 1.
    start_date : date
        Origination date. The first installment is due one spacing later.
    policy : InterestPolicy | None
        Rate table and spacing (defaults to 30%/60% every 30 days).

    Returns
    -------
    list[Installment]
        Installments numbered from 1, nothing paid.
    """
    policy = policy or DEFAULT_POLICY
    try:
        principal = to_decimal(principal)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(f"Invalid principal {principal!r}") from e
    if principal <= ZERO:
        raise InvalidAmountError(f"Principal must be positive, got {principal}")
    if installment_count < 1:
        raise InvalidScheduleError(
            f"Installment count must be at least 1, got {installment_count}"
        )

    rate = policy.contract_rate(installment_count)
    share = principal / installment_count
    contract_amount = round_money(share * (1 + rate))
    spacing = policy.installment_spacing_days

    return [
        Installment(
            number=i + 1,
            principal_share=round_money(share),
            contract_amount=contract_amount,
            due_date=start_date + timedelta(days=spacing * (i + 1)),
            amount_paid=ZERO,
        )
        for i in range(installment_count)
    ]


def new_loan(
    loan_id: str,
    client_id: str,
    principal: Decimal | int | float | str,
    installment_count: int,
    start_date: date,
    policy: InterestPolicy | None = None,
) -> Loan:
    """Build an unsaved loan together with its schedule."""
    installments = originate(principal, installment_count, start_date, policy)
    return Loan(
        loan_id=loan_id,
        client_id=client_id,
        principal=to_decimal(principal),
        installment_count=installment_count,
        origination_date=start_date,
        installments=installments,
        created_at=datetime.now(),
    )
