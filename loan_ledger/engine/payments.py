"""Payment rules: the only mutations of an installment."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.accrual import breakdown
from loan_ledger.engine.money import ZERO, round_money, to_decimal
from loan_ledger.exceptions import InvalidPaymentError
from loan_ledger.models import Installment, InstallmentStatus


def record_payment(
    installment: Installment,
    amount: Decimal | int | float | str,
    as_of: date,
    policy: InterestPolicy | None = None,
) -> Installment:
    """Add a partial payment to ``installment``.

    Raises
    ------
    InvalidPaymentError
        If ``amount`` is not positive or exceeds the outstanding balance on
        ``as_of``.
    """
    try:
        amount = round_money(to_decimal(amount))
    except (TypeError, ValueError) as e:
        raise InvalidPaymentError(f"Invalid payment amount {amount!r}") from e
    if amount <= ZERO:
        raise InvalidPaymentError(f"Payment must be positive, got {amount}")

    outstanding = breakdown(installment, as_of, policy).outstanding_balance
    if amount > outstanding:
        raise InvalidPaymentError(
            f"Payment {amount} exceeds outstanding balance {outstanding} "
            f"of installment {installment.number}"
        )
    return replace(installment, amount_paid=round_money(installment.amount_paid + amount))


def settle_installment(
    installment: Installment,
    as_of: date,
    policy: InterestPolicy | None = None,
) -> Installment:
    """Mark ``installment`` fully paid: contract amount plus late interest."""
    total_due = breakdown(installment, as_of, policy).total_due
    return replace(installment, amount_paid=total_due)


def toggle_paid(
    installment: Installment,
    as_of: date,
    policy: InterestPolicy | None = None,
) -> Installment:
    """Flip the paid flag: reset a paid installment to zero, settle any other."""
    if breakdown(installment, as_of, policy).status == InstallmentStatus.PAID:
        return replace(installment, amount_paid=ZERO)
    return settle_installment(installment, as_of, policy)
