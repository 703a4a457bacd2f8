"""Interest accrual for a single installment."""

from datetime import date

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.money import ZERO, round_money
from loan_ledger.models import Installment, InstallmentBreakdown, InstallmentStatus

DEFAULT_POLICY = InterestPolicy()


def days_late(due_date: date, as_of: date) -> int:
    """Whole calendar days past ``due_date``, never negative."""
    return max(0, (as_of - due_date).days)


def breakdown(
    installment: Installment,
    as_of: date,
    policy: InterestPolicy | None = None,
) -> InstallmentBreakdown:
    """Compute the financial state of ``installment`` on ``as_of``.

    Late interest is simple interest on the contract amount, one
    ``daily_late_rate`` per day past due, with no cap. Payments are applied
    against contract amount and penalty as a single pool.

    Parameters
    ----------
    installment : Installment
        Installment to evaluate.
    as_of : date
        Reference date. Only the calendar date matters.
    policy : InterestPolicy | None
        Interest rules (defaults to 1% a day).

    Returns
    -------
    InstallmentBreakdown
        Amounts rounded to cents and the installment status.
    """
    policy = policy or DEFAULT_POLICY
    contract_amount = installment.contract_amount
    amount_paid = installment.amount_paid

    late_days = days_late(installment.due_date, as_of)
    late_interest = contract_amount * policy.daily_late_rate * late_days
    total_due = contract_amount + late_interest
    outstanding = round_money(max(ZERO, total_due - amount_paid))

    if outstanding == ZERO and amount_paid > ZERO:
        status = InstallmentStatus.PAID
    elif late_days > 0:
        status = InstallmentStatus.LATE
    elif as_of <= installment.due_date:
        status = InstallmentStatus.OPEN
    else:
        # Unreachable with date-only arithmetic: as_of > due_date implies late_days > 0
        status = InstallmentStatus.PENDING

    return InstallmentBreakdown(
        number=installment.number,
        due_date=installment.due_date,
        contract_amount=round_money(contract_amount),
        late_interest=round_money(late_interest),
        total_due=round_money(total_due),
        amount_paid=round_money(amount_paid),
        outstanding_balance=outstanding,
        days_late=late_days,
        status=status,
    )
