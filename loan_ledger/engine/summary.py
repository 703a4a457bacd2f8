"""Loan-level summary."""

from datetime import date

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.accrual import breakdown
from loan_ledger.engine.money import ZERO, round_money
from loan_ledger.models import InstallmentStatus, Loan, LoanStatus, LoanSummary


def summarize_loan(
    loan: Loan,
    as_of: date,
    policy: InterestPolicy | None = None,
) -> LoanSummary:
    """Fold every installment of ``loan`` into a loan summary.

    A loan is paid only when every installment is paid; otherwise one late
    installment makes the whole loan late.
    """
    rows = tuple(breakdown(inst, as_of, policy) for inst in loan.installments)

    total_paid = sum((row.amount_paid for row in rows), ZERO)
    outstanding = sum((row.outstanding_balance for row in rows), ZERO)
    late_interest = sum((row.late_interest for row in rows), ZERO)
    contract_total = sum((inst.contract_amount for inst in loan.installments), ZERO)

    if rows and all(row.status == InstallmentStatus.PAID for row in rows):
        status = LoanStatus.PAID
    elif any(row.status == InstallmentStatus.LATE for row in rows):
        status = LoanStatus.LATE
    else:
        status = LoanStatus.ACTIVE

    return LoanSummary(
        loan_id=loan.loan_id,
        client_id=loan.client_id,
        principal=round_money(loan.principal),
        installment_count=loan.installment_count,
        contract_total=round_money(contract_total),
        total_late_interest=round_money(late_interest),
        total_with_late_interest=round_money(contract_total + late_interest),
        total_paid=round_money(total_paid),
        outstanding_balance=round_money(outstanding),
        max_days_late=max((row.days_late for row in rows), default=0),
        status=status,
        installments=rows,
    )
