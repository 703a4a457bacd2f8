"""Logical content of the portfolio exports.

Each function returns plain rows for a given ``as_of`` date; sinks decide how
they are written.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.money import ZERO, round_money
from loan_ledger.engine.summary import summarize_loan
from loan_ledger.models import (
    Client,
    InstallmentBreakdown,
    InstallmentStatus,
    Loan,
    LoanStatus,
    LoanSummary,
    OverallStatus,
)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ClientOverviewRow:
    """One client across all of its loans."""

    client_name: str
    phone: str
    address: str
    loan_count: int
    principal_total: Decimal
    contract_total: Decimal
    late_interest: Decimal
    receivable_total: Decimal
    paid_total: Decimal
    outstanding: Decimal
    status: OverallStatus


@dataclass(frozen=True)
class InstallmentRow:
    """One installment with its loan context and breakdown."""

    client_name: str
    phone: str
    loan_id: str
    origination_date: date
    principal: Decimal
    contract_total: Decimal
    installment_count: int
    number: int
    due_date: date
    contract_amount: Decimal
    late_interest: Decimal
    total_due: Decimal
    amount_paid: Decimal
    outstanding: Decimal
    days_late: int
    days_until_due: int
    status: InstallmentStatus


@dataclass(frozen=True)
class PortfolioIndicators:
    """Global counters, money totals and ratios."""

    total_clients: int
    clients_with_loans: int
    clients_without_loans: int
    loan_count: int
    installment_count: int
    paid_installments: int
    late_installments: int
    open_installments: int
    principal_total: Decimal
    contract_total: Decimal
    late_interest_total: Decimal
    receivable_total: Decimal
    paid_total: Decimal
    outstanding_total: Decimal
    recovered_pct: Decimal
    late_installments_pct: Decimal


def _summaries(
    loans: Sequence[Loan], as_of: date, policy: InterestPolicy | None
) -> list[LoanSummary]:
    return [summarize_loan(loan, as_of, policy) for loan in loans]


def _pct(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= ZERO:
        return round_money(ZERO)
    return round_money(part / whole * HUNDRED)


def client_overview_rows(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    policy: InterestPolicy | None = None,
) -> list[ClientOverviewRow]:
    """Summarize every client, including settled and loan-less ones."""
    rows = []
    for client in clients:
        summaries = _summaries(loans_by_client.get(client.client_id, ()), as_of, policy)

        if not summaries:
            status = OverallStatus.NO_LOANS
        elif all(s.status == LoanStatus.PAID for s in summaries):
            status = OverallStatus.PAID
        elif any(s.status == LoanStatus.LATE for s in summaries):
            status = OverallStatus.LATE
        else:
            status = OverallStatus.ACTIVE

        rows.append(
            ClientOverviewRow(
                client_name=client.name,
                phone=client.phone,
                address=client.address,
                loan_count=len(summaries),
                principal_total=sum((s.principal for s in summaries), ZERO),
                contract_total=sum((s.contract_total for s in summaries), ZERO),
                late_interest=sum((s.total_late_interest for s in summaries), ZERO),
                receivable_total=sum((s.total_with_late_interest for s in summaries), ZERO),
                paid_total=sum((s.total_paid for s in summaries), ZERO),
                outstanding=sum((s.outstanding_balance for s in summaries), ZERO),
                status=status,
            )
        )
    return rows


def _iter_installments(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    policy: InterestPolicy | None,
) -> Iterator[tuple[Client, Loan, LoanSummary, InstallmentBreakdown]]:
    for client in clients:
        for loan in loans_by_client.get(client.client_id, ()):
            summary = summarize_loan(loan, as_of, policy)
            for row in summary.installments:
                yield client, loan, summary, row


def installment_rows(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    policy: InterestPolicy | None = None,
) -> list[InstallmentRow]:
    """Every installment of every loan."""
    return [
        InstallmentRow(
            client_name=client.name,
            phone=client.phone,
            loan_id=loan.loan_id,
            origination_date=loan.origination_date,
            principal=summary.principal,
            contract_total=summary.contract_total,
            installment_count=loan.installment_count,
            number=row.number,
            due_date=row.due_date,
            contract_amount=row.contract_amount,
            late_interest=row.late_interest,
            total_due=row.total_due,
            amount_paid=row.amount_paid,
            outstanding=row.outstanding_balance,
            days_late=row.days_late,
            days_until_due=(row.due_date - as_of).days,
            status=row.status,
        )
        for client, loan, summary, row in _iter_installments(
            clients, loans_by_client, as_of, policy
        )
    ]


def late_installment_rows(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    policy: InterestPolicy | None = None,
) -> list[InstallmentRow]:
    """Installments past due and not fully paid."""
    return [
        row
        for row in installment_rows(clients, loans_by_client, as_of, policy)
        if row.status == InstallmentStatus.LATE
    ]


def upcoming_installment_rows(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    window_days: int = 7,
    policy: InterestPolicy | None = None,
) -> list[InstallmentRow]:
    """Unpaid installments falling due within the next ``window_days``."""
    return [
        row
        for row in installment_rows(clients, loans_by_client, as_of, policy)
        if row.status == InstallmentStatus.OPEN and 0 <= row.days_until_due <= window_days
    ]


def portfolio_indicators(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    policy: InterestPolicy | None = None,
) -> PortfolioIndicators:
    """Counters and totals over the whole portfolio, settled loans included."""
    clients = list(clients)
    summaries = [
        summary
        for client in clients
        for summary in _summaries(loans_by_client.get(client.client_id, ()), as_of, policy)
    ]
    rows = [row for summary in summaries for row in summary.installments]
    with_loans = sum(1 for client in clients if loans_by_client.get(client.client_id))

    paid = sum(1 for row in rows if row.status == InstallmentStatus.PAID)
    late = sum(1 for row in rows if row.status == InstallmentStatus.LATE)
    receivable = sum((s.total_with_late_interest for s in summaries), ZERO)
    paid_total = sum((s.total_paid for s in summaries), ZERO)

    return PortfolioIndicators(
        total_clients=len(clients),
        clients_with_loans=with_loans,
        clients_without_loans=len(clients) - with_loans,
        loan_count=len(summaries),
        installment_count=len(rows),
        paid_installments=paid,
        late_installments=late,
        open_installments=len(rows) - paid - late,
        principal_total=sum((s.principal for s in summaries), ZERO),
        contract_total=sum((s.contract_total for s in summaries), ZERO),
        late_interest_total=sum((s.total_late_interest for s in summaries), ZERO),
        receivable_total=receivable,
        paid_total=paid_total,
        outstanding_total=sum((s.outstanding_balance for s in summaries), ZERO),
        recovered_pct=_pct(paid_total, receivable),
        late_installments_pct=_pct(Decimal(late), Decimal(len(rows))),
    )
