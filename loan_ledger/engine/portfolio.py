"""Portfolio aggregation across clients."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.money import ZERO, round_money
from loan_ledger.engine.summary import summarize_loan
from loan_ledger.models import (
    Client,
    ClientStatus,
    ClientSummary,
    Loan,
    LoanStatus,
    PortfolioTotals,
)


def summarize_client(
    client: Client,
    loans: Iterable[Loan],
    as_of: date,
    policy: InterestPolicy | None = None,
) -> ClientSummary | None:
    """Summarize the unpaid loans of one client.

    Returns ``None`` when every loan of the client is settled.
    """
    active = [
        summary
        for summary in (summarize_loan(loan, as_of, policy) for loan in loans)
        if summary.status != LoanStatus.PAID
    ]
    if not active:
        return None

    is_late = any(summary.status == LoanStatus.LATE for summary in active)
    return ClientSummary(
        client_id=client.client_id,
        name=client.name,
        phone=client.phone,
        loan_count=len(active),
        total_principal=round_money(sum((s.principal for s in active), ZERO)),
        total_outstanding=round_money(sum((s.outstanding_balance for s in active), ZERO)),
        max_days_late=max(
            (row.days_late for s in active for row in s.installments), default=0
        ),
        status=ClientStatus.LATE if is_late else ClientStatus.ACTIVE,
        loans=tuple(active),
    )


def summarize_portfolio(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    policy: InterestPolicy | None = None,
) -> list[ClientSummary]:
    """Rank every client with at least one unpaid loan.

    Ordering is by largest delay first, then by largest outstanding balance,
    then by client id so equal keys always come out the same way.
    """
    summaries = []
    for client in clients:
        summary = summarize_client(
            client, loans_by_client.get(client.client_id, ()), as_of, policy
        )
        if summary is not None:
            summaries.append(summary)

    summaries.sort(key=lambda s: s.client_id)
    summaries.sort(key=lambda s: (s.max_days_late, s.total_outstanding), reverse=True)
    return summaries


def filter_summaries(
    summaries: Iterable[ClientSummary],
    status: ClientStatus | str | None = None,
) -> list[ClientSummary]:
    """Return the subview of ``summaries`` with the given client status.

    ``None`` keeps every summary.
    """
    if status is None:
        return list(summaries)
    status = ClientStatus(status)
    return [summary for summary in summaries if summary.status == status]


def portfolio_totals(summaries: Iterable[ClientSummary]) -> PortfolioTotals:
    """Roll up counts and amounts over ``summaries`` only."""
    summaries = list(summaries)
    return PortfolioTotals(
        client_count=len(summaries),
        loan_count=sum(s.loan_count for s in summaries),
        total_principal=round_money(sum((s.total_principal for s in summaries), ZERO)),
        total_outstanding=round_money(sum((s.total_outstanding for s in summaries), ZERO)),
    )
