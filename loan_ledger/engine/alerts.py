"""Due-date alerting."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from loan_ledger.config import InterestPolicy
from loan_ledger.engine.accrual import breakdown
from loan_ledger.models import (
    AlertBoard,
    AlertEntry,
    AlertKind,
    Client,
    DueNotice,
    Installment,
    InstallmentStatus,
    Loan,
)

DEFAULT_WARN_WINDOW_DAYS = 3


def classify(
    installment: Installment,
    as_of: date,
    warn_window_days: int = DEFAULT_WARN_WINDOW_DAYS,
    policy: InterestPolicy | None = None,
) -> AlertEntry:
    """Place an installment in an urgency bucket.

    Paid installments never alert. Otherwise the bucket depends on the whole
    days left until the due date: negative is overdue, zero is due today and
    up to ``warn_window_days`` is due soon.
    """
    if breakdown(installment, as_of, policy).status == InstallmentStatus.PAID:
        return AlertEntry(kind=AlertKind.NONE)

    days_remaining = (installment.due_date - as_of).days
    if days_remaining < 0:
        kind = AlertKind.OVERDUE
    elif days_remaining == 0:
        kind = AlertKind.DUE_TODAY
    elif days_remaining <= warn_window_days:
        kind = AlertKind.DUE_SOON
    else:
        kind = AlertKind.NONE
    return AlertEntry(kind=kind, days_remaining=days_remaining)


def collect_alerts(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    as_of: date,
    warn_window_days: int = DEFAULT_WARN_WINDOW_DAYS,
    policy: InterestPolicy | None = None,
) -> AlertBoard:
    """Classify every installment of every loan and group the alerts."""
    board = AlertBoard()
    buckets = {
        AlertKind.OVERDUE: board.overdue,
        AlertKind.DUE_TODAY: board.due_today,
        AlertKind.DUE_SOON: board.due_soon,
    }

    for client in clients:
        for loan in loans_by_client.get(client.client_id, ()):
            for installment in loan.installments:
                alert = classify(installment, as_of, warn_window_days, policy)
                if alert.kind == AlertKind.NONE:
                    continue
                buckets[alert.kind].append(
                    DueNotice(
                        client=client,
                        loan=loan,
                        installment=installment,
                        alert=alert,
                        breakdown=breakdown(installment, as_of, policy),
                    )
                )

    return board
