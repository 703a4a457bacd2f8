"""Ledger service: the calculation engine wired to a client/loan store."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any

from loan_ledger.backup import (
    BackupSnapshot,
    export_snapshot,
    merge_snapshot,
    read_snapshot,
    write_snapshot,
)
from loan_ledger.config import InterestPolicy, LedgerConfig
from loan_ledger.engine import (
    collect_alerts,
    filter_summaries,
    originate,
    portfolio_totals,
    record_payment,
    summarize_loan,
    summarize_portfolio,
    toggle_paid,
)
from loan_ledger.engine.money import to_decimal
from loan_ledger.logging import log_context
from loan_ledger.models import (
    AlertBoard,
    Client,
    ClientStatus,
    ClientSummary,
    Loan,
    LoanSummary,
    MergeResult,
    PortfolioTotals,
)
from loan_ledger.reports import PaymentReminder, payment_reminder

logger = logging.getLogger(__name__)


class LoanLedger:
    """Use cases of the loan ledger on top of a persistence collaborator.

    Parameters
    ----------
    store : Any
        Object exposing ``list_clients``, ``list_loans``, ``get_loan``,
        ``create_client``, ``create_loan``, ``update_loan``,
        ``delete_client`` and ``delete_loan`` (see ``InMemoryLedgerStore``).
    config : LedgerConfig | None
        Interest policy and alert windows.
    """

    def __init__(self, store: Any, config: LedgerConfig | None = None) -> None:
        self.store = store
        self.config = config or LedgerConfig()

    @property
    def policy(self) -> InterestPolicy:
        return self.config.policy

    # --- Clients and loans ---

    def register_client(self, name: str, phone: str, address: str = "") -> Client:
        client = self.store.create_client(name=name, phone=phone, address=address)
        logger.info(
            "Registered client %s",
            client.client_id,
            extra=log_context(client_id=client.client_id),
        )
        return client

    def remove_client(self, client_id: str) -> None:
        self.store.delete_client(client_id)
        logger.info(
            "Removed client %s and its loans", client_id, extra=log_context(client_id=client_id)
        )

    def register_loan(
        self,
        client_id: str,
        principal: Decimal | int | float | str,
        installment_count: int,
        start_date: date,
    ) -> Loan:
        """Originate a loan and store it with its schedule."""
        installments = originate(principal, installment_count, start_date, self.policy)
        principal = to_decimal(principal)
        loan = self.store.create_loan(
            client_id=client_id,
            principal=principal,
            installment_count=installment_count,
            origination_date=start_date,
            installments=installments,
        )
        logger.info(
            "Registered loan %s for client %s: %s in %dx",
            loan.loan_id,
            client_id,
            principal,
            installment_count,
            extra=log_context(client_id=client_id, loan_id=loan.loan_id, as_of=start_date),
        )
        return loan

    def remove_loan(self, loan_id: str) -> None:
        self.store.delete_loan(loan_id)
        logger.info("Removed loan %s", loan_id, extra=log_context(loan_id=loan_id))

    def loans_by_client(self) -> tuple[list[Client], dict[str, list[Loan]]]:
        """Load every client and a map of their loans."""
        clients = self.store.list_clients()
        loans = {client.client_id: self.store.list_loans(client.client_id) for client in clients}
        return clients, loans

    # --- Payments ---

    def _update_installment(self, loan: Loan, number: int, updated) -> Loan:
        installments = [updated if inst.number == number else inst for inst in loan.installments]
        return self.store.update_loan(replace(loan, installments=installments))

    def pay_installment(
        self,
        loan_id: str,
        number: int,
        amount: Decimal | int | float | str,
        as_of: date,
    ) -> Loan:
        """Record a partial payment on one installment."""
        loan = self.store.get_loan(loan_id)
        updated = record_payment(loan.get_installment(number), amount, as_of, self.policy)
        logger.info(
            "Payment of %s on loan %s installment %d (paid %s)",
            amount,
            loan_id,
            number,
            updated.amount_paid,
            extra=log_context(
                client_id=loan.client_id, loan_id=loan_id, installment=number, as_of=as_of
            ),
        )
        return self._update_installment(loan, number, updated)

    def toggle_installment(self, loan_id: str, number: int, as_of: date) -> Loan:
        """Settle an unpaid installment in full, or reverse a settled one."""
        loan = self.store.get_loan(loan_id)
        updated = toggle_paid(loan.get_installment(number), as_of, self.policy)
        logger.info(
            "Toggled loan %s installment %d: amount paid now %s",
            loan_id,
            number,
            updated.amount_paid,
            extra=log_context(
                client_id=loan.client_id, loan_id=loan_id, installment=number, as_of=as_of
            ),
        )
        return self._update_installment(loan, number, updated)

    # --- Read models ---

    def loan_summary(self, loan_id: str, as_of: date) -> LoanSummary:
        return summarize_loan(self.store.get_loan(loan_id), as_of, self.policy)

    def portfolio(
        self,
        as_of: date,
        status: ClientStatus | str | None = None,
    ) -> tuple[list[ClientSummary], PortfolioTotals]:
        """Ranked client summaries, optionally filtered, with their totals."""
        clients, loans = self.loans_by_client()
        summaries = filter_summaries(
            summarize_portfolio(clients, loans, as_of, self.policy), status
        )
        return summaries, portfolio_totals(summaries)

    def alerts(self, as_of: date, warn_window_days: int | None = None) -> AlertBoard:
        if warn_window_days is None:
            warn_window_days = self.config.alerts.warn_window_days
        clients, loans = self.loans_by_client()
        return collect_alerts(clients, loans, as_of, warn_window_days, self.policy)

    def payment_reminder(self, loan_id: str, number: int, as_of: date) -> PaymentReminder:
        """Reminder message for one open installment, addressed to its client."""
        loan = self.store.get_loan(loan_id)
        client = self.store.get_client(loan.client_id)
        return payment_reminder(client, loan.get_installment(number), as_of, self.policy)

    # --- Backup ---

    def export_backup(
        self,
        path: str | Path | None = None,
        exported_at: datetime | None = None,
    ) -> dict[str, Any]:
        """Build a backup document and optionally write it to ``path``."""
        clients, loans = self.loans_by_client()
        document = export_snapshot(clients, loans, exported_at or datetime.now(timezone.utc))
        logger.info(
            "Exported backup: %d clients, %d loans",
            document["totalClients"],
            document["totalLoans"],
        )
        if path is not None:
            write_snapshot(path, document, pretty=True)
        return document

    def import_backup(
        self, source: str | Path | BackupSnapshot | dict[str, Any]
    ) -> MergeResult:
        """Merge a backup file, parsed snapshot or raw document."""
        if isinstance(source, (str, Path)):
            source = read_snapshot(source)
        return merge_snapshot(self.store, source, self.policy)

