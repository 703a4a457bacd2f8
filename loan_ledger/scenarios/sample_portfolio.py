"""Sample portfolio scenario: synthetic clients, loans and payments."""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any

from loan_ledger.config import InterestPolicy
from loan_ledger.engine import portfolio_totals, summarize_portfolio
from loan_ledger.generators import ClientGenerator, LoanGenerator, PaymentBehavior
from loan_ledger.models import ClientStatus
from loan_ledger.reports import (
    client_overview_rows,
    installment_rows,
    late_installment_rows,
    portfolio_indicators,
    upcoming_installment_rows,
)
from loan_ledger.store import InMemoryLedgerStore

logger = logging.getLogger(__name__)


class SamplePortfolioScenario:
    """Generate a small informal-lending portfolio.

    This scenario creates:
    - Clients with unique phone numbers
    - One to ``max_loans_per_client`` loans per client, in 1x or 2x
    - Payments recorded as of ``as_of``: settled, partial or none
    """

    def __init__(
        self,
        num_clients: int = 20,
        as_of: date | None = None,
        max_loans_per_client: int = 2,
        loanless_rate: float = 0.10,
        seed: int | None = None,
        policy: InterestPolicy | None = None,
        upcoming_window_days: int = 7,
    ) -> None:
        """Initialize the sample portfolio scenario.

        Parameters
        ----------
        num_clients : int
            Number of clients to generate.
        as_of : date | None
            Reference date for origination and payments (default today).
        max_loans_per_client : int
            Upper bound of loans per client.
        loanless_rate : float
            Share of clients registered without any loan.
        seed : int | None
            Random seed for reproducibility.
        policy : InterestPolicy | None
            Interest rules used for origination and payments.
        upcoming_window_days : int
            Window of the "due soon" report table.
        """
        self.num_clients = num_clients
        self.as_of = as_of or date.today()
        self.max_loans_per_client = max_loans_per_client
        self.loanless_rate = loanless_rate
        self.seed = seed
        self.policy = policy
        self.upcoming_window_days = upcoming_window_days

        self._random = random.Random(seed)
        self.store = InMemoryLedgerStore()
        self._client_gen = ClientGenerator(seed=seed)
        self._loan_gen = LoanGenerator(seed=seed, policy=policy)
        self._payment_behavior = PaymentBehavior(seed=seed, policy=policy)

    def generate(self) -> InMemoryLedgerStore:
        """Generate all data for the scenario.

        Returns
        -------
        InMemoryLedgerStore
            Store containing all generated data.
        """
        logger.info(
            "Starting sample portfolio: %d clients as of %s",
            self.num_clients,
            self.as_of.isoformat(),
        )

        for generated in self._client_gen.generate_batch(self.num_clients):
            client = self.store.create_client(
                name=generated.name,
                phone=generated.phone,
                address=generated.address,
            )
            if self._random.random() < self.loanless_rate:
                continue

            for _ in range(self._random.randint(1, self.max_loans_per_client)):
                loan = self._loan_gen.generate(client.client_id, self.as_of)
                loan = self._payment_behavior.apply_payment_behavior(loan, self.as_of)
                self.store.create_loan(
                    client_id=client.client_id,
                    principal=loan.principal,
                    installment_count=loan.installment_count,
                    origination_date=loan.origination_date,
                    installments=loan.installments,
                )

        counts = self.store.summary()
        logger.info(
            "Generated %d clients, %d loans, %d installments",
            counts["clients"],
            counts["loans"],
            counts["installments"],
        )
        return self.store

    def _loans_by_client(self):
        clients = self.store.list_clients()
        return clients, {c.client_id: self.store.list_loans(c.client_id) for c in clients}

    def export(self, sinks: list[Any]) -> None:
        """Write every report table to each sink.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances (JsonFileSink, ConsoleSink).
        """
        clients, loans = self._loans_by_client()
        tables = {
            "client_overview": client_overview_rows(clients, loans, self.as_of, self.policy),
            "installments": installment_rows(clients, loans, self.as_of, self.policy),
            "late_installments": late_installment_rows(clients, loans, self.as_of, self.policy),
            "upcoming_installments": upcoming_installment_rows(
                clients, loans, self.as_of, self.upcoming_window_days, self.policy
            ),
            "indicators": [portfolio_indicators(clients, loans, self.as_of, self.policy)],
        }

        for sink in sinks:
            for name, rows in tables.items():
                sink.write_batch(name, rows)

        logger.info("Exported sample portfolio to %d sinks", len(sinks))

    def get_portfolio_summary(self) -> dict[str, Any]:
        """Get dashboard totals for the generated portfolio.

        Returns
        -------
        dict[str, Any]
            Totals of the whole active portfolio and of its late and active
            subviews.
        """
        clients, loans = self._loans_by_client()
        summaries = summarize_portfolio(clients, loans, self.as_of, self.policy)

        def view(status: ClientStatus | None) -> dict[str, Any]:
            selected = [s for s in summaries if status is None or s.status == status]
            totals = portfolio_totals(selected)
            return {
                "clients": totals.client_count,
                "loans": totals.loan_count,
                "principal": float(totals.total_principal),
                "outstanding": float(totals.total_outstanding),
            }

        return {
            "all": view(None),
            "late": view(ClientStatus.LATE),
            "active": view(ClientStatus.ACTIVE),
        }
