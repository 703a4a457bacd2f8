"""In-memory client and loan store with referential integrity."""

import copy
import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_ledger.exceptions import EntityNotFoundError, ReferentialIntegrityError
from loan_ledger.models import Client, Installment, Loan

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class InMemoryLedgerStore:
    """Reference implementation of the client/loan persistence collaborator.

    Records are copied on the way in and on the way out so callers cannot
    mutate stored state without going through ``update_loan``.
    """

    clients: dict[str, Client] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)

    # Relationship index
    _client_loans: dict[str, list[str]] = field(default_factory=dict)

    def create_client(self, name: str, phone: str, address: str = "") -> Client:
        """Create a client with a fresh id and registration timestamp."""
        client = Client(
            client_id=_new_id(),
            name=name,
            phone=phone,
            address=address or "",
            registered_at=datetime.now(),
        )
        self.clients[client.client_id] = client
        self._client_loans[client.client_id] = []
        logger.debug("Created client %s", client.client_id)
        return copy.deepcopy(client)

    def create_loan(
        self,
        client_id: str,
        principal: Decimal,
        installment_count: int,
        origination_date: date,
        installments: list[Installment],
    ) -> Loan:
        """Create a loan with a fresh id under an existing client."""
        if client_id not in self.clients:
            raise ReferentialIntegrityError(f"Client {client_id} not found")

        loan = Loan(
            loan_id=_new_id(),
            client_id=client_id,
            principal=principal,
            installment_count=installment_count,
            origination_date=origination_date,
            installments=copy.deepcopy(installments),
            created_at=datetime.now(),
        )
        self.loans[loan.loan_id] = loan
        self._client_loans[client_id].append(loan.loan_id)
        logger.debug("Created loan %s for client %s", loan.loan_id, client_id)
        return copy.deepcopy(loan)

    def update_loan(self, loan: Loan) -> Loan:
        """Replace the stored copy of ``loan``."""
        stored = self.loans.get(loan.loan_id)
        if stored is None:
            raise EntityNotFoundError(f"Loan {loan.loan_id} not found")
        if stored.client_id != loan.client_id:
            raise ReferentialIntegrityError(
                f"Loan {loan.loan_id} belongs to client {stored.client_id}"
            )
        self.loans[loan.loan_id] = copy.deepcopy(loan)
        return copy.deepcopy(loan)

    def delete_client(self, client_id: str) -> None:
        """Delete a client together with all of its loans."""
        if client_id not in self.clients:
            raise EntityNotFoundError(f"Client {client_id} not found")
        for loan_id in self._client_loans.pop(client_id, []):
            del self.loans[loan_id]
        del self.clients[client_id]
        logger.debug("Deleted client %s", client_id)

    def delete_loan(self, loan_id: str) -> None:
        """Delete a loan as a whole."""
        loan = self.loans.pop(loan_id, None)
        if loan is None:
            raise EntityNotFoundError(f"Loan {loan_id} not found")
        self._client_loans[loan.client_id].remove(loan_id)

    # Query methods
    def list_clients(self) -> list[Client]:
        """Get all clients in registration order."""
        return [copy.deepcopy(client) for client in self.clients.values()]

    def get_client(self, client_id: str) -> Client:
        """Get one client."""
        client = self.clients.get(client_id)
        if client is None:
            raise EntityNotFoundError(f"Client {client_id} not found")
        return copy.deepcopy(client)

    def list_loans(self, client_id: str) -> list[Loan]:
        """Get all loans for a client."""
        loan_ids = self._client_loans.get(client_id, [])
        return [copy.deepcopy(self.loans[lid]) for lid in loan_ids]

    def get_loan(self, loan_id: str) -> Loan:
        """Get one loan."""
        loan = self.loans.get(loan_id)
        if loan is None:
            raise EntityNotFoundError(f"Loan {loan_id} not found")
        return copy.deepcopy(loan)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "clients": len(self.clients),
            "loans": len(self.loans),
            "installments": sum(len(loan.installments) for loan in self.loans.values()),
        }
