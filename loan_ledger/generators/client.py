"""Client generator."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterator

from loan_ledger.generators.base import BaseGenerator
from loan_ledger.models import Client


class ClientGenerator(BaseGenerator):
    """Generate synthetic borrowers with unique phone numbers."""

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        super().__init__(seed, locale)
        self._phones: set[str] = set()

    def generate(self) -> Client:
        """Generate a single client.

        Returns
        -------
        Client
            Generated client.
        """
        return Client(
            client_id=self.fake.uuid4(),
            name=self.fake.name(),
            phone=self._unique_phone(),
            address=f"{self.fake.street_name()}, {self.fake.building_number()} - {self.fake.bairro()}",
            registered_at=datetime.now() - timedelta(days=self.random.randint(0, 365)),
        )

    def generate_batch(self, count: int) -> Iterator[Client]:
        """Generate multiple clients.

        Parameters
        ----------
        count : int
            Number of clients to generate.

        Yields
        ------
        Client
            Generated clients.
        """
        for _ in range(count):
            yield self.generate()

    def _unique_phone(self) -> str:
        phone = self.fake.cellphone_number()
        while phone in self._phones:
            phone = self.fake.cellphone_number()
        self._phones.add(phone)
        return phone
