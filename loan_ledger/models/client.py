"""Client model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Client:
    """Borrower known to the ledger.

    ``phone`` is the business key used to recognise the same person across
    backups, even though the store does not enforce its uniqueness.
    """

    client_id: str
    name: str
    phone: str
    registered_at: datetime
    address: str = ""
