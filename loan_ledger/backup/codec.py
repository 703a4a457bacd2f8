"""Backup snapshot document: export, validation and file I/O.

A snapshot is a JSON object::

    {
      "version": "1.0",
      "exportedAt": "2024-03-01T12:00:00+00:00",
      "totalClients": 2,
      "totalLoans": 3,
      "clients": [{"id", "name", "phone", "address", "registeredAt"}, ...],
      "loans": {"<original client id>": [{"id", "clientId", "principal",
                "installmentCount", "originationDate", "installments": [...]}]}
    }

Amounts are JSON numbers, dates are ``YYYY-MM-DD``.
"""

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from loan_ledger.engine.money import ZERO, round_money, to_decimal
from loan_ledger.exceptions import InvalidBackupFormatError
from loan_ledger.models import Client, Installment, Loan

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "1.0"


@dataclass
class BackupSnapshot:
    """Validated content of a backup document."""

    version: str
    exported_at: datetime | None
    clients: list[Client] = field(default_factory=list)
    loans: dict[str, list[Loan]] = field(default_factory=dict)

    @property
    def loan_count(self) -> int:
        return sum(len(loans) for loans in self.loans.values())


# --- Export ---


def _money(value: Decimal) -> float:
    return float(round_money(value))


def installment_to_dict(installment: Installment) -> dict[str, Any]:
    return {
        "number": installment.number,
        "principalShare": _money(installment.principal_share),
        "contractAmount": _money(installment.contract_amount),
        "dueDate": installment.due_date.isoformat(),
        "amountPaid": _money(installment.amount_paid),
    }


def loan_to_dict(loan: Loan) -> dict[str, Any]:
    return {
        "id": loan.loan_id,
        "clientId": loan.client_id,
        "principal": _money(loan.principal),
        "installmentCount": loan.installment_count,
        "originationDate": loan.origination_date.isoformat(),
        "installments": [installment_to_dict(inst) for inst in loan.installments],
        "createdAt": loan.created_at.isoformat() if loan.created_at else None,
    }


def client_to_dict(client: Client) -> dict[str, Any]:
    return {
        "id": client.client_id,
        "name": client.name,
        "phone": client.phone,
        "address": client.address,
        "registeredAt": client.registered_at.isoformat(),
    }


def export_snapshot(
    clients: Iterable[Client],
    loans_by_client: Mapping[str, Sequence[Loan]],
    exported_at: datetime,
) -> dict[str, Any]:
    """Build a backup document.

    Clients without loans are listed but get no entry in the loans map.
    """
    clients = list(clients)
    loans = {
        client.client_id: [loan_to_dict(loan) for loan in loans_by_client[client.client_id]]
        for client in clients
        if loans_by_client.get(client.client_id)
    }
    return {
        "version": SNAPSHOT_VERSION,
        "exportedAt": exported_at.isoformat(),
        "totalClients": len(clients),
        "totalLoans": sum(len(items) for items in loans.values()),
        "clients": [client_to_dict(client) for client in clients],
        "loans": loans,
    }


# --- Import ---


def _require(record: Mapping[str, Any], key: str, where: str) -> Any:
    value = record.get(key)
    if value is None or value == "":
        raise InvalidBackupFormatError(f"{where}: missing required field '{key}'")
    return value


def _parse_date(value: Any, where: str) -> date:
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise InvalidBackupFormatError(f"{where}: invalid date {value!r}") from e


def _parse_datetime(value: Any, where: str) -> datetime | None:
    if value in (None, ""):
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as e:
        raise InvalidBackupFormatError(f"{where}: invalid timestamp {value!r}") from e


def _parse_money(value: Any, where: str) -> Decimal:
    try:
        return to_decimal(value)
    except (TypeError, ValueError) as e:
        raise InvalidBackupFormatError(f"{where}: invalid amount {value!r}") from e


def parse_client(record: Any, where: str) -> Client:
    if not isinstance(record, Mapping):
        raise InvalidBackupFormatError(f"{where}: client must be an object")
    return Client(
        client_id=str(_require(record, "id", where)),
        name=str(_require(record, "name", where)),
        phone=str(_require(record, "phone", where)),
        address=str(record.get("address") or ""),
        registered_at=_parse_datetime(record.get("registeredAt"), where) or datetime.now(),
    )


def parse_installment(record: Any, where: str, default_share: Decimal) -> Installment:
    if not isinstance(record, Mapping):
        raise InvalidBackupFormatError(f"{where}: installment must be an object")
    number = _require(record, "number", where)
    if isinstance(number, bool) or not isinstance(number, int) or number < 1:
        raise InvalidBackupFormatError(f"{where}: invalid installment number {number!r}")

    share = record.get("principalShare")
    amount_paid = _parse_money(record.get("amountPaid") or 0, where)
    if amount_paid < ZERO:
        raise InvalidBackupFormatError(f"{where}: negative amount paid")

    return Installment(
        number=number,
        principal_share=_parse_money(share, where) if share is not None else default_share,
        contract_amount=_parse_money(_require(record, "contractAmount", where), where),
        due_date=_parse_date(_require(record, "dueDate", where), where),
        amount_paid=amount_paid,
    )


def parse_loan(record: Any, where: str) -> Loan:
    """Parse one loan record.

    An empty installment list is kept empty: the merge re-derives it.
    """
    if not isinstance(record, Mapping):
        raise InvalidBackupFormatError(f"{where}: loan must be an object")

    principal = _parse_money(_require(record, "principal", where), where)
    if principal <= ZERO:
        raise InvalidBackupFormatError(f"{where}: principal must be positive")

    raw_installments = record.get("installments") or []
    if not isinstance(raw_installments, list):
        raise InvalidBackupFormatError(f"{where}: installments must be a list")

    count = record.get("installmentCount") or len(raw_installments) or 1
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidBackupFormatError(f"{where}: invalid installment count {count!r}")

    default_share = round_money(principal / count)
    installments = [
        parse_installment(item, f"{where}.installments[{i}]", default_share)
        for i, item in enumerate(raw_installments)
    ]
    if installments:
        if len(installments) != count:
            raise InvalidBackupFormatError(
                f"{where}: {len(installments)} installments for a count of {count}"
            )
        numbers = sorted(inst.number for inst in installments)
        if numbers != list(range(1, count + 1)):
            raise InvalidBackupFormatError(
                f"{where}: installment numbers must run from 1 to {count}"
            )
        installments.sort(key=lambda inst: inst.number)

    return Loan(
        loan_id=str(record.get("id") or ""),
        client_id=str(record.get("clientId") or ""),
        principal=principal,
        installment_count=count,
        origination_date=_parse_date(_require(record, "originationDate", where), where),
        installments=installments,
        created_at=_parse_datetime(record.get("createdAt"), where),
    )


def parse_snapshot(document: Any) -> BackupSnapshot:
    """Validate a backup document and convert it to models.

    Every record is checked before anything is returned, so a malformed
    backup is rejected before the merge writes anything.

    Raises
    ------
    InvalidBackupFormatError
        If the version marker, client list or loan map is missing, or any
        record inside them is malformed.
    """
    if not isinstance(document, Mapping):
        raise InvalidBackupFormatError("Backup must be a JSON object")

    version = document.get("version")
    if not isinstance(version, str) or not version:
        raise InvalidBackupFormatError("Backup is missing its version marker")

    raw_clients = document.get("clients")
    if not isinstance(raw_clients, list):
        raise InvalidBackupFormatError("Backup is missing its client list")

    raw_loans = document.get("loans")
    if not isinstance(raw_loans, Mapping):
        raise InvalidBackupFormatError("Backup is missing its loan map")

    clients = [parse_client(item, f"clients[{i}]") for i, item in enumerate(raw_clients)]

    loans: dict[str, list[Loan]] = {}
    for client_id, items in raw_loans.items():
        if not isinstance(items, list):
            raise InvalidBackupFormatError(f"loans[{client_id}] must be a list")
        loans[str(client_id)] = [
            parse_loan(item, f"loans[{client_id}][{i}]") for i, item in enumerate(items)
        ]

    return BackupSnapshot(
        version=version,
        exported_at=_parse_datetime(document.get("exportedAt"), "exportedAt"),
        clients=clients,
        loans=loans,
    )


# --- Files ---


def read_snapshot(path: str | Path) -> BackupSnapshot:
    """Read and validate a backup file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidBackupFormatError(f"{path} is not valid JSON: {e}") from e

    snapshot = parse_snapshot(document)
    logger.info(
        "Read backup %s: version %s, %d clients, %d loans",
        path,
        snapshot.version,
        len(snapshot.clients),
        snapshot.loan_count,
    )
    return snapshot


def write_snapshot(path: str | Path, document: Mapping[str, Any], pretty: bool = True) -> Path:
    """Write a backup document to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if pretty:
            json.dump(document, f, indent=2, ensure_ascii=False)
        else:
            json.dump(document, f, ensure_ascii=False)
    logger.info("Wrote backup %s", path)
    return path
