"""Merge an imported backup into the live store.

The merge is strictly additive. Clients are matched by phone and never
overwritten; loans are always appended with a fresh id, so importing the
same backup twice duplicates its loans.

Phones are compared on their digits only: "(11) 98888-0001" in the backup
matches "11988880001" in the store. Clients without any digit in their
phone never match and are always created.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from loan_ledger.backup.codec import BackupSnapshot, parse_snapshot
from loan_ledger.config import InterestPolicy
from loan_ledger.engine.origination import originate
from loan_ledger.exceptions import DuplicateClientError, ReconciliationError
from loan_ledger.logging import log_context
from loan_ledger.models import Client, Loan, MergeResult

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def phone_key(phone: str) -> str:
    """Normalise a phone number to its digits for matching."""
    return _NON_DIGITS.sub("", phone or "")


def index_by_phone(clients: Iterable[Client]) -> dict[str, Client]:
    """Index clients by phone.

    Raises
    ------
    DuplicateClientError
        If two clients share a phone number.
    """
    index: dict[str, Client] = {}
    for client in clients:
        key = phone_key(client.phone)
        if not key:
            continue
        other = index.get(key)
        if other is not None:
            raise DuplicateClientError(
                f"Clients {other.client_id} and {client.client_id} share phone {client.phone}"
            )
        index[key] = client
    return index


def _rederived(loan: Loan, policy: InterestPolicy | None) -> Loan:
    if loan.installments:
        return loan
    return replace(
        loan,
        installments=originate(
            loan.principal, loan.installment_count, loan.origination_date, policy
        ),
    )


def merge_snapshot(
    store: Any,
    snapshot: BackupSnapshot | Mapping[str, Any],
    policy: InterestPolicy | None = None,
) -> MergeResult:
    """Fold ``snapshot`` into ``store``.

    Parameters
    ----------
    store : Any
        Collaborator exposing ``list_clients``, ``create_client`` and
        ``create_loan``.
    snapshot : BackupSnapshot | Mapping[str, Any]
        Parsed snapshot or raw backup document.
    policy : InterestPolicy | None
        Rules used to re-derive loans that arrive without installments.

    Returns
    -------
    MergeResult
        Clients created, clients matched and loans inserted.

    Raises
    ------
    InvalidBackupFormatError
        If a raw document fails validation. Nothing is written.
    DuplicateClientError
        If stored clients already share a phone. Nothing is written.
    ReconciliationError
        If the store fails mid-merge. Carries the partial counts; records
        already written stay written.
    """
    if not isinstance(snapshot, BackupSnapshot):
        snapshot = parse_snapshot(snapshot)

    loans_by_client = {
        client_id: [_rederived(loan, policy) for loan in loans]
        for client_id, loans in snapshot.loans.items()
    }
    orphans = set(loans_by_client) - {client.client_id for client in snapshot.clients}
    if orphans:
        logger.warning(
            "Skipping loans of %d client ids absent from the backup: %s",
            len(orphans),
            ", ".join(sorted(orphans)),
        )

    by_phone = index_by_phone(store.list_clients())
    result = MergeResult()

    logger.info(
        "Merging backup version %s: %d clients, %d loans against %d existing clients",
        snapshot.version,
        len(snapshot.clients),
        snapshot.loan_count,
        len(by_phone),
    )

    try:
        for imported in snapshot.clients:
            key = phone_key(imported.phone)
            target = by_phone.get(key) if key else None

            if target is not None:
                result.clients_matched += 1
                logger.debug(
                    "Imported client %s matched existing client %s",
                    imported.client_id,
                    target.client_id,
                    extra=log_context(client_id=target.client_id),
                )
            else:
                target = store.create_client(
                    name=imported.name,
                    phone=imported.phone,
                    address=imported.address,
                )
                result.clients_created += 1
                if key:
                    by_phone[key] = target

            for loan in loans_by_client.get(imported.client_id, []):
                store.create_loan(
                    client_id=target.client_id,
                    principal=loan.principal,
                    installment_count=loan.installment_count,
                    origination_date=loan.origination_date,
                    installments=loan.installments,
                )
                result.loans_inserted += 1
    except Exception as e:
        logger.error("Backup merge interrupted after %s: %s", result, e)
        raise ReconciliationError(f"Backup merge interrupted: {e}", result) from e

    logger.info(
        "Backup merged: %d clients created, %d matched, %d loans inserted",
        result.clients_created,
        result.clients_matched,
        result.loans_inserted,
    )
    return result
