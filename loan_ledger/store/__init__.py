"""In-memory data store for clients and loans."""

from loan_ledger.store.memory import InMemoryLedgerStore

__all__ = ["InMemoryLedgerStore"]
