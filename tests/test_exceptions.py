"""Tests for custom exception hierarchy."""

from loan_ledger.exceptions import (
    ConfigurationError,
    DuplicateClientError,
    EntityNotFoundError,
    InvalidAmountError,
    InvalidBackupFormatError,
    InvalidPaymentError,
    InvalidScheduleError,
    LoanLedgerError,
    ReconciliationError,
    ReferentialIntegrityError,
    SinkError,
    ValidationError,
)
from loan_ledger.models import MergeResult


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_ledger_error_is_exception(self) -> None:
        assert isinstance(LoanLedgerError("test"), Exception)

    def test_validation_errors(self) -> None:
        for cls in (
            InvalidAmountError,
            InvalidScheduleError,
            InvalidPaymentError,
            InvalidBackupFormatError,
        ):
            err = cls("test")
            assert isinstance(err, ValidationError)
            assert isinstance(err, LoanLedgerError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, LoanLedgerError)

    def test_other_errors_are_loan_ledger_errors(self) -> None:
        for cls in (DuplicateClientError, ConfigurationError, SinkError):
            assert isinstance(cls("test"), LoanLedgerError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("Client c-001 not found")
        assert str(err) == "Client c-001 not found"


class TestReconciliationError:
    """Tests for ReconciliationError."""

    def test_carries_partial_result(self) -> None:
        result = MergeResult(clients_created=2, loans_inserted=1)
        err = ReconciliationError("Backup merge interrupted", result)

        assert err.result is result
        assert str(err) == "Backup merge interrupted"
        assert isinstance(err, LoanLedgerError)
