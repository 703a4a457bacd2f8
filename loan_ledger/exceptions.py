"""Custom exception hierarchy for loan-ledger."""


class LoanLedgerError(Exception):
    """Base exception for all loan-ledger errors."""


class ValidationError(LoanLedgerError):
    """Raised when an input fails a business rule."""


class InvalidAmountError(ValidationError):
    """Raised when a principal or amount is not positive."""


class InvalidScheduleError(ValidationError):
    """Raised when an installment count is not positive."""


class InvalidPaymentError(ValidationError):
    """Raised when a payment is not positive or exceeds the outstanding balance."""


class InvalidBackupFormatError(ValidationError):
    """Raised when a backup snapshot is missing required fields."""


class EntityNotFoundError(LoanLedgerError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class DuplicateClientError(LoanLedgerError):
    """Raised when two stored clients share the same phone number."""


class ReconciliationError(LoanLedgerError):
    """Raised when a backup merge fails after some records were written.

    The ``result`` attribute holds the counts accumulated before the failure.
    """

    def __init__(self, message: str, result) -> None:
        super().__init__(message)
        self.result = result


class ConfigurationError(LoanLedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(LoanLedgerError):
    """Raised when a sink operation fails."""
