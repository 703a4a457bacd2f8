"""Sample data generators."""

from loan_ledger.generators.client import ClientGenerator
from loan_ledger.generators.loan import LoanGenerator, PaymentBehavior

__all__ = ["ClientGenerator", "LoanGenerator", "PaymentBehavior"]
