"""Exception hierarchy for the payments engine."""

from typing import Dict, Optional

from models import Transaction


class PaymentsError(Exception):
    """Base exception for all payments engine errors."""


class TransactionRejected(PaymentsError):
    """
    A transaction that cannot be applied.
    Raised before any state is touched; the engine logs it and moves on.
    """

    def __init__(self, transaction: Transaction, reason: str):
        super().__init__(f"{reason}: {transaction!r}")
        self.transaction = transaction
        self.reason = reason


class DuplicateTransactionId(TransactionRejected):
    """Deposit or withdrawal reusing a transaction id already in history."""


class InsufficientFunds(TransactionRejected):
    """Not enough available funds to withdraw or hold the amount."""


class UnknownReference(TransactionRejected):
    """Dispute, resolve or chargeback naming a transaction not in history."""


class ClientMismatch(TransactionRejected):
    """Referenced transaction belongs to another client."""


class InvalidDisputeState(TransactionRejected):
    """Referenced transaction is not in a state that allows this operation."""


class AccountLocked(TransactionRejected):
    """Account was locked by a chargeback."""


class MissingAmount(TransactionRejected):
    """Deposit or withdrawal without an amount."""


class RecordSourceError(PaymentsError):
    """Raised when input records cannot be produced."""


class MalformedRecordError(RecordSourceError):
    """Raised when an input row cannot be parsed into a transaction."""

    def __init__(self, line_number: int, row: Optional[Dict[str, str]], detail: str):
        super().__init__(f"Malformed record on line {line_number}: {detail} ({row})")
        self.line_number = line_number
        self.row = row
        self.detail = detail


class ConfigurationError(PaymentsError):
    """Raised when configuration is invalid."""
