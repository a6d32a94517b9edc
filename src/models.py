from collections import Counter
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow
from enum import Enum
from typing import Optional

# Balance arithmetic is exact: anything that would round raises decimal.Inexact.
MONEY_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeState(Enum):
    NONE = "none"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"

    @property
    def can_be_disputed(self) -> bool:
        return self in (DisputeState.NONE, DisputeState.RESOLVED)


class ProcessingResult(Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class HistoryEntry:
    """An accepted deposit or withdrawal, kept for dispute lookups."""

    client_id: int
    amount: Decimal
    dispute_state: DisputeState = DisputeState.NONE


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return MONEY_CONTEXT.add(self.available, self.held)

    def credit(self, amount: Decimal) -> None:
        self.available = MONEY_CONTEXT.add(self.available, amount)

    def debit(self, amount: Decimal) -> None:
        self.available = MONEY_CONTEXT.subtract(self.available, amount)

    def hold(self, amount: Decimal) -> None:
        self.available = MONEY_CONTEXT.subtract(self.available, amount)
        self.held = MONEY_CONTEXT.add(self.held, amount)

    def release_hold(self, amount: Decimal) -> None:
        self.held = MONEY_CONTEXT.subtract(self.held, amount)
        self.available = MONEY_CONTEXT.add(self.available, amount)

    def charge_back(self, amount: Decimal) -> None:
        self.held = MONEY_CONTEXT.subtract(self.held, amount)
        self.locked = True


class ProcessingStats:
    """Counters for applied and rejected transactions, keyed by rejection reason."""

    def __init__(self):
        self.processed = 0
        self.rejected: Counter = Counter()

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())

    def record_success(self) -> None:
        self.processed += 1

    def record_rejection(self, reason: str) -> None:
        self.rejected[reason] += 1

    def summary(self) -> str:
        reasons = ", ".join(f"{reason}={count}" for reason, count in sorted(self.rejected.items()))
        line = f"Processed: {self.processed}, Rejected: {self.total_rejected}"
        return f"{line} ({reasons})" if reasons else line
