from typing import Dict, Optional

from exceptions import DuplicateTransactionId
from models import DisputeState, HistoryEntry, Transaction


class TransactionHistory:
    """
    Append-only record of accepted deposits and withdrawals, keyed by transaction id.
    Tracks the dispute state of each entry. Never touches account balances.
    """

    def __init__(self):
        self._entries: Dict[int, HistoryEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._entries

    def record(self, transaction: Transaction) -> HistoryEntry:
        """
        Store a deposit or withdrawal for future dispute lookups.

        Raises:
            DuplicateTransactionId: the transaction id is already recorded.
        """
        if transaction.transaction_id in self._entries:
            raise DuplicateTransactionId(transaction, "transaction id already recorded")
        entry = HistoryEntry(client_id=transaction.client_id, amount=transaction.amount)
        self._entries[transaction.transaction_id] = entry
        return entry

    def lookup(self, transaction_id: int) -> Optional[HistoryEntry]:
        """Retrieve stored entry by ID, or None if never recorded."""
        return self._entries.get(transaction_id)

    def mark(self, transaction_id: int, new_state: DisputeState) -> None:
        """Set the dispute state. Legality of the transition is checked by the caller."""
        self._entries[transaction_id].dispute_state = new_state
