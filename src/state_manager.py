from typing import Dict

from models import ClientAccount
from transaction_history import TransactionHistory


class StateManager:
    """
    Owns client accounts and the transaction history for dispute lookups.
    Mutated only by the single consumer, so no locking is needed.
    """

    def __init__(self):
        # Insertion order doubles as first-seen order for the final snapshot.
        self._accounts: Dict[int, ClientAccount] = {}
        self._history = TransactionHistory()

    @property
    def history(self) -> TransactionHistory:
        return self._history

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
