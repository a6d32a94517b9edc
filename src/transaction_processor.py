from models import ClientAccount, DisputeState, HistoryEntry, Transaction, TransactionType
from exceptions import (
    AccountLocked,
    ClientMismatch,
    InsufficientFunds,
    InvalidDisputeState,
    MissingAmount,
    UnknownReference,
)
from state_manager import StateManager


class TransactionProcessor:
    """
    Applies transactions to account state.
    Every handler validates first and raises a TransactionRejected subclass
    before touching any balance, so a rejected transaction leaves no trace.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> ClientAccount:
        """
        Apply a single transaction and return the affected account.

        Raises:
            TransactionRejected: the transaction cannot be applied. State is unchanged
                apart from lazy creation of the client's account.
        """
        account = self._state.get_or_create_account(transaction.client_id)

        if account.locked:
            raise AccountLocked(transaction, "account is locked")

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(account, transaction)

        return account

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> None:
        if transaction.amount is None:
            raise MissingAmount(transaction, "deposit without amount")

        self._state.history.record(transaction)
        account.credit(transaction.amount)

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> None:
        if transaction.amount is None:
            raise MissingAmount(transaction, "withdrawal without amount")

        if account.available < transaction.amount:
            raise InsufficientFunds(
                transaction,
                f"available {account.available} is less than {transaction.amount}",
            )

        self._state.history.record(transaction)
        account.debit(transaction.amount)

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._lookup_original(transaction)

        if not original.dispute_state.can_be_disputed:
            raise InvalidDisputeState(transaction, f"transaction is {original.dispute_state.value}")

        # available >= 0 outranks the plain dispute rule: never hold more than is available.
        if account.available < original.amount:
            raise InsufficientFunds(
                transaction,
                f"available {account.available} is less than disputed {original.amount}",
            )

        account.hold(original.amount)
        self._state.history.mark(transaction.transaction_id, DisputeState.DISPUTED)

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._lookup_disputed(transaction)

        account.release_hold(original.amount)
        self._state.history.mark(transaction.transaction_id, DisputeState.RESOLVED)

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._lookup_disputed(transaction)

        account.charge_back(original.amount)
        self._state.history.mark(transaction.transaction_id, DisputeState.CHARGED_BACK)

    def _lookup_original(self, transaction: Transaction) -> HistoryEntry:
        original = self._state.history.lookup(transaction.transaction_id)

        if original is None:
            raise UnknownReference(transaction, "referenced transaction not found")

        if original.client_id != transaction.client_id:
            raise ClientMismatch(
                transaction,
                f"referenced transaction belongs to client {original.client_id}",
            )

        return original

    def _lookup_disputed(self, transaction: Transaction) -> HistoryEntry:
        original = self._lookup_original(transaction)

        if original.dispute_state != DisputeState.DISPUTED:
            raise InvalidDisputeState(transaction, f"transaction is {original.dispute_state.value}, not disputed")

        return original
