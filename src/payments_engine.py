import logging
import threading
from typing import Dict, Iterable, List, Optional

from config import EngineConfig
from exceptions import TransactionRejected
from message_queue import InMemoryQueue
from models import ClientAccount, ProcessingResult, ProcessingStats, Transaction
from record_source import CsvRecordSource
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Orchestrates transaction processing with a publisher-consumer pipeline.

    One publisher thread feeds the bounded queue from the record source; the calling
    thread is the only consumer and applies records strictly in arrival order.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process(self, transaction: Transaction) -> ProcessingResult:
        """Apply one transaction. Never raises for a rejected transaction."""
        try:
            self._processor.process_transaction(transaction)
        except TransactionRejected as e:
            logger.info(f"Rejected {type(e).__name__}: {e}")
            self._stats.record_rejection(type(e).__name__)
            return ProcessingResult.REJECTED

        self._stats.record_success()
        return ProcessingResult.APPLIED

    def snapshot(self) -> List[ClientAccount]:
        """Return every account ever touched, in first-seen order."""
        return list(self._state.get_all_accounts().values())

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        source = CsvRecordSource(filepath, strict=self._config.strict_parsing)
        accounts = self.process_stream(source)
        return {account.client_id: account for account in accounts}

    def process_stream(self, transactions: Iterable[Transaction]) -> List[ClientAccount]:
        """
        Run the pipeline over `transactions` until exhausted and return the final snapshot.

        Raises:
            Whatever the source raised while producing records, after the
            records published before the failure have been consumed.
        """
        logger.info("Starting processing")

        queue = InMemoryQueue(capacity=self._config.queue_capacity)
        publisher_errors: List[BaseException] = []

        publisher_thread = threading.Thread(
            target=self._publish_transactions,
            args=(transactions, queue, publisher_errors),
            name="record-source",
            daemon=True,
        )
        publisher_thread.start()

        self._consume_transactions(queue)
        publisher_thread.join()

        if publisher_errors:
            raise publisher_errors[0]

        logger.info("Processing complete")
        logger.info(self._stats.summary())

        return self.snapshot()

    def _publish_transactions(
        self,
        transactions: Iterable[Transaction],
        queue: InMemoryQueue,
        errors: List[BaseException],
    ) -> None:
        """Publish every transaction to the queue, then close it."""
        try:
            for transaction in transactions:
                queue.publish_message(transaction)
        except Exception as e:
            errors.append(e)
        finally:
            queue.close()

    def _consume_transactions(self, queue: InMemoryQueue) -> None:
        """Consumer loop: pull from queue and process until the queue is closed and drained."""
        while True:
            transaction = queue.consume_message()
            if transaction is None:
                break
            self.process(transaction)
