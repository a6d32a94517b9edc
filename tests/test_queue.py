import sys
import os
import threading
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from message_queue import InMemoryQueue
from models import Transaction, TransactionType


def make_transaction(client_id: int, transaction_id: int) -> Transaction:
    return Transaction(
        transaction_type=TransactionType.DEPOSIT,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=Decimal("100"),
    )


class TestInMemoryQueue:
    def test_publish_consume(self):
        queue = InMemoryQueue()
        transaction = make_transaction(1, 1)
        queue.publish_message(transaction)
        result = queue.consume_message()
        assert result == transaction

    def test_preserves_order(self):
        queue = InMemoryQueue()
        transactions = [make_transaction(1, i) for i in range(10)]
        for transaction in transactions:
            queue.publish_message(transaction)
        queue.close()

        consumed = []
        while (transaction := queue.consume_message()) is not None:
            consumed.append(transaction)
        assert consumed == transactions

    def test_consume_after_close_returns_none(self):
        queue = InMemoryQueue()
        queue.close()
        assert queue.consume_message() is None
        assert queue.consume_message() is None

    def test_is_empty(self):
        queue = InMemoryQueue()
        assert queue.is_empty()
        queue.publish_message(make_transaction(1, 1))
        assert not queue.is_empty()
        queue.consume_message()
        assert queue.is_empty()

    def test_is_empty_after_close(self):
        queue = InMemoryQueue()
        queue.publish_message(make_transaction(1, 1))
        queue.close()
        assert not queue.is_empty()
        queue.consume_message()
        assert queue.is_empty()

    def test_close(self):
        queue = InMemoryQueue()
        assert not queue.is_closed()
        queue.close()
        queue.close()
        assert queue.is_closed()

    def test_publish_after_close_fails(self):
        queue = InMemoryQueue()
        queue.close()
        with pytest.raises(RuntimeError):
            queue.publish_message(make_transaction(1, 1))

    def test_publisher_blocks_when_full(self):
        queue = InMemoryQueue(capacity=2)
        published = threading.Event()

        def publish():
            for i in range(3):
                queue.publish_message(make_transaction(1, i))
            published.set()

        publisher = threading.Thread(target=publish, daemon=True)
        publisher.start()

        # third publish waits for the consumer
        assert not published.wait(timeout=0.2)

        assert queue.consume_message().transaction_id == 0
        assert published.wait(timeout=2)
        publisher.join(timeout=2)
        assert queue.consume_message().transaction_id == 1
        assert queue.consume_message().transaction_id == 2
