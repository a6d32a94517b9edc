import threading
from queue import Queue
from typing import Optional

from models import Transaction

_CLOSED = object()


class InMemoryQueue:
    """
    Bounded, ordered, closable hand-off between one publisher and one consumer.
    All synchronization is internal - callers never need to lock.
    """

    DEFAULT_CAPACITY = 16

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._main_queue: Queue = Queue(maxsize=capacity)
        self._closed_event = threading.Event()
        self._drained = False

    def publish_message(self, message: Transaction) -> None:
        """Add message to queue, blocking while the queue is full. Thread-safe."""
        if self._closed_event.is_set():
            raise RuntimeError("Cannot publish to a closed queue")
        self._main_queue.put(message)

    def consume_message(self) -> Optional[Transaction]:
        """
        Get next message, blocking until one is available.
        Returns None once the queue has been closed and every message before the close consumed.
        """
        if self._drained:
            return None
        message = self._main_queue.get()
        if message is _CLOSED:
            self._drained = True
            return None
        return message

    def is_empty(self) -> bool:
        """Check if no messages are waiting."""
        if self._drained:
            return True
        pending = self._main_queue.qsize()
        if self._closed_event.is_set():
            pending -= 1  # close marker
        return pending <= 0

    def close(self) -> None:
        """Signal no more messages will be published. Idempotent."""
        if self._closed_event.is_set():
            return
        self._closed_event.set()
        self._main_queue.put(_CLOSED)

    def is_closed(self) -> bool:
        """Check if close has been signaled."""
        return self._closed_event.is_set()
