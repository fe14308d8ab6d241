"""Thread-safe queues shared between test code and request threads."""

import threading
from collections import deque
from typing import Any, Callable, Optional

from ..core.models import RecordedRequest


Handler = Callable[[RecordedRequest], Any]


class HandlerQueue:
    """FIFO of response handlers.

    Handlers are consumed in the order they were put. `pop` never waits;
    `claim` waits for the handler whose ordinal matches a ticket, so that
    concurrent waiters are still served strictly in ticket order.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._handlers: deque[Handler] = deque()
        self._consumed = 0
        self._closed = False

    def put(self, handler: Handler) -> None:
        """Append a handler."""
        with self._cond:
            self._handlers.append(handler)
            self._cond.notify_all()

    def pop(self) -> Optional[Handler]:
        """Remove and return the front handler, or None if empty."""
        with self._cond:
            if not self._handlers:
                return None
            return self._take_front()

    def claim(self, ticket: int) -> Optional[Handler]:
        """Block until handler number `ticket` (0-based) is available.

        Args:
            ticket: Ordinal of the handler to wait for.

        Returns:
            The handler, or None if the queue was closed first.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._closed or self._is_turn(ticket))
            if self._is_turn(ticket):
                return self._take_front()
            return None

    def close(self) -> None:
        """Release every waiter in `claim`."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def _is_turn(self, ticket: int) -> bool:
        return self._consumed == ticket and bool(self._handlers)

    def _take_front(self) -> Handler:
        # Caller holds the condition lock.
        handler = self._handlers.popleft()
        self._consumed += 1
        self._cond.notify_all()
        return handler

    def __len__(self) -> int:
        with self._cond:
            return len(self._handlers)


class RequestLog:
    """FIFO of recorded requests, drained by test code."""

    def __init__(self):
        self._cond = threading.Condition()
        self._requests: deque[RecordedRequest] = deque()
        self._count = 0

    def append(self, request: RecordedRequest) -> None:
        """Record a request and wake one waiting reader."""
        with self._cond:
            self._requests.append(request)
            self._count += 1
            self._cond.notify()

    def take(self, block: bool = True, timeout: Optional[float] = None) -> Optional[RecordedRequest]:
        """Remove and return the oldest unread request.

        Args:
            block: Wait for a request if none is available.
            timeout: Maximum seconds to wait; None waits forever.

        Returns:
            The request, or None if nothing arrived in time.
        """
        with self._cond:
            if block:
                # wait_for releases the lock while suspended
                if not self._cond.wait_for(lambda: self._requests, timeout):
                    return None
            elif not self._requests:
                return None
            return self._requests.popleft()

    @property
    def count(self) -> int:
        """Total number of requests ever recorded."""
        with self._cond:
            return self._count

    def __len__(self) -> int:
        with self._cond:
            return len(self._requests)
