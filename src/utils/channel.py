"""Closable FIFO channel shared between pool threads."""

import queue
import threading
import time
from collections import deque
from typing import Any, Iterator


class ChannelClosedError(RuntimeError):
    """Send on a closed channel, double close, or receive after close.

    Raised for pool lifecycle violations; callers are not expected to
    recover from it.
    """


class Channel:
    """Thread-safe FIFO with Go-style close semantics.

    Any number of threads may send and receive. ``close()`` marks the end
    of input: receivers drain what is left, then stop. Sending after close
    raises ChannelClosedError, including for senders blocked on a full
    buffer when the close happens.

    Example:
        >>> ch = Channel()
        >>> ch.put(1)
        >>> ch.close()
        >>> list(ch)
        [1]
    """

    def __init__(self, maxsize: int = 0):
        """Initialize channel.

        Args:
            maxsize: Buffer capacity; 0 means unbounded.
        """
        self._maxsize = maxsize
        self._items: deque = deque()
        self._cond = threading.Condition()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _full(self) -> bool:
        return 0 < self._maxsize <= len(self._items)

    def put(self, item: Any) -> None:
        """Send an item, blocking while the buffer is full.

        The lock is released while waiting, so ``close()`` is never held
        up by a blocked sender.

        Raises:
            ChannelClosedError: If the channel is or becomes closed.
        """
        with self._cond:
            while not self._closed and self._full():
                self._cond.wait()
            if self._closed:
                raise ChannelClosedError("send on closed channel")
            self._items.append(item)
            self._cond.notify_all()

    def close(self) -> None:
        """Close the channel and wake every blocked sender and receiver.

        Raises:
            ChannelClosedError: If the channel is already closed.
        """
        with self._cond:
            if self._closed:
                raise ChannelClosedError("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def receive(self, timeout: float | None = None) -> Any:
        """Receive the next item.

        Args:
            timeout: Seconds to wait, or None to wait forever.

        Returns:
            Any: The next item in FIFO order.

        Raises:
            ChannelClosedError: If the channel is closed and drained.
            queue.Empty: If the timeout expires.
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        with self._cond:
            while not self._items and not self._closed:
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise queue.Empty
                self._cond.wait(remaining)

            if not self._items:
                raise ChannelClosedError("receive on closed channel")
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                item = self.receive()
            except ChannelClosedError:
                return
            yield item
