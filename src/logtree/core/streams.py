"""Broadcast channels that deliver published records to subscribers.

A RecordStream fans each published record out to every subscription that
is attached at publish time. Subscriptions are isolated from each other:
a slow handler only delays its own queue, and a failing handler is
reported through the standard logging module and then skipped.
"""

import asyncio
import logging
import threading
from collections import deque
from typing import cast

from logtree.core.models import LogRecord
from logtree.core.ports import RecordHandler

logger = logging.getLogger(__name__)

_CLOSED = object()


class _Attachment:
    """State shared by every kind of subscription."""

    def __init__(self, stream: "RecordStream") -> None:
        self._stream = stream
        self._active = True

    @property
    def active(self) -> bool:
        """Return True while the subscription receives new records."""
        return self._active

    def cancel(self) -> None:
        """Detach from the stream. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._stream._detach(self)
        self._close()

    def _deliver(self, record: LogRecord) -> None:
        raise NotImplementedError

    def _close(self) -> None:
        raise NotImplementedError


class Subscription(_Attachment):
    """A handler attached to a RecordStream.

    Asynchronous subscriptions own a FIFO queue drained by a daemon worker
    thread, so publishing never waits for the handler. Synchronous ones run
    the handler on the publishing thread.
    """

    def __init__(
        self,
        stream: "RecordStream",
        handler: RecordHandler,
        synchronous: bool = False,
    ) -> None:
        super().__init__(stream)
        self._handler = handler
        self._synchronous = synchronous
        self._pending: deque[LogRecord] = deque()
        self._in_flight = False
        self._condition = threading.Condition()
        self._worker: threading.Thread | None = None
        if not synchronous:
            self._worker = threading.Thread(
                target=self._run,
                name=f"logtree-subscription-{stream.name or 'root'}",
                daemon=True,
            )
            self._worker.start()

    @property
    def synchronous(self) -> bool:
        """Return True if the handler runs on the publishing thread."""
        return self._synchronous

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every queued record has been handled.

        Args:
            timeout: Seconds to wait. None waits indefinitely.

        Returns:
            True if the queue drained, False if the timeout expired.
        """
        if self._synchronous:
            return True
        with self._condition:
            return self._condition.wait_for(
                lambda: not self._pending and not self._in_flight, timeout
            )

    def _deliver(self, record: LogRecord) -> None:
        if not self._active:
            return
        if self._synchronous:
            self._invoke(record)
            return
        with self._condition:
            self._pending.append(record)
            self._condition.notify_all()

    def _close(self) -> None:
        with self._condition:
            self._condition.notify_all()

    def _run(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._pending or not self._active)
                if not self._pending:
                    return
                record = self._pending.popleft()
                self._in_flight = True
            try:
                self._invoke(record)
            finally:
                with self._condition:
                    self._in_flight = False
                    self._condition.notify_all()

    def _invoke(self, record: LogRecord) -> None:
        try:
            self._handler(record)
        except Exception:
            logger.exception(
                "Log record handler %r failed on record #%d",
                self._handler,
                record.sequence_number,
            )


class AsyncSubscription(_Attachment):
    """Async iterator over records, bound to one event loop.

    Records are handed to the loop with call_soon_threadsafe, so publishers
    on any thread are safe. Iteration stops once the subscription or its
    stream is closed.
    """

    def __init__(
        self, stream: "RecordStream", loop: asyncio.AbstractEventLoop
    ) -> None:
        super().__init__(stream)
        self._loop = loop
        self._queue: asyncio.Queue[object] = asyncio.Queue()

    def __aiter__(self) -> "AsyncSubscription":
        return self

    async def __anext__(self) -> LogRecord:
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the marker so later calls also stop.
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return cast(LogRecord, item)

    async def aclose(self) -> None:
        """Cancel the subscription from async code."""
        self.cancel()

    def _deliver(self, record: LogRecord) -> None:
        if self._active:
            self._hand_over(record)

    def _close(self) -> None:
        self._hand_over(_CLOSED)

    def _hand_over(self, item: object) -> None:
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError:
            # The loop is closed; nobody can consume any more.
            if self._active:
                self._active = False
                self._stream._detach(self)


class RecordStream:
    """Multi-consumer broadcast channel of LogRecord objects.

    Each subscription receives every record published after it attached,
    in publish order. Nothing is buffered for late subscribers.

    Example:
        ```python
        stream = logger.subscribe()
        subscription = stream.listen(print)

        async for record in stream:
            ...
        ```
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._attachments: list[_Attachment] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return True once close() was called."""
        return self._closed

    @property
    def listener_count(self) -> int:
        """Return the number of active subscriptions."""
        with self._lock:
            return len(self._attachments)

    @property
    def has_listeners(self) -> bool:
        """Return True if at least one subscription is attached."""
        return self.listener_count > 0

    def listen(
        self, handler: RecordHandler, *, synchronous: bool = False
    ) -> Subscription:
        """Attach a handler to the stream.

        Args:
            handler: Callable invoked once per published record.
            synchronous: Run the handler on the publishing thread instead of
                a dedicated worker thread. Loggers publish while holding a
                process-wide lock, so a synchronous handler must not wait on
                another thread that logs; that thread would block forever.

        Returns:
            The subscription handle. Listening on a closed stream returns a
            subscription that has already ended.

        Raises:
            TypeError: If handler is not callable.
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        subscription = Subscription(self, handler, synchronous=synchronous)
        self._attach(subscription)
        return subscription

    def __aiter__(self) -> AsyncSubscription:
        subscription = AsyncSubscription(self, asyncio.get_running_loop())
        self._attach(subscription)
        return subscription

    def publish(self, record: LogRecord) -> None:
        """Hand a record to every current subscription."""
        with self._lock:
            attachments = list(self._attachments)
        for attachment in attachments:
            attachment._deliver(record)

    def close(self) -> None:
        """End every subscription. Later listeners end immediately."""
        with self._lock:
            self._closed = True
            attachments = list(self._attachments)
        for attachment in attachments:
            attachment.cancel()

    def _attach(self, attachment: _Attachment) -> None:
        with self._lock:
            if not self._closed:
                self._attachments.append(attachment)
                return
        attachment.cancel()

    def _detach(self, attachment: _Attachment) -> None:
        with self._lock:
            if attachment in self._attachments:
                self._attachments.remove(attachment)

    def __repr__(self) -> str:
        return f"<RecordStream {self.name!r} listeners={self.listener_count}>"
