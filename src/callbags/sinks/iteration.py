"""Iterator consumers: expose a source through Python's iteration protocols.

``to_iter`` returns a generator for synchronous pull sources: each ``next()``
issues exactly one pull and yields what that pull delivered.
``to_async_iter`` returns an async generator that also works with push
sources whose values arrive later from the event loop.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Iterator
from typing import Any

from ..core import DATA, END, START, Handshake, Signal, Source, Termination
from ..core.termination import Failed
from ..foundation.errors import as_exception


class _Inbox:
    """Sink that buffers delivered values until the iterator asks for them."""
    
    __slots__ = ("handshake", "values", "termination")
    
    def __init__(self) -> None:
        self.handshake = Handshake()
        self.values: deque[Any] = deque()
        self.termination: Termination | None = None
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        hs = self.handshake
        if not hs.admits(kind):
            hs.reject(kind, payload)
            return
        if kind == START:
            hs.greet(payload)
        elif kind == DATA:
            self.values.append(payload)
        elif kind == END:
            hs.terminate()
            self.termination = Termination.of(payload)


def _raise_if_failed(termination: Termination | None, operator: str) -> None:
    if isinstance(termination, Failed):
        raise as_exception(operator, termination.reason)


def to_iter(source: Source) -> Iterator[Any]:
    """Iterate a pull source.
    
    The source is started on the first ``next()``. A graceful END finishes
    the iteration; an error END raises the error (wrapped in
    ``UpstreamError`` when it is not an exception). If a pull delivers
    nothing synchronously the source is cancelled and iteration stops.
    Closing the generator early cancels the source.
    
    Example:
        >>> list(to_iter(from_array([1, 2, 3])))
        [1, 2, 3]
    """
    inbox = _Inbox()
    try:
        source(START, inbox)
        while True:
            if inbox.values:
                yield inbox.values.popleft()
                continue
            if inbox.termination is not None or not inbox.handshake.greeted:
                break
            inbox.handshake.pull()
            if not inbox.values and inbox.termination is None:
                break
        _raise_if_failed(inbox.termination, "to_iter")
    finally:
        inbox.handshake.cancel()


class _AsyncInbox:
    __slots__ = ("handshake", "queue")
    
    def __init__(self) -> None:
        self.handshake = Handshake()
        self.queue: asyncio.Queue[tuple[Signal, Any]] = asyncio.Queue()
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        hs = self.handshake
        if not hs.admits(kind):
            hs.reject(kind, payload)
            return
        if kind == START:
            hs.greet(payload)
        elif kind == DATA:
            self.queue.put_nowait((DATA, payload))
        elif kind == END:
            hs.terminate()
            self.queue.put_nowait((END, payload))


async def to_async_iter(source: Source) -> AsyncIterator[Any]:
    """Async-iterate a pull or push source.
    
    One pull is in flight at a time: the next request is sent only after the
    previous value was handed to the consumer. Values a push source sends in
    between are queued, not dropped.
    
    Example:
        >>> async for value in to_async_iter(from_obs(ticker)):
        ...     handle(value)
    """
    inbox = _AsyncInbox()
    try:
        source(START, inbox)
        inbox.handshake.pull()
        while True:
            kind, payload = await inbox.queue.get()
            if kind == END:
                _raise_if_failed(Termination.of(payload), "to_async_iter")
                return
            yield payload
            inbox.handshake.pull()
    finally:
        inbox.handshake.cancel()
