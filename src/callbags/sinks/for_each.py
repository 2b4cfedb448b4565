"""Draining consumer for both pull and push sources."""

from __future__ import annotations

from typing import Any, Callable

from ..core import DATA, END, START, Handshake, Signal, Source, Termination
from ..foundation.logging import violation_logger


class Subscription:
    """Handle returned by ``for_each``; ``dispose()`` cancels the source."""
    
    __slots__ = ("_handshake", "termination")
    
    def __init__(self, handshake: Handshake) -> None:
        self._handshake = handshake
        self.termination: Termination | None = None
    
    @property
    def closed(self) -> bool:
        return self._handshake.terminated
    
    def dispose(self) -> None:
        """Cancel the source. Safe to call any number of times."""
        self._handshake.cancel()


class _ForEachSink:
    __slots__ = ("_operation", "_on_end", "_handshake", "_subscription", "_log")
    
    def __init__(self, operation: Callable[[Any], Any], on_end: Callable[[Termination], Any] | None) -> None:
        self._operation, self._on_end = operation, on_end
        self._handshake = Handshake()
        self._subscription = Subscription(self._handshake)
        self._log = violation_logger("for_each")
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        hs = self._handshake
        if not hs.admits(kind):
            hs.reject(kind, payload)
            if self._log:
                self._log.debug("signal dropped", signal=str(kind), state=hs.state.name)
            return
        if kind == START:
            hs.greet(payload)
        elif kind == DATA:
            self._operation(payload)
        elif kind == END:
            hs.terminate()
            termination = self._subscription.termination = Termination.of(payload)
            if self._on_end is not None:
                self._on_end(termination)
            return
        hs.pull()


def for_each(
    operation: Callable[[Any], Any],
    *,
    on_end: Callable[[Termination], Any] | None = None,
) -> Callable[[Source], Subscription]:
    """Sink factory calling ``operation`` for every value of a source.
    
    Pulls once after the greet and once after every value, which iterates a
    pull source to completion and is ignored by push sources.
    
    Args:
        operation: Called with each DATA payload
        on_end: Called once with Completed() or Failed(reason) when the source ends
    
    Example:
        >>> pipe(range(1, 3), for_each(print))
        1
        2
        3
    """
    def consume(source: Source) -> Subscription:
        sink = _ForEachSink(operation, on_end)
        source(START, sink)
        return sink._subscription
    return consume
