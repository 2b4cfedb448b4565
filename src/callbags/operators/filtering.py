"""Filtering operators: decide which values pass and when a stream ends.

``filter`` and ``skip`` pull on behalf of every value they drop so a pull
source upstream is never starved. ``take`` ends both directions exactly once
when its limit is reached, even when the downstream END re-enters it.
"""

from __future__ import annotations

from typing import Any, Callable

from ..core import DATA, END, START, Operator, Signal, Sink, Source, Talkback, noop
from ..foundation.errors import InvalidArgumentError
from ..foundation.logging import lifecycle_logger


def _check_count(operator: str, n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidArgumentError.of(operator, f"expected a non-negative int, got {n!r}")
    return n


class _FilterSink:
    __slots__ = ("_predicate", "_sink", "_talkback")
    
    def __init__(self, predicate: Callable[[Any], Any], sink: Sink) -> None:
        self._predicate, self._sink = predicate, sink
        self._talkback: Talkback = noop
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        if kind == START:
            self._talkback = payload
        elif kind == DATA and not self._predicate(payload):
            self._talkback(DATA)
            return
        self._sink(kind, payload)


def filter(predicate: Callable[[Any], Any]) -> Operator:  # noqa: A001 - mirrors builtin on purpose
    """Let through only values for which ``predicate`` is truthy."""
    def operator(source: Source) -> Source:
        def filtered(kind: Signal | str, sink: Any = None, /) -> None:
            if kind != START:
                return
            source(START, _FilterSink(predicate, sink))
        return filtered
    return operator


class _SkipSink:
    __slots__ = ("_max", "_sink", "_skipped", "_talkback")
    
    def __init__(self, max_: int, sink: Sink) -> None:
        self._max, self._sink = max_, sink
        self._skipped = 0
        self._talkback: Talkback = noop
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        if kind == START:
            self._talkback = payload
        elif kind == DATA and self._skipped < self._max:
            self._skipped += 1
            self._talkback(DATA)
            return
        self._sink(kind, payload)


def skip(n: int) -> Operator:
    """Drop the first ``n`` values.
    
    Raises:
        InvalidArgumentError: If ``n`` is not a non-negative int
    """
    n = _check_count("skip", n)
    
    def operator(source: Source) -> Source:
        def skipped(kind: Signal | str, sink: Any = None, /) -> None:
            if kind != START:
                return
            source(START, _SkipSink(n, sink))
        return skipped
    return operator


class _TakeSink:
    """State of one ``take`` attachment.
    
    Each direction has its own done flag, set before the END call goes out,
    so an END that re-enters this object finds the flag already set.
    """
    
    __slots__ = ("_max", "_sink", "_taken", "_upstream", "_upstream_done", "_downstream_done", "_log")
    
    def __init__(self, max_: int, sink: Sink) -> None:
        self._max, self._sink = max_, sink
        self._taken = 0
        self._upstream: Talkback = noop
        self._upstream_done = False
        self._downstream_done = False
        self._log = lifecycle_logger("take")
    
    def talkback(self, kind: Signal | str, payload: Any = None, /) -> None:
        if kind == END:
            self._downstream_done = True
            self._end_upstream()
        elif self._taken < self._max and not self._upstream_done:
            self._upstream(kind, payload)
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        if kind == START:
            self._upstream = payload
            self._sink(START, self.talkback)
            if self._max == 0:
                self._finish()
        elif kind == DATA:
            if self._taken >= self._max or self._downstream_done:
                return
            self._taken += 1
            self._sink(DATA, payload)
            if self._taken == self._max:
                self._finish()
        elif kind == END:
            self._upstream_done = True
            self._end_downstream(payload)
    
    def _finish(self) -> None:
        if self._log:
            self._log.debug("limit reached", taken=self._taken)
        self._end_downstream(None)
        self._end_upstream()
    
    def _end_downstream(self, payload: Any) -> None:
        if not self._downstream_done:
            self._downstream_done = True
            self._sink(END, payload)
    
    def _end_upstream(self) -> None:
        if not self._upstream_done:
            self._upstream_done = True
            self._upstream(END)


def take(n: int) -> Operator:
    """Pass at most ``n`` values, then end both upstream and downstream.
    
    Requests are forwarded upstream only while fewer than ``n`` values have
    been taken, so an unbounded pull source is asked for exactly ``n``.
    
    Raises:
        InvalidArgumentError: If ``n`` is not a non-negative int
    """
    n = _check_count("take", n)
    
    def operator(source: Source) -> Source:
        def taken(kind: Signal | str, sink: Any = None, /) -> None:
            if kind != START:
                return
            source(START, _TakeSink(n, sink))
        return taken
    return operator
