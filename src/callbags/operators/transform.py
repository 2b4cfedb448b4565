"""Transformation operators: rewrite values in flight, leave flow control alone."""

from __future__ import annotations

from typing import Any, Callable

from ..core import DATA, START, Operator, Signal, Sink, Source

_NO_SEED: Any = object()


def map(f: Callable[[Any], Any]) -> Operator:  # noqa: A001 - mirrors builtin on purpose
    """Apply ``f`` to every value. Works on pull and push sources.
    
    START and END pass through untouched, including the upstream talkback.
    """
    def operator(source: Source) -> Source:
        def mapped(kind: Signal | str, sink: Any = None, /) -> None:
            if kind != START:
                return
            
            def receive(t: Signal | str, d: Any = None, /) -> None:
                sink(t, f(d) if t == DATA else d)
            
            source(START, receive)
        return mapped
    return operator


class _ScanSink:
    __slots__ = ("_reducer", "_sink", "_acc", "_has_acc")
    
    def __init__(self, reducer: Callable[[Any, Any], Any], seed: Any, sink: Sink) -> None:
        self._reducer, self._sink = reducer, sink
        self._has_acc = seed is not _NO_SEED
        self._acc = None if seed is _NO_SEED else seed
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        if kind != DATA:
            self._sink(kind, payload)
            return
        if self._has_acc:
            self._acc = self._reducer(self._acc, payload)
        else:
            self._acc, self._has_acc = payload, True
        self._sink(DATA, self._acc)


def scan(reducer: Callable[[Any, Any], Any], seed: Any = _NO_SEED) -> Operator:
    """Running reduction; emits the accumulator after every value.
    
    Without ``seed`` the first value becomes the accumulator as-is. A seed of
    ``None`` is a real seed. The accumulator is kept per attached sink.
    
    Example:
        >>> list(to_iter(scan(operator.add, 0)(range(1, 4))))
        [1, 3, 6]
    """
    def operator(source: Source) -> Source:
        def scanned(kind: Signal | str, sink: Any = None, /) -> None:
            if kind != START:
                return
            source(START, _ScanSink(reducer, seed, sink))
        return scanned
    return operator
