"""Diagnostic operators: signal logging and protocol enforcement."""

from __future__ import annotations

from typing import Any

from ..core import DATA, END, START, Handshake, Operator, Signal, Sink, Source, Talkback, noop
from ..foundation.errors import ErrorCode
from ..foundation.logging import StructuredLogger, get_logger, violation_logger


def log_signals(label: str, logger: StructuredLogger | None = None) -> Operator:
    """Log every signal crossing this point, in both directions, at debug level.
    
    Any ``StructuredLogger`` can be passed in place of the package logger.
    Values pass through unchanged. Talkback payloads are not logged for
    START since they are callables.
    
    Example:
        >>> configure_logging(level="DEBUG")
        >>> pipe(range(1, 2), log_signals("numbers"), for_each(print))
    """
    def operator(source: Source) -> Source:
        def logged(kind: Signal | str, sink: Any = None, /) -> None:
            if kind != START:
                return
            log = (logger if logger is not None else get_logger("callbags")).bind(label=label)
            upstream: Talkback = noop
            
            def talkback(t: Signal | str, d: Any = None, /) -> None:
                log.debug("talkback", signal=str(t), payload=d)
                upstream(t, d)
            
            def receive(t: Signal | str, d: Any = None, /) -> None:
                nonlocal upstream
                if t == START:
                    log.debug("start")
                    upstream = d
                    sink(START, talkback)
                    return
                if t == DATA:
                    log.debug("data", payload=d)
                else:
                    log.debug("end", payload=d)
                sink(t, d)
            
            source(START, receive)
        return logged
    return operator


class _Guard:
    """Handshake on both sides of one attachment."""
    
    __slots__ = ("_sink", "_handshake", "_log")
    
    def __init__(self, sink: Sink) -> None:
        self._sink = sink
        self._handshake = Handshake()
        self._log = violation_logger("guard")
    
    def _dropped(self, direction: str, kind: Signal | str) -> None:
        if self._log:
            self._log.debug("signal dropped", direction=direction, signal=str(kind),
                            state=self._handshake.state.name, code=str(ErrorCode.PROTOCOL_VIOLATION))
    
    def talkback(self, kind: Signal | str, payload: Any = None, /) -> None:
        hs = self._handshake
        if not hs.greeted or kind == START:
            self._dropped("upstream", kind)
        elif kind == END:
            hs.cancel()
        else:
            hs.pull(payload)
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        hs = self._handshake
        if not hs.admits(kind):
            hs.reject(kind, payload)
            self._dropped("downstream", kind)
            return
        if kind == START:
            hs.greet(payload)
            self._sink(START, self.talkback)
            return
        if kind == END:
            hs.terminate()
        self._sink(kind, payload)


def guard(source: Source) -> Source:
    """Enforce the handshake around ``source``.
    
    Drops DATA/END sent before the greet, a second greet, and anything sent
    in either direction after END. Dropped signals are logged when
    ``CALLBAGS_PROTOCOL_LOG_VIOLATIONS`` is enabled.
    """
    def guarded(kind: Signal | str, sink: Any = None, /) -> None:
        if kind != START:
            return
        source(START, _Guard(sink))
    return guarded


__all__ = ["log_signals", "guard"]
