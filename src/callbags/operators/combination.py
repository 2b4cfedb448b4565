"""Combination operators: build one source out of several.

``concat`` plays sources back to back behind a single talkback.
``flatten`` follows a source of sources, always switching to the newest
inner source and cancelling the previous one.
"""

from __future__ import annotations

from typing import Any, Callable

from ..core import DATA, END, START, Failed, Signal, Sink, Source, Talkback, Termination, noop
from ..foundation.logging import lifecycle_logger

_UNSET: Any = object()


# ═════════════════════════════════════════════════════════════════════════════
# concat
# ═════════════════════════════════════════════════════════════════════════════


class _Concat:
    """One concat attachment.
    
    Starting the next source happens in ``_run``'s loop rather than inside the
    previous source's END handler, so a long list of synchronous sources
    does not deepen the stack.
    """
    
    __slots__ = ("_sources", "_sink", "_index", "_active", "_last_pull",
                 "_greeted", "_ended", "_advance", "_running", "_log")
    
    def __init__(self, sources: tuple[Source, ...], sink: Sink) -> None:
        self._sources, self._sink = sources, sink
        self._index = 0
        self._active: Talkback | None = None
        self._last_pull = _UNSET
        self._greeted = False
        self._ended = False
        self._advance = True
        self._running = False
        self._log = lifecycle_logger("concat")
    
    def talkback(self, kind: Signal | str, payload: Any = None, /) -> None:
        if self._ended:
            return
        if kind == DATA:
            self._last_pull = payload
        elif kind == END:
            self._ended = True
        if self._active is not None:
            self._active(kind, payload)
    
    def _run(self) -> None:
        self._running = True
        try:
            while self._advance and not self._ended:
                self._advance = False
                if self._index >= len(self._sources):
                    self._ended = True
                    self._sink(END)
                    break
                if self._log:
                    self._log.debug("starting source", index=self._index)
                self._sources[self._index](START, self._receiver(self._index))
        finally:
            self._running = False
    
    def _receiver(self, position: int) -> Callable[..., None]:
        def receive(kind: Signal | str, payload: Any = None, /) -> None:
            if self._ended or position != self._index:
                if kind == START and self._ended:
                    payload(END)
                return
            if kind == START:
                self._active = payload
                if not self._greeted:
                    self._greeted = True
                    self._sink(START, self.talkback)
                elif self._last_pull is not _UNSET:
                    payload(DATA, self._last_pull)
            elif kind == DATA:
                self._sink(DATA, payload)
            elif kind == END:
                self._active = None
                if isinstance(Termination.of(payload), Failed):
                    self._ended = True
                    self._sink(END, payload)
                    return
                self._index += 1
                self._advance = True
                if not self._running:
                    self._run()
        return receive


def concat(*sources: Source) -> Source:
    """Play ``sources`` one after another.
    
    Each source starts when the previous one ends gracefully; an error END
    stops the sequence and is forwarded. The last pull the sink sent is
    replayed to every newly started source so a pull pipeline keeps flowing.
    With no sources the result greets and completes at once.
    
    Example:
        >>> list(to_iter(concat(range(1, 2), range(3, 4))))
        [1, 2, 3, 4]
    """
    def concatenated(kind: Signal | str, sink: Any = None, /) -> None:
        if kind != START:
            return
        if not sources:
            sink(START, noop)
            sink(END)
            return
        _Concat(sources, sink)._run()
    return concatenated


# ═════════════════════════════════════════════════════════════════════════════
# flatten
# ═════════════════════════════════════════════════════════════════════════════


class _Flatten:
    """One flatten attachment holding the outer and the current inner talkback.
    
    ``_generation`` identifies the current inner source; signals from an
    inner that has been switched away from are ignored.
    """
    
    __slots__ = ("_sink", "_outer", "_inner", "_inner_live", "_outer_ended",
                 "_ended", "_generation", "_log")
    
    def __init__(self, sink: Sink) -> None:
        self._sink = sink
        self._outer: Talkback = noop
        self._inner: Talkback | None = None
        self._inner_live = False
        self._outer_ended = False
        self._ended = False
        self._generation = 0
        self._log = lifecycle_logger("flatten")
    
    def talkback(self, kind: Signal | str, payload: Any = None, /) -> None:
        if self._ended:
            return
        if kind == DATA:
            (self._inner if self._inner is not None else self._outer)(DATA, payload)
        elif kind == END:
            self._ended = True
            self._cancel_inner()
            if not self._outer_ended:
                self._outer_ended = True
                self._outer(END)
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        """Sink for the outer source."""
        if self._ended:
            return
        if kind == START:
            self._outer = payload
            self._sink(START, self.talkback)
        elif kind == DATA:
            self._switch(payload)
        elif kind == END:
            self._outer_ended = True
            match Termination.of(payload):
                case Failed():
                    self._ended = True
                    self._cancel_inner()
                    self._sink(END, payload)
                case _ if not self._inner_live:
                    self._ended = True
                    self._sink(END)
                case _:
                    if self._log:
                        self._log.debug("outer completed, waiting for inner")
    
    def _cancel_inner(self) -> None:
        inner, self._inner, self._inner_live = self._inner, None, False
        self._generation += 1
        if inner is not None:
            inner(END)
    
    def _switch(self, inner_source: Source) -> None:
        if self._inner_live:
            if self._log:
                self._log.debug("switching inner", generation=self._generation + 1)
            self._cancel_inner()
            if self._ended:
                return
        else:
            self._generation += 1
        self._inner_live = True
        inner_source(START, self._inner_receiver(self._generation))
    
    def _inner_receiver(self, generation: int) -> Callable[..., None]:
        def receive(kind: Signal | str, payload: Any = None, /) -> None:
            if self._ended or generation != self._generation:
                if kind == START:
                    # Switched away from (or cancelled) before it greeted
                    payload(END)
                return
            if kind == START:
                self._inner = payload
                payload(DATA)
            elif kind == DATA:
                self._sink(DATA, payload)
            elif kind == END:
                self._inner, self._inner_live = None, False
                if isinstance(Termination.of(payload), Failed):
                    self._ended = True
                    if not self._outer_ended:
                        self._outer_ended = True
                        self._outer(END)
                    self._sink(END, payload)
                elif self._outer_ended:
                    self._ended = True
                    self._sink(END)
                else:
                    self._outer(DATA)
        return receive


def flatten(source: Source) -> Source:
    """Flatten a source of sources, switching to the latest inner source.
    
    Like RxJS ``switch``: a new inner source cancels the previous one before
    it is started, so at most one inner is ever active. Combine with ``map``
    for ``switchMap``. Works on pull and push sources.
    """
    def flattened(kind: Signal | str, sink: Any = None, /) -> None:
        if kind != START:
            return
        source(START, _Flatten(sink))
    return flattened
