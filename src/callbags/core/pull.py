"""Reentrant pull loop shared by every pull source.

A sink that pulls again from inside its DATA handler would make a naive
source recurse once per value. ``PullLoop`` instead records the request in a
``pending`` flag and, when a loop is already running further up the stack,
returns at once; the running loop picks the request up on its next
iteration. Stack depth is therefore constant no matter how eagerly the
consumer drains.
"""

from __future__ import annotations

from typing import Any, Callable

from .signal import DATA, END, START, Sink, Signal


class _Exhausted:
    """Sentinel returned by a step function at end of sequence."""
    
    __slots__ = ()
    
    def __repr__(self) -> str:
        return "EXHAUSTED"


EXHAUSTED: Any = _Exhausted()

Step = Callable[[], Any]


class PullLoop:
    """Talkback of a pull source, one instance per attached sink.
    
    ``step`` produces the next value or ``EXHAUSTED``. An exception raised by
    ``step`` ends the stream with that exception as the error payload;
    exceptions raised by the sink propagate to the caller untouched.
    """
    
    __slots__ = ("_sink", "_step", "_looping", "_pending", "done")
    
    def __init__(self, sink: Sink, step: Step) -> None:
        self._sink = sink
        self._step = step
        self._looping = False
        self._pending = False
        self.done = False
    
    def start(self) -> None:
        """Greet the sink with this loop as its talkback."""
        self._sink(START, self)
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        if self.done:
            return
        if kind == DATA:
            self._pending = True
            if not self._looping:
                self._loop()
        elif kind == END:
            self.done = True
    
    def _loop(self) -> None:
        self._looping = True
        try:
            while self._pending and not self.done:
                self._pending = False
                try:
                    value = self._step()
                except Exception as exc:
                    self.done = True
                    self._sink(END, exc)
                    break
                if value is EXHAUSTED:
                    self.done = True
                    self._sink(END)
                else:
                    self._sink(DATA, value)
        finally:
            self._looping = False


def pull_source(make_step: Callable[[], Step]) -> Callable[..., None]:
    """Build a pull source; ``make_step`` is called once per attached sink."""
    def source(kind: Signal | str, sink: Any = None, /) -> None:
        if kind != START:
            return
        PullLoop(sink, make_step()).start()
    return source
