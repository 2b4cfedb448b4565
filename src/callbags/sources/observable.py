"""Push source adapter for subscribable (observable-like) objects.

Anything with ``subscribe(observer)`` qualifies. The observer passed in has
``next``, ``error`` and ``complete`` methods. ``subscribe`` must return either
a ``Disposable`` (an object with ``unsubscribe()``) or a plain cancel
function; the two variants are resolved once, when the subscription is made.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeAlias, runtime_checkable

from ..core import DATA, END, START, Signal, Sink, Source
from ..foundation.logging import lifecycle_logger


@runtime_checkable
class Disposable(Protocol):
    """Subscription handle with an explicit unsubscribe operation."""
    
    def unsubscribe(self) -> None: ...


class Observer(Protocol):
    def next(self, value: Any) -> None: ...
    def error(self, reason: Any) -> None: ...
    def complete(self) -> None: ...


@runtime_checkable
class Subscribable(Protocol):
    """Push producer capability required by ``from_obs``."""
    
    def subscribe(self, observer: Observer) -> Disposable | Callable[[], Any]: ...


# ─────────────────────────────────────────────────────────────────────────────
# Disposers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Unsubscribe:
    """Disposer for a ``Disposable`` handle."""
    handle: Disposable
    
    def __call__(self) -> None:
        self.handle.unsubscribe()


@dataclass(frozen=True, slots=True)
class CancelFunction:
    """Disposer for a bare cancel callable."""
    fn: Callable[[], Any]
    
    def __call__(self) -> None:
        self.fn()


Disposer: TypeAlias = Unsubscribe | CancelFunction


def as_disposer(handle: object) -> Disposer | None:
    """Resolve the value returned by ``subscribe`` into a disposer.
    
    Raises:
        TypeError: If the value is neither a Disposable, a callable, nor None
    """
    if handle is None:
        return None
    if isinstance(handle, Disposable):
        return Unsubscribe(handle)
    if callable(handle):
        return CancelFunction(handle)
    raise TypeError(f"subscribe() returned {type(handle).__name__}; expected a Disposable or a callable")


# ─────────────────────────────────────────────────────────────────────────────
# Bridge
# ─────────────────────────────────────────────────────────────────────────────


class _ObservableBridge:
    """One subscription: observer toward the producer, talkback toward the sink."""
    
    __slots__ = ("_sink", "_disposer", "_ended", "_log")
    
    def __init__(self, sink: Sink) -> None:
        self._sink = sink
        self._disposer: Disposer | None = None
        self._ended = False
        self._log = lifecycle_logger("from_obs")
    
    def attach(self, observable: Subscribable) -> None:
        self._sink(START, self.talkback)
        if self._ended:
            return
        disposer = as_disposer(observable.subscribe(self))
        if self._ended:
            # Sink cancelled from inside subscribe(), before the handle existed
            disposer and disposer()
        else:
            self._disposer = disposer
    
    def talkback(self, kind: Signal | str, payload: Any = None, /) -> None:
        if kind != END or self._ended:
            return
        self._ended = True
        if self._log:
            self._log.debug("unsubscribing")
        disposer, self._disposer = self._disposer, None
        if disposer is not None:
            disposer()
    
    # Observer side
    
    def next(self, value: Any) -> None:
        if not self._ended:
            self._sink(DATA, value)
    
    def error(self, reason: Any) -> None:
        self._finish(reason)
    
    def complete(self) -> None:
        self._finish(None)
    
    def _finish(self, payload: Any) -> None:
        if self._ended:
            return
        self._ended, self._disposer = True, None
        self._sink(END, payload)


def from_obs(observable: Subscribable) -> Source:
    """Convert a subscribable into a push (listenable) source.
    
    ``next(x)`` becomes DATA, ``complete()`` a graceful END and ``error(e)``
    an END carrying ``e``. Ending the talkback disposes the subscription.
    Pull requests from the sink are ignored.
    """
    def source(kind: Signal | str, sink: Any = None, /) -> None:
        if kind != START:
            return
        _ObservableBridge(sink).attach(observable)
    return source
