"""Recording sink for pipeline tests.

Provides SignalRecorder for:
- Capturing every signal a source sends, in order
- Driving a source by hand (pull / cancel) or automatically
- Reacting to values from inside the DATA call, to exercise reentrancy
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from callbags.core import DATA, END, START, Signal, Talkback, Termination


@dataclass(slots=True)
class Received:
    """Record of a single signal delivered to a sink."""
    kind: Signal
    payload: Any = None


@dataclass(eq=False)
class SignalRecorder:
    """Sink recording everything it receives.
    
    Attributes:
        pull_on_start: Pull once right after being greeted
        pull_on_data: Pull again after every value (drains pull sources)
        on_data: Hook called with (recorder, value) before the automatic pull
    """
    pull_on_start: bool = False
    pull_on_data: bool = False
    on_data: Callable[[SignalRecorder, Any], Any] | None = None
    signals: list[Received] = field(default_factory=list)
    talkback: Talkback | None = None
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        kind = Signal(kind)
        self.signals.append(Received(kind, payload))
        if kind is START:
            self.talkback = payload
            if self.pull_on_start:
                self.pull()
        elif kind is DATA:
            if self.on_data is not None:
                self.on_data(self, payload)
            if self.pull_on_data and not self.ended:
                self.pull()
    
    # ─────────────────────────────────────────────────────────────────
    # Driving
    # ─────────────────────────────────────────────────────────────────
    
    def pull(self, payload: Any = None) -> None:
        if self.talkback is None:
            raise AssertionError("Sink was never greeted")
        self.talkback(DATA, payload)
    
    def cancel(self) -> None:
        if self.talkback is None:
            raise AssertionError("Sink was never greeted")
        self.talkback(END)
    
    # ─────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────
    
    @property
    def kinds(self) -> list[str]:
        return [str(s.kind) for s in self.signals]
    
    @property
    def data(self) -> list[Any]:
        return [s.payload for s in self.signals if s.kind is DATA]
    
    @property
    def starts(self) -> int:
        return sum(1 for s in self.signals if s.kind is START)
    
    @property
    def ends(self) -> int:
        return sum(1 for s in self.signals if s.kind is END)
    
    @property
    def ended(self) -> bool:
        return self.ends > 0
    
    @property
    def termination(self) -> Termination | None:
        last = next((s for s in reversed(self.signals) if s.kind is END), None)
        return None if last is None else Termination.of(last.payload)
    
    def assert_greeted_once(self) -> None:
        if self.starts != 1:
            raise AssertionError(f"Expected exactly one greet, got {self.starts}")
        if self.signals[0].kind is not START:
            raise AssertionError(f"First signal was {self.signals[0].kind}, not start")
    
    def assert_completed(self) -> None:
        if self.ends != 1:
            raise AssertionError(f"Expected exactly one END, got {self.ends}")
        if not self.termination:
            raise AssertionError(f"Expected graceful completion, got {self.termination!r}")
    
    def assert_failed(self, reason: Any) -> None:
        if self.ends != 1:
            raise AssertionError(f"Expected exactly one END, got {self.ends}")
        if self.termination != Termination.of(reason):
            raise AssertionError(f"Expected Failed({reason!r}), got {self.termination!r}")
