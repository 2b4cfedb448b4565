"""Per-pair protocol state machine.

States: IDLE -> GREETED -> TERMINATED. Every transition is guarded and
returns whether it happened, so signals that arrive in the wrong state can be
dropped instead of raised. Termination can be requested from both sides at
nearly the same time, so a repeated END is a normal event, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .signal import DATA, END, START, Signal, Talkback


class PairState(IntEnum):
    IDLE = 0
    GREETED = 1
    TERMINATED = 2


@dataclass(slots=True)
class Handshake:
    """State of one source/sink pair, seen from the sink side.
    
    Holds the talkback while greeted and drops it on termination so the
    source can be released.
    """
    
    state: PairState = PairState.IDLE
    talkback: Talkback | None = None
    cancelled_early: bool = False
    
    @property
    def greeted(self) -> bool:
        return self.state is PairState.GREETED
    
    @property
    def terminated(self) -> bool:
        return self.state is PairState.TERMINATED
    
    def admits(self, kind: Signal | str) -> bool:
        """Whether a signal of this kind is valid in the current state."""
        if kind == START:
            return self.state is PairState.IDLE
        return self.state is PairState.GREETED
    
    def greet(self, talkback: Talkback) -> bool:
        """IDLE -> GREETED. False if the pair was already greeted or terminated."""
        if self.state is not PairState.IDLE:
            return False
        self.state, self.talkback = PairState.GREETED, talkback
        return True
    
    def terminate(self) -> bool:
        """Any -> TERMINATED. False if it already was."""
        if self.state is PairState.TERMINATED:
            return False
        self.state, self.talkback = PairState.TERMINATED, None
        return True
    
    def pull(self, payload: Any = None) -> None:
        """Send one DATA request upstream if the pair is live."""
        if self.state is PairState.GREETED and self.talkback is not None:
            self.talkback(DATA, payload)
    
    def cancel(self) -> bool:
        """Terminate from the sink side and tell the source. Idempotent.
        
        Cancelling before the greet is remembered: the talkback of a late
        START is ended by ``reject``.
        """
        talkback, early = self.talkback, self.state is PairState.IDLE
        if not self.terminate():
            return False
        self.cancelled_early = early
        if talkback is not None:
            talkback(END)
        return True
    
    def reject(self, kind: Signal | str, payload: Any = None) -> None:
        """Handle a signal that ``admits`` refused.
        
        Only a START arriving after an early ``cancel`` needs an answer: its
        talkback is sent END once so the source does not stay subscribed.
        """
        if kind == START and self.cancelled_early:
            self.cancelled_early = False
            payload(END)
