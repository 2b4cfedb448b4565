"""Core protocol: signals, END classification, pair state and the pull loop."""

from .handshake import Handshake, PairState
from .pull import EXHAUSTED, PullLoop, pull_source
from .signal import DATA, END, START, Callbag, Operator, Signal, Sink, Source, Talkback, noop
from .termination import COMPLETED, Completed, Failed, Termination

__all__ = [
    # Signals
    "Signal", "START", "DATA", "END",
    "Callbag", "Source", "Sink", "Talkback", "Operator", "noop",
    # END payloads
    "Termination", "Completed", "Failed", "COMPLETED",
    # State machines
    "Handshake", "PairState", "PullLoop", "pull_source", "EXHAUSTED",
]
