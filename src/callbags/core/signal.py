"""Signal kinds and the callbag calling convention.

A callbag is any callable ``(kind, payload=None) -> None``. The same shape is
used for sources (invoked by a sink with START), sinks (invoked by a source)
and talkbacks (invoked by a sink toward its source).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Callable, Protocol, TypeAlias


class Signal(StrEnum):
    """Kind of a signal. Compares equal to the plain strings "start", "data", "end"."""
    START = "start"
    DATA = "data"
    END = "end"


START = Signal.START
DATA = Signal.DATA
END = Signal.END


class Callbag(Protocol):
    """Callable accepting a signal kind and an optional payload."""
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None: ...


# Roles are structurally identical; the aliases document intent at call sites.
Source: TypeAlias = Callbag
Sink: TypeAlias = Callbag
Talkback: TypeAlias = Callbag
Operator: TypeAlias = Callable[[Source], Source]


def noop(kind: Signal | str, payload: Any = None, /) -> None:
    """Talkback that ignores everything."""
