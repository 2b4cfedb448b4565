"""Tagged union for the payload of an END signal.

An END payload is either absent (graceful completion) or an error value.
``Termination.of`` classifies a raw payload once so callers can branch
exhaustively with ``match``:

    >>> match Termination.of(payload):
    ...     case Failed(reason):
    ...         handle(reason)
    ...     case Completed():
    ...         done()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar, final

U = TypeVar("U")


class Termination:
    """Base for Completed and Failed. Use ``Termination.of`` to build one from a payload."""
    
    __slots__ = ()
    
    @staticmethod
    def of(payload: Any = None) -> Termination:
        """Classify a raw END payload."""
        return COMPLETED if payload is None else Failed(payload)
    
    def is_completed(self) -> bool:
        return isinstance(self, Completed)
    
    def is_failed(self) -> bool:
        return isinstance(self, Failed)
    
    @property
    def payload(self) -> Any:
        """The raw END payload this termination corresponds to."""
        return self.reason if isinstance(self, Failed) else None
    
    def match(self, on_completed: Callable[[], U], on_failed: Callable[[Any], U]) -> U:
        """Pattern match on the variant."""
        if isinstance(self, Failed):
            return on_failed(self.reason)
        return on_completed()
    
    def __bool__(self) -> bool:
        """Truthy for graceful completion."""
        return not isinstance(self, Failed)


@final
@dataclass(frozen=True, slots=True)
class Completed(Termination):
    """Graceful end of stream."""
    
    def __repr__(self) -> str:
        return "Completed()"


@final
@dataclass(frozen=True, slots=True)
class Failed(Termination):
    """End of stream carrying an error value."""
    
    reason: Any
    
    def __repr__(self) -> str:
        return f"Failed({self.reason!r})"


COMPLETED = Completed()
