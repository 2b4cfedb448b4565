"""Pull source factories: sources that only send data when asked.

Every factory validates its arguments eagerly and returns a source that
creates fresh iteration state for each sink that attaches, so one source
value can back any number of independent pipelines.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Sequence
from typing import Any, Callable

from ..core import EXHAUSTED, Source, pull_source
from ..foundation.errors import InvalidArgumentError


def _to_number(value: object) -> int | float | numbers.Real | None:
    """Numbers pass through, numeric strings are parsed, anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        return value
    if isinstance(value, str):
        for parse in (int, float):
            try:
                return parse(value.strip())
            except ValueError:
                continue
    return None


class _Progression:
    __slots__ = ("value", "limit", "step")
    
    def __init__(self, start: Any, limit: Any, step: Any) -> None:
        self.value, self.limit, self.step = start, limit, step
    
    def __call__(self) -> Any:
        # step <= 0 counts down, so step == 0 only terminates when start < limit
        if (self.step > 0 and self.value > self.limit) or (self.step <= 0 and self.value < self.limit):
            return EXHAUSTED
        value = self.value
        self.value = value + self.step
        return value


def range(start: Any, limit: Any, step: Any = 1) -> Source:  # noqa: A001 - mirrors builtin on purpose
    """Arithmetic progression from ``start`` to ``limit``, both inclusive.
    
    Args:
        start: First value
        limit: Last value (inclusive)
        step: Increment; a non-positive step counts down
    
    Raises:
        InvalidArgumentError: If any argument is not convertible to a number
    
    Example:
        >>> list(to_iter(range(1, 5, 2)))
        [1, 3, 5]
    """
    values = tuple(_to_number(v) for v in (start, limit, step))
    if any(v is None for v in values):
        raise InvalidArgumentError.of("range", "arguments not convertible to numbers")
    first, last, increment = values
    return pull_source(lambda: _Progression(first, last, increment))


class _Cursor:
    __slots__ = ("seq", "index")
    
    def __init__(self, seq: Sequence[Any]) -> None:
        self.seq, self.index = seq, 0
    
    def __call__(self) -> Any:
        if self.index >= len(self.seq):
            return EXHAUSTED
        value = self.seq[self.index]
        self.index += 1
        return value


def from_array(seq: Sequence[Any]) -> Source:
    """Pull source over a sequence, in index order.
    
    The sequence is read lazily, one index per pull, and never past its
    last element.
    """
    if not (hasattr(seq, "__len__") and hasattr(seq, "__getitem__")):
        raise InvalidArgumentError.of("from_array", f"expected a sequence, got {type(seq).__name__}")
    return pull_source(lambda: _Cursor(seq))


class _Stepper:
    __slots__ = ("fn", "state", "previous", "finished")
    
    def __init__(self, fn: Callable[[Any, Any], Any], state: Any, initial: Any) -> None:
        self.fn, self.state, self.previous, self.finished = fn, state, initial, False
    
    def __call__(self) -> Any:
        if self.finished:
            return EXHAUSTED
        value = self.fn(self.state, self.previous)
        if value is None:
            self.finished = True
            return EXHAUSTED
        self.previous = value
        return value


def from_iter(step: Callable[[Any, Any], Any], state: Any = None, initial: Any = None) -> Source:
    """Pull source driven by a step function ``step(state, previous) -> next | None``.
    
    ``previous`` is ``initial`` on the first pull and the last produced value
    afterwards. Returning ``None`` ends the stream.
    
    Example:
        >>> def countdown(_, n):
        ...     return n - 1 if n > 1 else None
        >>> list(to_iter(from_iter(countdown, None, 4)))
        [3, 2, 1]
    """
    if not callable(step):
        raise InvalidArgumentError.of("from_iter", "step function must be callable")
    return pull_source(lambda: _Stepper(step, state, initial))


def from_iterable(iterable: Iterable[Any]) -> Source:
    """Pull source over a Python iterable.
    
    ``iter()`` is called once per attached sink, so re-iterable containers
    replay for every pipeline while one-shot iterators are shared and drained.
    """
    if not isinstance(iterable, Iterable):
        raise InvalidArgumentError.of("from_iterable", f"expected an iterable, got {type(iterable).__name__}")
    
    def make_step() -> Callable[[], Any]:
        it = iter(iterable)
        return lambda: next(it, EXHAUSTED)
    
    return pull_source(make_step)
