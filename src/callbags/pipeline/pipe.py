"""Left-to-right function composition for building pipelines.

Nothing here is callbag-specific: ``pipe`` just feeds each result into the
next function. It exists so pipelines read in data-flow order:

    >>> pipe(
    ...     range(1, 10),
    ...     filter(lambda x: x % 2),
    ...     map(lambda x: x * 10),
    ...     for_each(print),
    ... )
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable


def pipe(first: Any, *fns: Callable[[Any], Any]) -> Any:
    """Return ``fns[-1](...fns[1](fns[0](first)))``; ``first`` when no functions are given."""
    result = first
    for fn in fns:
        result = fn(result)
    return result


def pipe_values(values: Sequence[Any], *fns: Callable[..., Any]) -> Any:
    """Like ``pipe`` but the first function is called with ``*values``.
    
    Example:
        >>> pipe_values([range(1, 2), range(5, 6)], concat, for_each(print))
    """
    if not fns:
        return values
    result = fns[0](*values)
    for fn in fns[1:]:
        result = fn(result)
    return result
