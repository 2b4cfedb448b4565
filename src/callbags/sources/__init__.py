"""Source factories: pull sources and the push adapter."""

from .observable import (
    CancelFunction,
    Disposable,
    Disposer,
    Observer,
    Subscribable,
    Unsubscribe,
    as_disposer,
    from_obs,
)
from .pull import from_array, from_iter, from_iterable, range  # noqa: A004

__all__ = [
    "range", "from_array", "from_iter", "from_iterable",
    "from_obs", "Subscribable", "Observer", "Disposable",
    "Disposer", "Unsubscribe", "CancelFunction", "as_disposer",
]
