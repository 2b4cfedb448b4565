"""Operators: source-to-source transforms."""

from .combination import concat, flatten
from .debug import guard, log_signals
from .filtering import filter, skip, take  # noqa: A004
from .share import share
from .transform import map, scan  # noqa: A004

__all__ = [
    "map", "scan",
    "filter", "skip", "take",
    "concat", "flatten",
    "share",
    "log_signals", "guard",
]
