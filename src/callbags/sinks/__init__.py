"""Sink consumers that drive a source to completion."""

from .for_each import Subscription, for_each
from .iteration import to_async_iter, to_iter

__all__ = ["for_each", "Subscription", "to_iter", "to_async_iter"]
