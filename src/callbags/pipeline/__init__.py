"""Pipeline composition helpers."""

from .pipe import pipe, pipe_values

__all__ = ["pipe", "pipe_values"]
