"""Error types for callbag pipelines.

- ErrorCode: Standard error codes
- CallbagError/CallbagException: Structured errors and exceptions
- InvalidArgumentError: Eager construction-time failures
- UpstreamError: Error END payloads surfaced to Python callers
"""

from .errors import (
    CallbagError,
    CallbagException,
    ErrorCode,
    InvalidArgumentError,
    UpstreamError,
    as_exception,
)

__all__ = [
    "ErrorCode", "CallbagError", "CallbagException",
    "InvalidArgumentError", "UpstreamError", "as_exception",
]
