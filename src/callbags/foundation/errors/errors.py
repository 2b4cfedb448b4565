"""Standardized error handling for callbag pipelines.

Provides error codes and structured error records for the three failure
classes a pipeline can meet: invalid construction arguments, errors carried
by an END signal, and out-of-protocol signals.
Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


class ErrorCode(StrEnum):
    """Standard error codes for pipeline failures."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    PROTOCOL_VIOLATION = "PROTOCOL_VIOLATION"
    UNKNOWN = "UNKNOWN"


class CallbagError(BaseModel):
    """Structured error record for a failed source or operator.
    
    Attributes:
        operator: Name of the factory/operator that reported the error
        message: Human-readable error message
        code: Machine-readable error code
        details: Optional extra information (e.g. repr of an END payload)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Callbag Error",
            "description": "Structured error from a callbag pipeline",
            "examples": [{
                "operator": "range",
                "message": "arguments not convertible to numbers",
                "code": "INVALID_ARGUMENT",
            }],
        },
    )

    operator: Annotated[str, Field(
        min_length=1,
        description="Name of the source or operator that produced the error",
    )]
    message: Annotated[str, Field(
        min_length=1,
        description="Human-readable error message",
    )]
    code: ErrorCode = Field(
        default=ErrorCode.UNKNOWN,
        description="Machine-readable error classification",
    )
    details: str | None = Field(
        default=None,
        description="Optional detailed error info",
    )

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_construction_error(self) -> bool:
        """Whether the error was raised before any signal was sent."""
        return self.code is ErrorCode.INVALID_ARGUMENT

    def render(self) -> str:
        parts = [f"{self.operator}: {self.message} [{self.code}]"]
        if self.details:
            parts.append(f" ({self.details})")
        return "".join(parts)

    __str__ = render


class CallbagException(Exception):
    """Exception wrapping a CallbagError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: CallbagError) -> None:
        self.error = error
        super().__init__(error.render())

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @classmethod
    def create(cls, operator: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN, *, details: str | None = None) -> Self:
        """Create a pipeline exception."""
        return cls(CallbagError(operator=operator, message=message, code=code, details=details))


class InvalidArgumentError(CallbagException, ValueError):
    """A factory or operator was built with arguments it cannot use.
    
    Raised eagerly at construction time, never from inside a signal.
    """

    __slots__ = ()

    @classmethod
    def of(cls, operator: str, message: str) -> Self:
        return cls.create(operator, message, ErrorCode.INVALID_ARGUMENT)


class UpstreamError(CallbagException):
    """A source terminated with an error END whose payload is not an exception.
    
    The original payload is kept unchanged on ``reason``.
    """

    __slots__ = ("reason",)

    def __init__(self, error: CallbagError, reason: object = None) -> None:
        super().__init__(error)
        self.reason = reason

    @classmethod
    def from_reason(cls, operator: str, reason: object) -> Self:
        return cls(
            CallbagError(
                operator=operator,
                message="source terminated with an error",
                code=ErrorCode.UPSTREAM_ERROR,
                details=repr(reason),
            ),
            reason,
        )


def as_exception(operator: str, reason: object) -> BaseException:
    """Turn an END payload into something raisable, keeping exceptions as-is."""
    if isinstance(reason, BaseException):
        return reason
    return UpstreamError.from_reason(operator, reason)
