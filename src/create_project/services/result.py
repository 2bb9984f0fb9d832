"""Result values for services that report failures instead of raising.

The configuration resolver returns one of these so a declined overwrite is
an ordinary branch for the caller. ``ServiceFailureResult.to_error`` turns a
failure back into the matching ``ServiceFailure`` once the caller decides it
is fatal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from .errors import (
    CancellationError,
    FetchError,
    IoFailedError,
    ServiceFailure,
    ServiceFailureCode,
    ValidationFailedError,
)

T = TypeVar("T")

_ERROR_TYPES: dict[str, type[ServiceFailure]] = {
    "cancelled": CancellationError,
    "validation_failed": ValidationFailedError,
    "io_failed": IoFailedError,
    "fetch_failed": FetchError,
}


@dataclass(frozen=True)
class ServiceSuccess(Generic[T]):
    """A completed run carrying its outcome."""

    outcome: T
    success: Literal[True] = True


@dataclass(frozen=True)
class ServiceFailureResult:
    """An expected failure, reported as a value.

    Example:
        >>> failure = service_failure(code="validation_failed", message="invalid package_name")
        >>> error = failure.to_error()
        >>> type(error).__name__, error.code, error.message
        ('ValidationFailedError', 'validation_failed', 'invalid package_name')
    """

    code: ServiceFailureCode
    message: str
    recovery_hint: str | None = None
    success: Literal[False] = False

    def to_error(self) -> ServiceFailure:
        """Return the ``ServiceFailure`` subclass matching ``code``."""
        return _ERROR_TYPES[self.code](self.message, recovery_hint=self.recovery_hint)


ServiceResult = ServiceSuccess[T] | ServiceFailureResult


def service_success(outcome: T) -> ServiceSuccess[T]:
    return ServiceSuccess(outcome=outcome)


def service_failure(
    *,
    code: ServiceFailureCode,
    message: str,
    recovery_hint: str | None = None,
) -> ServiceFailureResult:
    """Build a failure result.

    Args:
        code: Failure code shared with the exception taxonomy.
        message: One-line summary shown to the user.
        recovery_hint: Optional next step for the user.
    """
    return ServiceFailureResult(code=code, message=message, recovery_hint=recovery_hint)
