"""Service failure contracts.

Services return typed outcomes on success and raise ServiceFailure on expected
domain/runtime failures. Programmer bugs raise normal exceptions and keep
their tracebacks.
"""

from __future__ import annotations

from typing import Literal

ServiceFailureCode = Literal[
    "cancelled",
    "validation_failed",
    "io_failed",
    "fetch_failed",
]


class ServiceFailure(Exception):
    """Expected failure: cancellation, invalid input, filesystem or fetch error.

    Use ``raise ServiceFailure(...) from exc`` to chain a causing exception;
    it is available as ``__cause__``. The CLI catches ServiceFailure, prints
    the message and exits with status 1.
    """

    def __init__(
        self,
        code: ServiceFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recovery_hint = recovery_hint


class CancellationError(ServiceFailure):
    """The user declined to proceed or aborted a prompt."""

    def __init__(
        self, message: str = "Operation cancelled", *, recovery_hint: str | None = None
    ) -> None:
        super().__init__("cancelled", message, recovery_hint=recovery_hint)


class ValidationFailedError(ServiceFailure):
    """Validation failed (invalid name, malformed template identifier)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class IoFailedError(ServiceFailure):
    """Filesystem operation failed (remove, create, read)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)


class FetchError(ServiceFailure):
    """Template acquisition failed (network, missing remote, bad archive)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("fetch_failed", message, recovery_hint=recovery_hint)
