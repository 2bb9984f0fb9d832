from .base import BaseService
from .errors import (
    CancellationError,
    FetchError,
    IoFailedError,
    ServiceFailure,
    ValidationFailedError,
)
from .result import (
    ServiceFailureResult,
    ServiceResult,
    ServiceSuccess,
    service_failure,
    service_success,
)

__all__ = [
    "BaseService",
    "CancellationError",
    "FetchError",
    "IoFailedError",
    "ServiceFailure",
    "ServiceFailureResult",
    "ServiceResult",
    "ServiceSuccess",
    "ValidationFailedError",
    "service_failure",
    "service_success",
]
