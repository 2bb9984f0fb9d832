"""Service base class.

A service turns one request into one outcome. ``_run`` raises
``ServiceFailure`` for expected errors; ``__call__`` traces the call, logs
the failure code and hands the error to ``_handle_failure``, which re-raises
unless a subclass overrides it. The CLI catches whatever escapes, prints it
and exits 1.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .. import log
from .errors import ServiceFailure

R = TypeVar("R")
T = TypeVar("T")


class BaseService(ABC, Generic[R, T]):
    """Callable wrapper around ``_run``.

    Example:
        >>> class Shout(BaseService[str, str]):
        ...     def _run(self, request: str) -> str:
        ...         return request.upper()
        >>> Shout()("vue")
        'VUE'
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    def __call__(self, request: R) -> T:
        log.trace(f"{self.name}: start")
        try:
            outcome = self._run(request)
        except ServiceFailure as error:
            log.debug(f"{self.name}: {error.code}: {error.message}")
            return self._handle_failure(error)
        log.trace(f"{self.name}: done")
        return outcome

    @abstractmethod
    def _run(self, request: R) -> T:
        """Execute the service. Raise ``ServiceFailure`` on expected errors."""

    def _handle_failure(self, error: ServiceFailure) -> T:
        raise error
