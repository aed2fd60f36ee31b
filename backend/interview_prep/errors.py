"""
Error taxonomy shared by services and route handlers.

Every error carries the HTTP status it maps to; the handlers registered in
``main.py`` render them as ``{"error": ..., "details": ...}``.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import status

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class NotConfigured(AppError):
    """Missing credentials or API key. Routes pick 500 or 503."""


class UpstreamError(AppError):
    """A generation, storage or fetch call failed."""


class GenerationError(UpstreamError):
    pass


class StoreError(UpstreamError):
    pass


class ListError(StoreError):
    pass


@contextmanager
def error_boundary(message: str) -> Iterator[None]:
    """
    Funnel anything that is not already an ``AppError`` into ``UpstreamError``
    so no exception escapes a handler untyped.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        logger.exception("%s: %s", message, exc)
        raise UpstreamError(message, details=str(exc)) from exc
