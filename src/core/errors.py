"""Error classification for the gallery data fetch.

Only the initial gallery fetch can fail in a way the user sees. Asset load
failures are delivered as callbacks and handled by the asset resolver, and
invalid navigation is ignored, so neither shows up here.

Example:
    from src.core.errors import GalleryLoadError, classify_error

    try:
        items = await source.fetch_first_page(limit=20)
    except GalleryLoadError as ex:
        state.fail(ex.user_message)
"""

import asyncio
from enum import Enum, auto

DEFAULT_LOAD_ERROR_MESSAGE = "Failed to load gallery images"


class ErrorCategory(Enum):
    """Classification of gallery fetch failures."""

    NETWORK = auto()  # Connection refused, DNS, reset
    TIMEOUT = auto()  # Only when a client timeout was configured
    SERVICE_UNAVAILABLE = auto()  # 5xx
    NOT_FOUND = auto()  # 404
    AUTH_FAILURE = auto()  # 401/403
    INVALID_RESPONSE = auto()  # Body is not the expected envelope
    UNKNOWN = auto()


class GalleryLoadError(Exception):
    """The initial gallery fetch failed.

    Attributes:
        category: The classified failure type.
        status: HTTP status code, when the service answered at all.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        status: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status = status
        self.original_error = original_error

    @property
    def user_message(self) -> str:
        """Message shown in the widget's error view."""
        return str(self) or DEFAULT_LOAD_ERROR_MESSAGE

    @classmethod
    def from_exception(
        cls,
        ex: Exception,
        category: ErrorCategory | None = None,
    ) -> "GalleryLoadError":
        """Create a GalleryLoadError from an existing exception."""
        if category is None:
            category = classify_error(ex)
        return cls(
            message=str(ex),
            category=category,
            original_error=ex,
        )


def classify_error(error: Exception) -> ErrorCategory:
    """Classify an exception into an error category.

    Args:
        error: The exception to classify.

    Returns:
        The ErrorCategory that best matches the error.
    """
    if isinstance(error, GalleryLoadError):
        return error.category

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(error, ValueError):
        return ErrorCategory.INVALID_RESPONSE

    error_str = str(error).lower()

    if "connection" in error_str or "network" in error_str:
        return ErrorCategory.NETWORK

    if "503" in error_str or "service unavailable" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if "502" in error_str or "bad gateway" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if "500" in error_str or "internal server error" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE

    if "401" in error_str or "unauthorized" in error_str:
        return ErrorCategory.AUTH_FAILURE
    if "403" in error_str or "forbidden" in error_str:
        return ErrorCategory.AUTH_FAILURE

    if "404" in error_str or "not found" in error_str:
        return ErrorCategory.NOT_FOUND

    return ErrorCategory.UNKNOWN


def category_for_status(status: int) -> ErrorCategory:
    """Map an HTTP status code onto an error category.

    Args:
        status: The non-2xx status returned by the data service.

    Returns:
        The matching ErrorCategory.
    """
    if status in (401, 403):
        return ErrorCategory.AUTH_FAILURE
    if status == 404:
        return ErrorCategory.NOT_FOUND
    if status >= 500:
        return ErrorCategory.SERVICE_UNAVAILABLE
    return ErrorCategory.UNKNOWN
