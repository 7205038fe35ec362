"""
Error types and standard error logging for the content metadata client.

Every failure a retrieval operation can report is a ContentMetadataError
carrying the HTTP-style status the operation returns alongside it.
"""
from typing import Any

from pydantic import ValidationError

from content_metadata.util.log import logger

INTERNAL_ERROR_STATUS = 500


class ContentMetadataError(Exception):
    """Base exception for content metadata failures."""

    status: int = INTERNAL_ERROR_STATUS


class InvalidServiceURLError(ContentMetadataError, ValueError):
    """Raised when the metadata service base URL cannot be used."""

    pass


class ContentTransportError(ContentMetadataError):
    """Raised when the request could not be built, sent or read."""

    pass


class ContentDecodeError(ContentMetadataError):
    """Raised when a 200 response body is not a valid metadata record."""

    pass


class RemoteStatusError(ContentMetadataError):
    """The metadata service answered with a non-200 status.

    The message is the response body, verbatim.
    """

    body: str

    def __init__(self, status: int, body: str):
        super().__init__(body)
        self.status = status
        self.body = body


def transport_error(
    error: Exception, operation: str, **context: Any
) -> ContentTransportError:
    """Log a failed request and wrap it for the caller.

    Usage: ``raise transport_error(e, "fetch content config", url=...) from e``
    """
    logger.error(
        f"Content metadata {operation} failed",
        error=str(error),
        error_type=type(error).__name__,
        operation=operation,
        **context
    )
    if isinstance(error, TimeoutError):
        return ContentTransportError(f"{operation} timed out")
    return ContentTransportError(str(error) or type(error).__name__)


def decode_error(
    error: ValidationError | ValueError, data_source: str, **context: Any
) -> ContentDecodeError:
    """Log a response body that is not a valid record and wrap it."""
    logger.error(
        f"{data_source} validation failed",
        error=str(error),
        error_type=type(error).__name__,
        data_source=data_source,
        **context
    )
    return ContentDecodeError(str(error))
