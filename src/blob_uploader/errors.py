"""Error types raised by the blob uploader."""

from __future__ import annotations


class BlobUploaderError(Exception):
    """Base error for blob upload failures."""


class ConfigurationError(BlobUploaderError):
    """Raised when the uploader is constructed without a usable transport."""


class InvalidPayloadError(BlobUploaderError):
    """Raised when the file argument is malformed."""


class UploadFailedError(BlobUploaderError):
    """Raised when the remote endpoint reports a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(BlobUploaderError):
    """Raised when the HTTP transport cannot complete the exchange."""


class UploadCancelledError(BlobUploaderError):
    """Raised when the caller's cancellation signal aborts an upload."""
