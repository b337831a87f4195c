"""Client-side uploader for the blob storage endpoint."""

from .agents import (
    DEFAULT_AGENT_CANDIDATES,
    AgentResolver,
    create_browser_agent_resolver,
    static_agent_resolver,
)
from .client import BlobUploader, UploadConfiguration, create_blob_uploader
from .config import Settings
from .environment import EnvironmentSnapshot, environ_probe, no_environment, static_probe
from .errors import (
    BlobUploaderError,
    ConfigurationError,
    InvalidPayloadError,
    TransportError,
    UploadCancelledError,
    UploadFailedError,
)
from .models import FilePayload, UploadResult
from .transport import HttpxTransport
from .urls import build_upload_url, normalize_absolute_url

__all__ = [
    "AgentResolver",
    "BlobUploader",
    "BlobUploaderError",
    "ConfigurationError",
    "DEFAULT_AGENT_CANDIDATES",
    "EnvironmentSnapshot",
    "FilePayload",
    "HttpxTransport",
    "InvalidPayloadError",
    "Settings",
    "TransportError",
    "UploadCancelledError",
    "UploadConfiguration",
    "UploadFailedError",
    "UploadResult",
    "build_upload_url",
    "create_blob_uploader",
    "create_browser_agent_resolver",
    "environ_probe",
    "no_environment",
    "normalize_absolute_url",
    "static_agent_resolver",
    "static_probe",
]
