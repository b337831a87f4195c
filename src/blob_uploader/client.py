"""Upload client for the blob storage endpoint."""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from .agents import AgentResolver
from .config import Settings
from .environment import EnvironmentProbe
from .errors import ConfigurationError, InvalidPayloadError, UploadFailedError
from .models import UploadResult
from .transport import HttpxTransport, Transport, TransportResponse
from .urls import (
    DEFAULT_UPLOAD_BASE,
    build_upload_url,
    coerce_string,
    encode_uri_component,
    normalize_absolute_url,
)

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_FILENAME_HEADER = "X-File-Name"

_MISSING = object()


def _field(file: Any, key: str, default: Any = None) -> Any:
    if isinstance(file, Mapping):
        return file.get(key, default)
    return getattr(file, key, default)


def _finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass(frozen=True)
class UploadConfiguration:
    """Settings captured when an uploader is constructed."""

    transport: Transport | None = None
    upload_base_url: str = DEFAULT_UPLOAD_BASE
    default_agent: str = ""
    agent_resolver: AgentResolver | None = None
    filename_header: str = DEFAULT_FILENAME_HEADER
    location: Any = None
    probe: EnvironmentProbe | None = None

    def __post_init__(self) -> None:
        if not callable(self.transport):
            raise ConfigurationError("No transport available for blob uploader.")


class BlobUploader:
    """Uploads files to the blob endpoint and normalizes the stored descriptor."""

    def __init__(self, config: UploadConfiguration, *, owns_transport: bool = False) -> None:
        self.config = config
        self._owns_transport = owns_transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: Transport | None = None,
        agent_resolver: AgentResolver | None = None,
        probe: EnvironmentProbe | None = None,
    ) -> "BlobUploader":
        owns_transport = transport is None
        return cls(
            UploadConfiguration(
                transport=transport or HttpxTransport.from_settings(settings),
                upload_base_url=settings.upload_base_url,
                default_agent=settings.default_agent,
                agent_resolver=agent_resolver,
                filename_header=settings.filename_header,
                location=settings.location_origin,
                probe=probe,
            ),
            owns_transport=owns_transport,
        )

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.config.transport.aclose()

    async def __aenter__(self) -> "BlobUploader":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def resolve_agent(self) -> str:
        resolver = self.config.agent_resolver
        resolved = coerce_string(resolver()).strip() if callable(resolver) else ""
        return resolved or coerce_string(self.config.default_agent).strip()

    async def __call__(
        self, file: Any, *, signal: asyncio.Event | None = None
    ) -> UploadResult:
        return await self.upload(file, signal=signal)

    async def upload(
        self, file: Any, *, signal: asyncio.Event | None = None
    ) -> UploadResult:
        """Upload ``file`` and return the normalized descriptor.

        ``file`` is a ``FilePayload``, any object with ``name``/``size``/
        ``type``/``body`` attributes, or a mapping with those keys.

        Raises:
            InvalidPayloadError: the file has no string name or no size.
            UploadFailedError: the endpoint answered with a non-success status.
        """
        name = _field(file, "name", _MISSING) if file is not None else _MISSING
        size = _field(file, "size", _MISSING) if file is not None else _MISSING
        if not isinstance(name, str) or size is _MISSING or size is None:
            raise InvalidPayloadError("Invalid file payload.")

        declared_type = _field(file, "type")
        declared_type = declared_type if isinstance(declared_type, str) else None
        body = _field(file, "body")

        agent = self.resolve_agent()
        upload_url = build_upload_url(self.config.upload_base_url, agent)
        mime = declared_type or DEFAULT_MIME_TYPE
        headers = {
            "Content-Type": mime,
            "X-Mime-Type": mime,
            self.config.filename_header: encode_uri_component(name or "file"),
        }

        logger.debug("blob_upload_start url=%s filename=%s", upload_url, name)
        response = await self.config.transport(
            upload_url,
            method="POST",
            headers=headers,
            content=body if body is not None else b"",
            signal=signal,
        )
        if not response.ok:
            reason = await _read_reason(response)
            raise UploadFailedError(
                reason or f"Upload failed ({response.status_code})",
                status_code=response.status_code,
            )

        data = await _read_metadata(response)
        local_path = data.get("localPath")
        local_path = local_path if isinstance(local_path, str) else None
        filename = data.get("filename")
        mime_value = data.get("mime")
        size_value = data.get("size")
        agent_value = data.get("agent")

        result = UploadResult(
            id=data.get("id"),
            filename=filename if isinstance(filename, str) and filename else name,
            local_path=local_path,
            download_url=normalize_absolute_url(
                local_path,
                data.get("downloadUrl"),
                self.config.location,
                probe=self.config.probe,
            ),
            mime=mime_value if isinstance(mime_value, str) else declared_type,
            size=size_value
            if _finite_number(size_value)
            else (size if _finite_number(size) else None),
            agent=agent_value if isinstance(agent_value, str) else (agent or None),
        )
        logger.debug("blob_upload_complete id=%s url=%s", result.id, result.download_url)
        return result


async def _read_reason(response: TransportResponse) -> str:
    try:
        return coerce_string(await response.text())
    except Exception as exc:
        logger.debug("blob_upload_error_body_unreadable", exc_info=exc)
        return ""


async def _read_metadata(response: TransportResponse) -> dict[str, Any]:
    try:
        data = await response.json()
    except Exception as exc:
        logger.debug("blob_upload_metadata_unparsable", exc_info=exc)
        return {}
    return dict(data) if isinstance(data, Mapping) else {}


def create_blob_uploader(
    *,
    transport: Transport | None = None,
    upload_base_url: str = DEFAULT_UPLOAD_BASE,
    default_agent: str = "",
    agent_resolver: AgentResolver | None = None,
    filename_header: str = DEFAULT_FILENAME_HEADER,
    location: Any = None,
    probe: EnvironmentProbe | None = None,
) -> Callable[..., Awaitable[UploadResult]]:
    """Build an upload callable; raises ``ConfigurationError`` without a transport."""
    uploader = BlobUploader(
        UploadConfiguration(
            transport=transport,
            upload_base_url=upload_base_url,
            default_agent=default_agent,
            agent_resolver=agent_resolver,
            filename_header=filename_header,
            location=location,
            probe=probe,
        )
    )
    return uploader.upload
