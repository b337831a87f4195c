"""Transport contract and the httpx-backed transport."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Mapping, Protocol

import httpx

from .config import Settings
from .errors import TransportError, UploadCancelledError

logger = logging.getLogger(__name__)


class TransportResponse(Protocol):
    status_code: int

    @property
    def ok(self) -> bool: ...

    async def text(self) -> str: ...

    async def json(self) -> Any: ...


class Transport(Protocol):
    """Async callable that performs one request/response exchange.

    The request body arrives as the ``content`` keyword, following the httpx
    naming; custom transports must accept ``content`` rather than ``body``.
    ``signal``, when given, is an ``asyncio.Event`` whose setting asks the
    transport to abort.
    """

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        content: Any,
        signal: asyncio.Event | None = None,
    ) -> TransportResponse: ...


class HttpxResponse:
    """Adapts an ``httpx.Response`` to the transport response contract."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.status_code = response.status_code

    @property
    def ok(self) -> bool:
        return self.response.is_success

    async def text(self) -> str:
        await self.response.aread()
        return self.response.text

    async def json(self) -> Any:
        await self.response.aread()
        return self.response.json()


class HttpxTransport:
    """Sends upload requests through an ``httpx.AsyncClient``."""

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        *,
        base_url: str = "",
        timeout: httpx.Timeout | float | None = None,
    ) -> None:
        self.http = http or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout
            if timeout is not None
            else httpx.Timeout(
                connect=10.0,
                read=60.0,
                write=60.0,
                pool=10.0,
            ),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpxTransport":
        return cls(
            base_url=settings.location_origin or "",
            timeout=httpx.Timeout(
                connect=settings.connect_timeout,
                read=settings.read_timeout,
                write=settings.write_timeout,
                pool=settings.pool_timeout,
            ),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        content: Any,
        signal: asyncio.Event | None = None,
    ) -> HttpxResponse:
        if signal is not None and signal.is_set():
            raise UploadCancelledError("upload_cancelled")

        request = self.http.request(method, url, headers=dict(headers), content=content)
        try:
            if signal is None:
                response = await request
            else:
                response = await self._send_cancellable(request, signal, url)
        except httpx.TimeoutException as exc:
            raise TransportError(f"transport_timeout: Request to {url} timed out") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"transport_connection_failed: {exc}") from exc
        return HttpxResponse(response)

    async def _send_cancellable(
        self, request: Any, signal: asyncio.Event, url: str
    ) -> httpx.Response:
        request_task = asyncio.ensure_future(request)
        abort_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {request_task, abort_task}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            request_task.cancel()
            raise
        finally:
            abort_task.cancel()
        if request_task in done:
            return request_task.result()

        request_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await request_task
        logger.debug("upload_request_aborted url=%s", url)
        raise UploadCancelledError("upload_cancelled")
