"""Single-attempt dispatch with timeout-driven cancellation."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from typing import Any

from .config import RequestConfig, merge_config
from .errors import HttpClientError, RequestTimeoutError, TransportError
from .types import Credentials, HttpMethod, Transport, TransportRequest

logger = logging.getLogger(__name__)


class CancellationHandle:
    """Cancellation signal scoped to one attempt.

    Transports may poll ``cancelled`` or await ``wait()``; the dispatcher
    abandons the transport call as soon as the handle fires either way.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


def credentials_for(config: RequestConfig) -> Credentials:
    if config.allow_cross_origin_cookies:
        return Credentials.INCLUDE
    return Credentials.SAME_ORIGIN


def serialize_body(
    method: HttpMethod, body: Any, config: RequestConfig | None
) -> RequestConfig:
    """Build the call-site layer for a mutation request.

    The body becomes JSON text and ``Content-Type`` is set to JSON, beneath
    any headers the caller passed for the same call.
    """
    merged = merge_config(
        RequestConfig(headers={"Content-Type": "application/json"}), config
    )
    return replace(
        merged,
        method=method,
        body=None if body is None else json.dumps(body),
    )


async def dispatch(
    url: str, config: RequestConfig, transport: Transport
) -> Any:
    """Invoke ``transport`` once, bounded by ``config.timeout_ms``.

    ``base_url`` and ``timeout_ms`` stay in the pipeline; the transport gets
    the method, headers, body, credentials policy, a socket bound matching
    the timeout and a fresh cancellation handle. The scheduled timeout is
    cleared on every exit path.
    """
    handle = CancellationHandle()
    request = TransportRequest(
        url=url,
        method=config.method or HttpMethod.GET,
        headers=dict(config.headers or {}),
        body=config.body,
        credentials=credentials_for(config),
        signal=handle,
        socket_timeout_seconds=(
            config.timeout_ms / 1000 if config.timeout_ms else None
        ),
    )

    loop = asyncio.get_running_loop()
    timer: asyncio.TimerHandle | None = None
    call = asyncio.ensure_future(_invoke(transport, request))
    watcher = asyncio.ensure_future(handle.wait())
    try:
        if config.timeout_ms:
            timer = loop.call_later(
                config.timeout_ms / 1000, handle.cancel, "timeout"
            )
        await asyncio.wait(
            {call, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        if timer is not None:
            timer.cancel()
        watcher.cancel()
        if not call.done():
            call.cancel()

    if call.done() and not call.cancelled():
        return _unwrap(call, url)

    await asyncio.gather(call, return_exceptions=True)
    logger.debug("request to %s timed out after %sms", url, config.timeout_ms)
    raise RequestTimeoutError(
        f"Request timed out after {config.timeout_ms}ms", url=url
    )


async def _invoke(transport: Transport, request: TransportRequest) -> Any:
    # Failures raised before the transport returns an awaitable settle the
    # task like any other transport failure.
    return await transport(request)


def _unwrap(call: asyncio.Future[Any], url: str) -> Any:
    error = call.exception()
    if error is None:
        return call.result()
    if isinstance(error, HttpClientError):
        raise error
    raise TransportError(
        f"Transport failed: {error}", url=url, original_error=error
    ) from error
