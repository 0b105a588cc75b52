"""Asynchronous HTTP client facade for the Courier networking layer.

This module defines the public interface callers use. The transport is
supplied from outside; the client layers configuration resolution, URL
building, interceptors, per-attempt timeouts and retries on top of it.
"""

from __future__ import annotations

from typing import Any

from .config import DEFAULT_CONFIG, RequestConfig, merge_config
from .dispatch import dispatch, serialize_body
from .interceptors import run_chain
from .retry import RetryController
from .transport import RequestsTransport
from .types import HttpMethod, Interceptor, PendingRequest, Transport
from .urls import build_url


class HttpClient:
    """Core HTTP client interface (async).

    Every request runs the same pipeline: resolve config, build the URL and
    query string, run request interceptors, then dispatch and run response
    interceptors under retry control. Interceptors are meant to be registered
    before concurrent traffic starts.
    """

    def __init__(
        self, config: RequestConfig | None, transport: Transport
    ) -> None:
        """Create a new HttpClient.

        Args:
            config: Instance-level configuration merged over the defaults.
            transport: Awaitable callable that performs one HTTP exchange.
        """
        self._config = merge_config(DEFAULT_CONFIG, config)
        self._transport = transport
        self._request_interceptors: list[Interceptor[PendingRequest]] = []
        self._response_interceptors: list[Interceptor[Any]] = []

    @property
    def config(self) -> RequestConfig:
        return self._config

    def add_request_interceptor(
        self, interceptor: Interceptor[PendingRequest]
    ) -> None:
        self._request_interceptors.append(interceptor)

    def add_response_interceptor(self, interceptor: Interceptor[Any]) -> None:
        self._response_interceptors.append(interceptor)

    async def aclose(self) -> None:
        """Release the transport's resources if it owns any."""
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _attempt(self, pending: PendingRequest) -> Any:
        response = await dispatch(pending.url, pending.config, self._transport)
        return await run_chain(
            self._response_interceptors, response, phase="response"
        )

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        config: RequestConfig | None = None,
    ) -> Any:
        """Run the full request pipeline for ``path``.

        Args:
            method: HTTP method; takes precedence over ``config.method``.
            path: Path joined to ``base_url``, or a full URL without one.
            config: Call-site overrides for this request only.

        Returns:
            The transport response after response interceptors ran.

        Raises:
            ConfigurationError: If the resolved retry policy is invalid.
            InterceptorError: If an interceptor failed without recovery.
            TransportError: If the final attempt failed in the transport.
        """
        call = merge_config(
            config or RequestConfig(), RequestConfig(method=method)
        )
        resolved = merge_config(self._config, call)
        controller = RetryController(resolved.retry_policy())

        pending = PendingRequest(
            url=build_url(resolved.base_url, path, resolved.params),
            config=resolved,
        )
        pending = await run_chain(
            self._request_interceptors, pending, phase="request"
        )
        return await controller.execute(lambda: self._attempt(pending))

    async def _mutation(
        self,
        method: HttpMethod,
        path: str,
        body: Any,
        config: RequestConfig | None,
    ) -> Any:
        return await self.request(
            method, path, serialize_body(method, body, config)
        )

    async def get(self, path: str, config: RequestConfig | None = None) -> Any:
        """Perform an HTTP GET request."""
        return await self.request(HttpMethod.GET, path, config)

    async def options(
        self, path: str, config: RequestConfig | None = None
    ) -> Any:
        """Perform an HTTP OPTIONS request."""
        return await self.request(HttpMethod.OPTIONS, path, config)

    async def post(
        self, path: str, body: Any, config: RequestConfig | None = None
    ) -> Any:
        """Perform an HTTP POST request with a JSON body.

        A ``None`` body sends no payload rather than the JSON text ``null``.
        """
        return await self._mutation(HttpMethod.POST, path, body, config)

    async def put(
        self, path: str, body: Any, config: RequestConfig | None = None
    ) -> Any:
        """Perform an HTTP PUT request with a JSON body.

        A ``None`` body sends no payload rather than the JSON text ``null``.
        """
        return await self._mutation(HttpMethod.PUT, path, body, config)

    async def patch(
        self, path: str, body: Any, config: RequestConfig | None = None
    ) -> Any:
        """Perform an HTTP PATCH request with a JSON body.

        A ``None`` body sends no payload rather than the JSON text ``null``.
        """
        return await self._mutation(HttpMethod.PATCH, path, body, config)

    async def delete(
        self, path: str, config: RequestConfig | None = None
    ) -> Any:
        """Perform an HTTP DELETE request.

        A ``body`` given in ``config`` is serialized like other mutations.
        """
        body = config.body if config is not None else None
        return await self._mutation(HttpMethod.DELETE, path, body, config)


def create(
    config: RequestConfig | None = None,
    *,
    transport: Transport | None = None,
) -> HttpClient:
    """Build an HttpClient, defaulting to a ``requests``-backed transport."""
    if transport is None:
        transport = RequestsTransport(
            origin=merge_config(DEFAULT_CONFIG, config).base_url
        )
    return HttpClient(config, transport)
