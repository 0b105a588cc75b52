"""Default transport backed by ``requests``.

The blocking session call runs in a worker thread so it can be awaited and
abandoned by the dispatcher when an attempt times out.
"""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit

import requests

from .errors import RequestTimeoutError, TransportError
from .types import Credentials, TransportRequest


def _origin(url: str) -> tuple[str, str]:
    parts = urlsplit(url)
    return parts.scheme.lower(), parts.netloc.lower()


class RequestsTransport:
    """Send ``TransportRequest`` values through a ``requests.Session``.

    Responses are returned whatever their status code; raising on 4xx/5xx is
    left to response interceptors.
    """

    def __init__(
        self,
        *,
        origin: str | None = None,
        session: requests.Session | None = None,
        verify_tls: bool = True,
        timeout_seconds: float | None = None,
    ) -> None:
        """Create a new RequestsTransport.

        Args:
            origin: URL whose scheme and host count as same-origin. Without
                one, every absolute URL is treated as cross-origin.
            session: Session to reuse; a new one is created by default.
            verify_tls: Whether TLS certificates are verified.
            timeout_seconds: Socket timeout used when a request carries none.
        """
        self._origin = _origin(origin) if origin else None
        self._session = session or requests.Session()
        self._verify_tls = verify_tls
        self._timeout = timeout_seconds

    def _is_same_origin(self, url: str) -> bool:
        return self._origin is not None and _origin(url) == self._origin

    def _send(self, request: TransportRequest) -> requests.Response:
        prepared = self._session.prepare_request(
            requests.Request(
                method=request.method.value,
                url=request.url,
                headers=dict(request.headers),
                data=request.body,
            )
        )
        if (
            request.credentials is Credentials.SAME_ORIGIN
            and not self._is_same_origin(request.url)
        ):
            prepared.headers.pop("Cookie", None)

        try:
            return self._session.send(
                prepared,
                timeout=request.socket_timeout_seconds or self._timeout,
                verify=self._verify_tls,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                str(e), url=request.url, original_error=e
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(
                str(e), url=request.url, original_error=e
            ) from e

    async def __call__(self, request: TransportRequest) -> requests.Response:
        return await asyncio.to_thread(self._send, request)

    def close(self) -> None:
        self._session.close()
