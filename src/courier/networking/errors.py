"""Error taxonomy for the Courier networking layer."""

from __future__ import annotations


class HttpClientError(Exception):
    """Base exception for all Courier client errors.

    Catch this to handle any failure surfaced by the request pipeline.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        self.message = message
        self.url = url
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        return " | ".join(parts)


class ConfigurationError(HttpClientError, ValueError):
    """A resolved configuration cannot be executed (never retried)."""


class TransportError(HttpClientError):
    """The transport failed to produce a response (retryable)."""


class RequestTimeoutError(TransportError):
    """The per-attempt timeout fired before the transport settled."""


class InterceptorError(HttpClientError):
    """An interceptor failed and had no failure handler registered."""

    def __init__(
        self,
        message: str,
        *,
        phase: str,
        index: int,
        url: str | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        self.phase = phase
        self.index = index
        super().__init__(message, url=url, original_error=original_error)
