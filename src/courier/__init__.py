"""Courier: an async HTTP client with interceptors, timeouts and retries."""

from .networking import (
    ConfigurationError,
    HttpClient,
    HttpClientError,
    HttpMethod,
    Interceptor,
    InterceptorError,
    PendingRequest,
    RequestConfig,
    RequestTimeoutError,
    RetryPolicy,
    TransportError,
    create,
)

__all__ = [
    "ConfigurationError",
    "HttpClient",
    "HttpClientError",
    "HttpMethod",
    "Interceptor",
    "InterceptorError",
    "PendingRequest",
    "RequestConfig",
    "RequestTimeoutError",
    "RetryPolicy",
    "TransportError",
    "create",
]
