"""Request pipeline: config resolution, interceptors, dispatch, retries."""

from .client import HttpClient, create
from .config import DEFAULT_CONFIG, RequestConfig, RetryPolicy, merge_config
from .dispatch import CancellationHandle
from .errors import (
    ConfigurationError,
    HttpClientError,
    InterceptorError,
    RequestTimeoutError,
    TransportError,
)
from .transport import RequestsTransport
from .types import (
    Credentials,
    HttpMethod,
    Interceptor,
    PendingRequest,
    TransportRequest,
)
from .urls import build_url

__all__ = [
    "CancellationHandle",
    "ConfigurationError",
    "Credentials",
    "DEFAULT_CONFIG",
    "HttpClient",
    "HttpClientError",
    "HttpMethod",
    "Interceptor",
    "InterceptorError",
    "PendingRequest",
    "RequestConfig",
    "RequestTimeoutError",
    "RequestsTransport",
    "RetryPolicy",
    "TransportError",
    "TransportRequest",
    "build_url",
    "create",
    "merge_config",
]
