"""Shared value types for the request pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Mapping,
    Sequence,
    TypeVar,
    Union,
)

if TYPE_CHECKING:
    from .config import RequestConfig
    from .dispatch import CancellationHandle

T = TypeVar("T")

Scalar = Union[str, int, float, bool, None]
Params = Mapping[str, Union[Scalar, Sequence[Scalar]]]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


class Credentials(str, Enum):
    """Cookie policy handed to the transport."""

    INCLUDE = "include"
    SAME_ORIGIN = "same-origin"


@dataclass(frozen=True)
class PendingRequest:
    """A fully built request travelling through the request interceptors."""

    url: str
    config: RequestConfig


@dataclass(frozen=True)
class Interceptor(Generic[T]):
    """A transform step with an optional recovery handler.

    ``on_success`` receives the previous step's output and returns the next
    value (plain or awaitable). If it raises, ``on_failure`` is called with
    the exception and its return value becomes the result of the whole chain.
    """

    on_success: Callable[[T], T | Awaitable[T]]
    on_failure: Callable[[Exception], T | Awaitable[T]] | None = None


@dataclass(frozen=True)
class TransportRequest:
    """Options forwarded to the transport for a single attempt.

    ``socket_timeout_seconds`` lets blocking transports bound the underlying
    call to the same limit the dispatcher enforces.
    """

    url: str
    method: HttpMethod
    headers: Mapping[str, str]
    body: Any
    credentials: Credentials
    signal: CancellationHandle
    socket_timeout_seconds: float | None = None


Transport = Callable[[TransportRequest], Awaitable[Any]]
