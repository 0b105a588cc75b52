"""Configuration models and the three-layer config resolver."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from .types import HttpMethod, Params

DEFAULT_RETRIES = 1
DEFAULT_RETRY_DELAY_MS = 1000


def _freeze(mapping: Mapping[str, str] | None) -> Mapping[str, str] | None:
    if mapping is None:
        return None
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts to make and how long to wait between them.

    ``retries`` counts attempts, not re-attempts. A value below 1 is accepted
    here and rejected by the retry controller before anything is sent.
    """

    retries: int | None = None
    retry_delay_ms: int | None = None

    def __post_init__(self) -> None:
        if self.retry_delay_ms is not None and self.retry_delay_ms < 0:
            raise ValueError("retry_delay_ms must be >= 0")

    def merged(self, override: RetryPolicy | None) -> RetryPolicy:
        """Return a new policy with ``override``'s set fields applied."""
        if override is None:
            return self
        return RetryPolicy(
            retries=_pick(override.retries, self.retries),
            retry_delay_ms=_pick(override.retry_delay_ms, self.retry_delay_ms),
        )

    def resolved(self) -> RetryPolicy:
        """Return the policy with library defaults filled in."""
        return RetryPolicy(
            retries=_pick(self.retries, DEFAULT_RETRIES),
            retry_delay_ms=_pick(self.retry_delay_ms, DEFAULT_RETRY_DELAY_MS),
        )


@dataclass(frozen=True)
class RequestConfig:
    """One configuration layer.

    Every field defaults to ``None`` meaning "not set by this layer", so a
    layer only contributes what it names when merged over another.
    ``timeout_ms`` of 0 or ``None`` means no timeout.
    """

    base_url: str | None = None
    timeout_ms: float | None = None
    headers: Mapping[str, str] | None = None
    method: HttpMethod | None = None
    body: Any = None
    params: Params | None = None
    allow_cross_origin_cookies: bool | None = None
    retry: RetryPolicy | None = None

    def __post_init__(self) -> None:
        if self.timeout_ms is not None and self.timeout_ms < 0:
            raise ValueError("timeout_ms must be >= 0 when provided")
        if self.method is not None and not isinstance(self.method, HttpMethod):
            try:
                method = HttpMethod(str(self.method).upper())
            except ValueError:
                raise ValueError(
                    f"unsupported method: {self.method!r}"
                ) from None
            object.__setattr__(self, "method", method)

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(self, "headers", _freeze(self.headers))

    def retry_policy(self) -> RetryPolicy:
        """Return this layer's retry policy with defaults filled in."""
        return (self.retry or RetryPolicy()).resolved()


DEFAULT_CONFIG = RequestConfig(
    headers={"Content-Type": "application/json"},
    timeout_ms=1000,
    retry=RetryPolicy(
        retries=DEFAULT_RETRIES, retry_delay_ms=DEFAULT_RETRY_DELAY_MS
    ),
)


def _pick(preferred: Any, fallback: Any) -> Any:
    return fallback if preferred is None else preferred


def merge_config(
    base: RequestConfig, override: RequestConfig | None
) -> RequestConfig:
    """Merge ``override`` on top of ``base`` into a new config.

    Scalar fields are last-writer-wins. ``headers`` and ``retry`` are merged
    key by key, so an override only replaces the keys it sets.
    """
    if override is None:
        return base

    headers: dict[str, str] = dict(base.headers or {})
    headers.update(override.headers or {})

    if base.retry is None:
        retry = override.retry
    else:
        retry = base.retry.merged(override.retry)

    return RequestConfig(
        base_url=_pick(override.base_url, base.base_url),
        timeout_ms=_pick(override.timeout_ms, base.timeout_ms),
        headers=headers if (base.headers or override.headers) else None,
        method=_pick(override.method, base.method),
        body=_pick(override.body, base.body),
        params=_pick(override.params, base.params),
        allow_cross_origin_cookies=_pick(
            override.allow_cross_origin_cookies,
            base.allow_cross_origin_cookies,
        ),
        retry=retry,
    )

