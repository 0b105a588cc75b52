"""Sequential interceptor chain runner shared by both pipeline phases."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Sequence, TypeVar

from .errors import InterceptorError
from .types import Interceptor

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _settle(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def run_chain(
    interceptors: Sequence[Interceptor[T]],
    initial: T,
    *,
    phase: str,
) -> T:
    """Run ``interceptors`` in order, feeding each the previous output.

    When an ``on_success`` handler raises, that interceptor's ``on_failure``
    decides the outcome: its return value ends the chain immediately as the
    final result and the remaining interceptors are skipped. Without a
    failure handler the chain fails with ``InterceptorError``.
    """
    value = initial
    # Snapshot so registrations made mid-request do not affect this run.
    for index, interceptor in enumerate(tuple(interceptors)):
        try:
            value = await _settle(interceptor.on_success(value))
        except Exception as exc:
            if interceptor.on_failure is not None:
                logger.debug(
                    "%s interceptor %d failed, using its failure handler",
                    phase,
                    index,
                )
                return await _settle(interceptor.on_failure(exc))
            raise InterceptorError(
                f"{phase} interceptor {index} failed: {exc}",
                phase=phase,
                index=index,
                original_error=exc,
            ) from exc
    return value
