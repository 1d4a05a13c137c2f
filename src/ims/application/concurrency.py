"""Bounded retry for optimistic-concurrency conflicts."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import structlog

from ims.domain.exceptions import ConcurrencyConflictError, RetryExhaustedError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3


def retry_on_conflict(operation: Callable[[], T], max_retries: int = DEFAULT_MAX_RETRIES) -> T:
    """Run ``operation``, re-running it from scratch on a version conflict.

    ``operation`` must open its own unit of work so every attempt starts
    from a fresh read. Only ConcurrencyConflictError is retried; any other
    failure propagates on the first attempt.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return operation()
        except ConcurrencyConflictError as exc:
            if attempt > max_retries:
                logger.warning(
                    "conflict.retries_exhausted",
                    attempts=attempt,
                    entity=exc.entity,
                    entity_id=exc.entity_id,
                )
                raise RetryExhaustedError(attempt) from exc
            logger.info(
                "conflict.retry",
                attempt=attempt,
                entity=exc.entity,
                entity_id=exc.entity_id,
            )
