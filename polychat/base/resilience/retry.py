"""Fixed-backoff retry policy for one logical call.

A logical call makes at most ``max_retry + 1`` strictly sequential attempts.
Every failed attempt except the last is followed by one sleep of
``sleep_seconds`` through an injectable awaitable ``sleep`` (default
``asyncio.sleep``), so the wait suspends the task instead of blocking the
loop. Only :class:`ProviderError` instances flagged ``retryable`` are retried;
anything else propagates immediately. When the budget runs out the last
error is wrapped in :class:`RetryExhaustedError`.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol, TypeVar

from ..errors import ProviderError, RetryExhaustedError

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_retry: int = 0
    sleep_seconds: float = 5.0
    attempt_logger: AttemptLogger | None = None

    @property
    def max_attempts(self) -> int:
        return max(self.max_retry, 0) + 1


DEFAULT_RETRY_CONFIG = RetryConfig()


async def run_with_retry(
    operation: Callable[[int], Awaitable[T]],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    *,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Await ``operation(attempt)`` under ``config``.

    ``attempt`` is 1-based so the operation can tag logs and metadata.

    Raises:
        RetryExhaustedError: After ``config.max_attempts`` retryable failures.
        ProviderError: Immediately, for a non-retryable failure.
    """
    last_exc: ProviderError | None = None
    for attempt in range(1, config.max_attempts + 1):
        is_last = attempt == config.max_attempts
        try:
            result = await operation(attempt)
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt, max_attempts=config.max_attempts, delay=None, error=None
                )
            return result
        except ProviderError as e:
            if not e.retryable:
                raise
            last_exc = e
            delay = None if is_last else config.sleep_seconds
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt, max_attempts=config.max_attempts, delay=delay, error=e
                )
            if delay is not None:
                await sleep(delay)
    # Explicit check instead of assert (Bandit B101).
    if last_exc is None:  # pragma: no cover - unreachable with max_attempts >= 1
        raise RuntimeError("retry: reached terminal state without captured exception")
    raise RetryExhaustedError(config.max_attempts, last_exc)


__all__ = [
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "Sleep",
    "run_with_retry",
]
