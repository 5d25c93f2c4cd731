"""
Upstream retry policy

Bounded retries with exponential backoff and full jitter for calls to the
embedding service and the vector store. Only errors flagged `transient`
are retried; everything else propagates on the first failure.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from ragserver.core.config import Settings
from ragserver.core.exceptions import RAGServerError
from ragserver.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_seconds: float = 0.2
    backoff_factor: float = 2.0
    max_delay_seconds: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_attempts=settings.upstream_retry_max_attempts,
            base_delay_seconds=settings.upstream_retry_base_delay_seconds,
            backoff_factor=settings.upstream_retry_backoff_factor,
            max_delay_seconds=settings.upstream_retry_max_delay_seconds,
        )

    @classmethod
    def no_retry(cls) -> RetryPolicy:
        return cls(max_attempts=1)

    def backoff(self, attempt: int) -> float:
        """Upper bound of the sleep after failed attempt `attempt` (1-based)."""
        delay = self.base_delay_seconds * (self.backoff_factor ** max(attempt - 1, 0))
        return min(delay, self.max_delay_seconds)

    async def run(self, operation: str, func: Callable[[], Awaitable[T]]) -> T:
        """
        Await `func()` until it succeeds, fails permanently or attempts run out.

        Args:
            operation: Name used in retry log events
            func: Zero-argument coroutine factory, called once per attempt

        Raises:
            RAGServerError: The last error raised by `func`
        """
        attempt = 1
        while True:
            try:
                return await func()
            except RAGServerError as exc:
                if not exc.transient or attempt >= self.max_attempts:
                    raise
                delay = random.uniform(0, self.backoff(attempt))
                logger.warning(
                    "upstream_retry",
                    operation=operation,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    delay_seconds=round(delay, 3),
                    error=exc.message,
                )
                await asyncio.sleep(delay)
                attempt += 1
