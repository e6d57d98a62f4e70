"""Retry policy for the search path.

The search agent repeats a failed run with identical arguments. With
``max_attempts=None`` the retry is unbounded, which is how the agent
historically behaved: a deterministic failure such as a bad API key blocks the
loop forever. A finite limit gives up with ``AgentError``.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from learning_agent.core.errors import AgentError
from learning_agent.core.logging import get_logger

logger = get_logger("core.retry")

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry a coroutine factory on any exception."""

    max_attempts: int | None = 3
    backoff_seconds: float = 0.0

    @property
    def unbounded(self) -> bool:
        return self.max_attempts is None

    async def run(
        self,
        func: Callable[[], Awaitable[T]],
        description: str = "call",
        on_retry: Callable[[int, Exception], None] | None = None,
    ) -> T:
        """
        Await ``func()`` until it succeeds or attempts run out.

        Args:
            func: Zero-argument coroutine factory, called once per attempt
            description: Label for log lines
            on_retry: Called with (failed attempt number, error) before each retry

        Returns:
            The first successful result

        Raises:
            AgentError: When a finite attempt limit is exhausted
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await func()
            except Exception as e:
                logger.warning(f"{description} failed (attempt {attempt}): {e}", exc_info=True)
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    raise AgentError(
                        f"{description} failed after {attempt} attempt(s): {e}"
                    ) from e
                if on_retry:
                    on_retry(attempt, e)

            if self.backoff_seconds > 0:
                await asyncio.sleep(self.backoff_seconds)
