"""
Request wall-clock budget.

One budget is started per request. Non-streaming stages run under
`asyncio.wait_for` with whatever time is left; the chat stream polls
`expired` between deltas.

Dependencies: asyncio
System role: Request timeout enforcement
"""

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

from notchy.core.exceptions import PipelineTimeoutError

T = TypeVar("T")


class RequestBudget:
    """Deadline shared by every stage of one request."""

    def __init__(self, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError("budget must be positive")
        self.seconds = seconds
        self._deadline = time.monotonic() + seconds

    def remaining(self) -> float:
        return max(0.0, self._deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, stage: str | None = None) -> None:
        """Raise PipelineTimeoutError when the deadline has passed."""
        if self.expired:
            raise PipelineTimeoutError(self.seconds, stage)

    async def run(self, awaitable: Awaitable[T], stage: str | None = None) -> T:
        """
        Await within the remaining budget.

        The awaited work is cancelled when the deadline passes.

        Args:
            awaitable: Coroutine to run
            stage: Stage name reported in the error

        Returns:
            The awaitable's result

        Raises:
            PipelineTimeoutError: When the deadline passes first
        """
        remaining = self.remaining()
        if remaining <= 0:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise PipelineTimeoutError(self.seconds, stage)
        try:
            return await asyncio.wait_for(awaitable, timeout=remaining)
        except asyncio.TimeoutError as e:
            raise PipelineTimeoutError(self.seconds, stage) from e
