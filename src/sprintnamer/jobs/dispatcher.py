"""Bounded fire-and-forget job dispatcher.

Jobs are scheduled as asyncio tasks on the running loop and never awaited by
the submitting request. Admission is capped by ``max_pending``: once that
many jobs are in flight, ``submit`` rejects new work instead of queueing it.
The pending counter is only touched on the event loop thread, so it needs
no lock.

Pending jobs live only in memory; they are lost if the process exits.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from sprintnamer.exceptions import ConfigurationError
from sprintnamer.logging import get_logger

logger = get_logger(__name__)

Job = Callable[[], Awaitable[Any]]
ErrorObserver = Callable[[BaseException], None]


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a submission.

    Attributes:
        accepted: Whether the job was scheduled.
        pending: Jobs in flight after this submission.
        max_pending: Dispatcher capacity.
    """

    accepted: bool
    pending: int
    max_pending: int


class JobDispatcher:
    """Runs submitted jobs in the background with a pending-count ceiling.

    Example:
        ```python
        dispatcher = JobDispatcher(max_pending=50)

        result = dispatcher.submit(lambda: pipeline.apply(page_id=pid, seed=seed))
        if not result.accepted:
            ...  # tell the caller to retry later
        ```
    """

    def __init__(self, max_pending: int = 50) -> None:
        """Initialize the dispatcher.

        Args:
            max_pending: Maximum jobs in flight. Zero rejects every submission.

        Raises:
            ConfigurationError: If max_pending is negative.
        """
        if max_pending < 0:
            raise ConfigurationError(f"max_pending must be >= 0, got {max_pending}")
        self._max_pending = max_pending
        self._pending = 0
        # Strong references so the loop does not garbage-collect running tasks
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of jobs admitted but not yet finished."""
        return self._pending

    @property
    def max_pending(self) -> int:
        """Dispatcher capacity."""
        return self._max_pending

    def stats(self) -> dict[str, int]:
        """Snapshot of the queue counters."""
        return {"pending": self._pending, "max_pending": self._max_pending}

    def submit(self, job: Job, on_error: ErrorObserver | None = None) -> SubmitResult:
        """Schedule ``job`` without waiting for it.

        Must be called from code running on an event loop. The pending count
        is incremented before this returns, so a burst of submissions sees a
        consistent count.

        Args:
            job: Zero-argument callable returning an awaitable.
            on_error: Observer called with the exception if the job fails.

        Returns:
            SubmitResult; ``accepted`` is False when the dispatcher is full.
        """
        if self._pending >= self._max_pending:
            logger.warning(
                "Job rejected, dispatcher full",
                pending=self._pending,
                max_pending=self._max_pending,
            )
            return SubmitResult(
                accepted=False, pending=self._pending, max_pending=self._max_pending
            )

        loop = asyncio.get_running_loop()
        self._pending += 1
        try:
            task = loop.create_task(self._run(job, on_error))
        except BaseException:
            self._pending -= 1
            raise

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        return SubmitResult(accepted=True, pending=self._pending, max_pending=self._max_pending)

    async def _run(self, job: Job, on_error: ErrorObserver | None) -> None:
        try:
            await job()
        except Exception as e:
            self._report_failure(e, on_error)
        finally:
            self._pending -= 1

    def _report_failure(self, error: Exception, on_error: ErrorObserver | None) -> None:
        if on_error is None:
            logger.error("Async job failed", error=str(error), exc_info=error)
            return
        try:
            on_error(error)
        except Exception as observer_error:
            logger.error(
                "Async job failed and its error observer raised",
                error=str(error),
                observer_error=str(observer_error),
                exc_info=observer_error,
            )

    async def join(self) -> None:
        """Wait until every job submitted so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self, timeout: float | None = None) -> int:
        """Wait for in-flight jobs, cancelling any still running after ``timeout``.

        Args:
            timeout: Seconds to wait. None waits indefinitely.

        Returns:
            Number of jobs that were cancelled.
        """
        if not self._tasks:
            return 0

        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
            logger.warning("Cancelled unfinished jobs at shutdown", cancelled=len(still_running))
        return len(still_running)
