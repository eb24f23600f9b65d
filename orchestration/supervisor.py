"""Run supervisor - one asyncio task per run id."""

import asyncio
from collections.abc import Awaitable, Callable

from core.domain.exceptions import RunCancelledError
from core.infrastructure.logging import get_logger

RunBody = Callable[[], Awaitable[object]]
# Receives (result, None) on success and (None, error) on failure
RunFinisher = Callable[[object | None, BaseException | None], Awaitable[None]]


class RunSupervisor:
    """Supervises background runs.

    The run body never records its own outcome: success, failure and
    cancellation are all handed to the owner's ``finish`` coroutine.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}
        self._logger = get_logger("orchestration.supervisor")

    @property
    def active_runs(self) -> int:
        return len(self._tasks)

    def spawn(self, run_id: str, body: RunBody, finish: RunFinisher) -> asyncio.Task:
        """Start a run in the background.

        Args:
            run_id: Execution id the task is bound to
            body: Coroutine factory doing the work
            finish: Single state-transition coroutine for both outcomes

        Returns:
            The asyncio task
        """
        task = asyncio.create_task(self._supervise(run_id, body, finish), name=f"run:{run_id}")
        self._tasks[run_id] = task
        return task

    async def _supervise(self, run_id: str, body: RunBody, finish: RunFinisher) -> None:
        try:
            try:
                result = await body()
            except asyncio.CancelledError:
                self._logger.warning(f"Run cancelled: {run_id}")
                await finish(None, RunCancelledError(run_id))
                raise
            except Exception as exc:
                await finish(None, exc)
            else:
                await finish(result, None)
        finally:
            self._tasks.pop(run_id, None)

    async def wait(self, run_id: str) -> None:
        """Wait until the run finishes (returns immediately if it already has)."""
        task = self._tasks.get(run_id)
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel every live run and wait for their cancellations to be recorded."""
        tasks = list(self._tasks.values())
        if not tasks:
            return
        self._logger.info(f"Cancelling {len(tasks)} live run(s)")
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
