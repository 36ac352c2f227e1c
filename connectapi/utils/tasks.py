"""Fire-and-forget scheduling on the running event loop."""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine, TypeVar

from connectapi.logging import logger

T = TypeVar("T")


class TaskTracker:
    """Keeps strong references to scheduled tasks and logs their failures."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def schedule(self, coro: Coroutine[Any, Any, T], *, name: str | None = None) -> asyncio.Task[T]:
        task: asyncio.Task[T] = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def wait_idle(self) -> None:
        # Tasks may schedule more work while we wait.
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "background_task_failed",
                task=task.get_name(),
                exception_type=exc.__class__.__name__,
                exception=str(exc),
            )


__all__ = ["TaskTracker"]
