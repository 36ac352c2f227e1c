"""Fallback list of popular APIs shown before any search settles."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol

from connectapi.domain.models import APIData
from connectapi.domain.state import TrendingState
from connectapi.logging import logger
from connectapi.services.exceptions import ServiceError
from connectapi.utils.tasks import TaskTracker


class TrendingBackendProtocol(Protocol):
    async def trending(self) -> list[APIData]: ...


class TrendingProvider:
    def __init__(
        self,
        backend: TrendingBackendProtocol,
        *,
        tasks: TaskTracker | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._backend = backend
        self._tasks = tasks if tasks is not None else TaskTracker()
        self._on_change = on_change
        self._task: asyncio.Task[TrendingState] | None = None
        self._state = TrendingState()

    @property
    def state(self) -> TrendingState:
        return self._state

    def fetch(self) -> asyncio.Task[TrendingState]:
        """Load the list once; repeated calls return the original task."""

        if self._task is None:
            self._set_state(TrendingState(loading=True))
            self._task = self._tasks.schedule(self._load(), name="trending")
        return self._task

    async def _load(self) -> TrendingState:
        items: tuple[APIData, ...] = ()
        try:
            items = tuple(await self._backend.trending())
        except ServiceError as exc:
            logger.warning(
                "trending_fetch_failed",
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )
        else:
            logger.info("trending_loaded", count=len(items))
        finally:
            self._set_state(TrendingState(loading=False, items=items))
        return self._state

    def _set_state(self, state: TrendingState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change()


__all__ = ["TrendingProvider"]
