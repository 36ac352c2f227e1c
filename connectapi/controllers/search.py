"""Lifecycle of the user's most recent search."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from itertools import count
from typing import Callable, Protocol

from connectapi.config import SearchSettings
from connectapi.domain.models import SearchResponse
from connectapi.domain.state import Empty, Failed, Idle, Loading, SearchState, Success
from connectapi.logging import logger
from connectapi.services.exceptions import BackendError, MalformedResponse, NetworkFailure
from connectapi.utils.tasks import TaskTracker


class SearchBackendProtocol(Protocol):
    async def search(self, query: str) -> SearchResponse: ...


class SearchController:
    """Drives ``Idle -> Loading -> Success | Empty | Failed`` for each submitted query.

    Earlier requests are never cancelled. By default whichever response settles
    last overwrites the state, even when it answers an older query; set
    ``discard_stale_responses`` to keep only the newest request's outcome.
    """

    def __init__(
        self,
        backend: SearchBackendProtocol,
        *,
        tasks: TaskTracker | None = None,
        settings: SearchSettings | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._backend = backend
        self._tasks = tasks if tasks is not None else TaskTracker()
        self._settings = settings or SearchSettings()
        self._on_change = on_change
        self._sequence = count(1)
        self._latest = 0
        self._in_flight = 0
        self._state: SearchState = Idle()

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def submit(self, query: str) -> asyncio.Task[SearchState]:
        """Start a search; the returned task resolves to the state it left behind."""

        seq = next(self._sequence)
        self._latest = seq
        self._in_flight += 1
        self._set_state(Loading(query=query))
        logger.info("search_submitted", query=query, seq=seq)
        return self._tasks.schedule(self._run(query, seq), name=f"search-{seq}")

    async def _run(self, query: str, seq: int) -> SearchState:
        try:
            outcome = await self._settle(query)
        finally:
            self._in_flight -= 1

        if self._settings.discard_stale_responses and seq != self._latest:
            logger.info("search_response_discarded", query=query, seq=seq, latest=self._latest)
            return self._state

        # The visible query stays the most recently submitted one.
        if outcome.query != self._state.query:
            outcome = replace(outcome, query=self._state.query)
        self._set_state(outcome)
        return outcome

    async def _settle(self, query: str) -> SearchState:
        try:
            response = await self._backend.search(query)
        except MalformedResponse as exc:
            logger.info("search_empty", query=query, reason="malformed_response", error=str(exc))
            return Empty(query=query, reason=self._settings.default_empty_message)
        except NetworkFailure as exc:
            logger.warning("search_failed", query=query, kind="network", error=str(exc))
            return Failed(query=query, reason=self._settings.default_error_message)
        except BackendError as exc:
            logger.warning(
                "search_failed",
                query=query,
                kind="backend",
                status_code=exc.status_code,
                error=exc.message,
            )
            return Failed(query=query, reason=exc.message or self._settings.default_error_message)
        except Exception as exc:
            logger.exception(
                "search_failed",
                query=query,
                kind="unexpected",
                exception_type=exc.__class__.__name__,
            )
            return Failed(query=query, reason=self._settings.default_error_message)

        if response.apis:
            logger.info("search_succeeded", query=query, results=len(response.apis))
            return Success(query=query, items=tuple(response.apis))

        message = response.message or self._settings.default_empty_message
        logger.info("search_empty", query=query, message=message)
        return Empty(query=query, reason=message)

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change()


__all__ = ["SearchController"]
