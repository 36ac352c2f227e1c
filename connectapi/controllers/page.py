"""View-model composing identity, search, trending and selection for the renderer."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol

from connectapi.config import AppSettings
from connectapi.controllers.search import SearchBackendProtocol, SearchController
from connectapi.controllers.selection import SelectionTracker
from connectapi.controllers.trending import TrendingBackendProtocol, TrendingProvider
from connectapi.domain.models import APIData, Identity
from connectapi.domain.state import SearchState, SearchStatus, SelectionState, TrendingState
from connectapi.logging import logger
from connectapi.services.identity import IdentityResolver
from connectapi.utils.tasks import TaskTracker

Listener = Callable[["SearchPage"], None]


class DirectoryBackend(SearchBackendProtocol, TrendingBackendProtocol, Protocol):
    pass


class SearchPage:
    """Everything the search page renders, plus the two user actions.

    ``initialize`` must run inside an event loop: it resolves the identity
    synchronously and starts the one-off trending fetch in the background.
    """

    def __init__(
        self,
        backend: DirectoryBackend,
        identity_resolver: IdentityResolver,
        settings: AppSettings | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._identity_resolver = identity_resolver
        self._identity: Identity | None = None
        self._listeners: list[Listener] = []
        self._tasks = TaskTracker()
        self._search = SearchController(
            backend,
            tasks=self._tasks,
            settings=self._settings.search,
            on_change=self._notify,
        )
        self._trending = TrendingProvider(backend, tasks=self._tasks, on_change=self._notify)
        self._selection = SelectionTracker(on_change=self._notify)

    def initialize(self) -> None:
        if self._identity is not None:
            return
        self._identity = self._identity_resolver.resolve()
        logger.info("search_page_initialized", display_name=self._identity.display_name)
        self._notify()
        self._trending.fetch()

    @property
    def identity(self) -> Identity:
        if self._identity is None:
            return Identity(display_name=self._settings.identity.default_display_name)
        return self._identity

    @property
    def search_state(self) -> SearchState:
        return self._search.state

    @property
    def trending_state(self) -> TrendingState:
        return self._trending.state

    @property
    def selection(self) -> SelectionState:
        return self._selection.state

    def submit(self, query: str) -> asyncio.Task[SearchState]:
        return self._search.submit(query)

    def toggle(self, item_id: str) -> None:
        self._selection.toggle(item_id)

    def is_expanded(self, item_id: str) -> bool:
        return self._selection.is_expanded(item_id)

    @property
    def show_trending(self) -> bool:
        state = self._search.state
        if state.status is SearchStatus.LOADING:
            return False
        return not state.results and not state.message

    @property
    def visible_trending(self) -> tuple[APIData, ...]:
        if not self.show_trending:
            return ()
        return self._trending.state.items[: self._settings.trending.display_limit]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_idle(self) -> None:
        await self._tasks.wait_idle()

    async def aclose(self) -> None:
        await self._tasks.wait_idle()
        self._listeners.clear()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("search_page_listener_failed", listener=repr(listener))


__all__ = ["SearchPage"]
