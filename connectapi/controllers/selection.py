"""Single expanded-item slot shared by search results and trending entries."""

from __future__ import annotations

from typing import Callable

from connectapi.domain.state import SelectionState


class SelectionTracker:
    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self._state = SelectionState()
        self._on_change = on_change

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def expanded_id(self) -> str | None:
        return self._state.expanded_id

    def toggle(self, item_id: str) -> None:
        current = self._state.expanded_id
        self._state = SelectionState(expanded_id=None if current == item_id else item_id)
        if self._on_change is not None:
            self._on_change()

    def is_expanded(self, item_id: str) -> bool:
        return self._state.expanded_id == item_id


__all__ = ["SelectionTracker"]
