"""View states driven by the search page controllers.

The search lifecycle is a closed set of frozen variants, so a failed search can
never carry results and a successful one can never carry an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from connectapi.domain.models import APIData


class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class _SearchVariant:
    status: ClassVar[SearchStatus]

    query: str = ""

    @property
    def results(self) -> tuple[APIData, ...]:
        return ()

    @property
    def message(self) -> str:
        return ""

    @property
    def error(self) -> str:
        return ""

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True, slots=True)
class Idle(_SearchVariant):
    status: ClassVar[SearchStatus] = SearchStatus.IDLE


@dataclass(frozen=True, slots=True)
class Loading(_SearchVariant):
    status: ClassVar[SearchStatus] = SearchStatus.LOADING


@dataclass(frozen=True, slots=True)
class Success(_SearchVariant):
    status: ClassVar[SearchStatus] = SearchStatus.SUCCESS

    items: tuple[APIData, ...] = ()

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("Success requires at least one result")

    @property
    def results(self) -> tuple[APIData, ...]:
        return self.items


@dataclass(frozen=True, slots=True)
class Empty(_SearchVariant):
    status: ClassVar[SearchStatus] = SearchStatus.EMPTY

    reason: str = ""

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class Failed(_SearchVariant):
    status: ClassVar[SearchStatus] = SearchStatus.ERROR

    reason: str = ""

    @property
    def error(self) -> str:
        return self.reason


SearchState = Union[Idle, Loading, Success, Empty, Failed]

TERMINAL_STATUSES = frozenset({SearchStatus.SUCCESS, SearchStatus.EMPTY, SearchStatus.ERROR})


@dataclass(frozen=True, slots=True)
class TrendingState:
    loading: bool = False
    items: tuple[APIData, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class SelectionState:
    expanded_id: str | None = None


__all__ = [
    "Empty",
    "Failed",
    "Idle",
    "Loading",
    "SearchState",
    "SearchStatus",
    "SelectionState",
    "Success",
    "TrendingState",
]
