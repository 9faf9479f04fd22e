"""Models shared across the search pipeline and the interaction controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IntentLabel(str, Enum):
    UNSET = ""
    ACCOUNT = "Account"
    TRANSACTION = "Transaction"
    BLOCK = "Block"
    ALL = "All"
    CONTENT = "Content"


class SessionPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SHOWING = "showing"
    NO_RESULTS = "no_results"
    SELECTING = "selecting"


class NoResultsReason(str, Enum):
    CLASSIFICATION_REJECT = "classification_reject"
    FETCH_FAILURE = "fetch_failure"
    EMPTY_RESULT = "empty_result"


class Candidate(BaseModel):
    """One search result record as returned by the console search endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | int
    title: str = ""
    subtitle: str = ""
    type: str = Field(..., min_length=1)
    url: str | None = None
    is_header: Literal[False] = Field(default=False, exclude=True)

    @field_validator("title", "subtitle", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class HeaderEntry(BaseModel):
    """Synthetic row opening a type group in the display list."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: str
    is_header: Literal[True] = True


DisplayEntry = Union[Candidate, HeaderEntry]
DisplayList = tuple[DisplayEntry, ...]


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    generation: int
    candidates: Sequence[Candidate] = ()


@dataclass(frozen=True, slots=True)
class FetchFailure:
    generation: int
    reason: str


FetchOutcome = Union[FetchSuccess, FetchFailure]


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of one typeahead session; replaced, never mutated."""

    query: str = ""
    intent: IntentLabel = IntentLabel.UNSET
    display_list: DisplayList = ()
    is_open: bool = False
    is_loading: bool = False
    no_results_flash: bool = False
    suppress_next_fetch: bool = False
    request_generation: int = 0
    phase: SessionPhase = SessionPhase.IDLE
    flash_token: int = 0
    highlighted_index: int | None = None
    no_results_reason: NoResultsReason | None = None

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return tuple(entry for entry in self.display_list if not entry.is_header)

    @property
    def highlighted(self) -> Candidate | None:
        if self.highlighted_index is None:
            return None
        entry = self.display_list[self.highlighted_index]
        return None if entry.is_header else entry


@dataclass(frozen=True, slots=True)
class RequestSuggestions:
    query: str
    generation: int


@dataclass(frozen=True, slots=True)
class ScheduleFlashReset:
    token: int


@dataclass(frozen=True, slots=True)
class Navigate:
    path: str


Effect = Union[RequestSuggestions, ScheduleFlashReset, Navigate]


__all__ = [
    "Candidate",
    "DisplayEntry",
    "DisplayList",
    "Effect",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "HeaderEntry",
    "IntentLabel",
    "Navigate",
    "NoResultsReason",
    "RequestSuggestions",
    "ScheduleFlashReset",
    "SessionPhase",
    "SessionState",
]
