"""Named state transitions of a typeahead session.

Every function takes the current :class:`SessionState` plus one event and returns a
:class:`Transition`: the next state and the effects the controller has to run.
Nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import replace
from typing import NamedTuple, Sequence

from console_search.config import IntentMode
from console_search.domain.models import (
    Candidate,
    Effect,
    FetchFailure,
    FetchOutcome,
    IntentLabel,
    Navigate,
    NoResultsReason,
    RequestSuggestions,
    ScheduleFlashReset,
    SessionPhase,
    SessionState,
)
from console_search.services.classifier import classify
from console_search.services.exceptions import UnresolvableNavigation
from console_search.services.grouping import group, selectable_indexes
from console_search.services.navigation import resolve_path

KEY_CONFIRM = "Enter"
KEY_NEXT = "ArrowDown"
KEY_PREVIOUS = "ArrowUp"
KEY_DISMISS = "Escape"

CHAIN_TYPES = frozenset({"block", "account", "transaction", "validator"})
INTENT_TYPES: dict[IntentLabel, frozenset[str]] = {
    IntentLabel.ACCOUNT: frozenset({"account", "validator"}),
    IntentLabel.TRANSACTION: frozenset({"transaction"}),
    IntentLabel.BLOCK: frozenset({"block"}),
}


class Transition(NamedTuple):
    state: SessionState
    effects: tuple[Effect, ...] = ()


def reset(state: SessionState) -> SessionState:
    """Fresh session that keeps the monotonic counters of ``state``."""

    return SessionState(
        request_generation=state.request_generation + 1,
        flash_token=state.flash_token,
    )


def input_changed(state: SessionState, text: str) -> Transition:
    if state.phase is SessionPhase.SELECTING:
        return Transition(state)

    if state.suppress_next_fetch:
        state = replace(state, suppress_next_fetch=False)
        if text == state.query:
            return Transition(state)

    if not text.strip():
        return Transition(reset(state))

    generation = state.request_generation + 1
    intent = classify(text)
    if intent is IntentLabel.UNSET:
        rejected = replace(
            state,
            query=text,
            intent=IntentLabel.UNSET,
            request_generation=generation,
        )
        return _no_results(rejected, NoResultsReason.CLASSIFICATION_REJECT)

    loading = replace(
        state,
        query=text,
        intent=intent,
        request_generation=generation,
        phase=SessionPhase.LOADING,
        is_loading=True,
        is_open=bool(state.display_list),
        no_results_reason=None,
    )
    return Transition(loading, (RequestSuggestions(query=text, generation=generation),))


def fetch_resolved(
    state: SessionState,
    outcome: FetchOutcome,
    intent_mode: IntentMode = "strict",
) -> Transition:
    if outcome.generation != state.request_generation:
        return Transition(state)
    if state.phase is SessionPhase.SELECTING:
        return Transition(state)
    if isinstance(outcome, FetchFailure):
        return _no_results(state, NoResultsReason.FETCH_FAILURE)

    intent = classify(state.query)
    candidates: Sequence[Candidate] = outcome.candidates
    if intent_mode == "prefilter":
        candidates = filter_by_intent(candidates, intent)
    if not candidates:
        return _no_results(state, NoResultsReason.EMPTY_RESULT)

    display_list = group(candidates)
    if intent_mode == "mixed" and len({c.type for c in candidates}) > 1:
        intent = IntentLabel.ALL

    showing = replace(
        state,
        intent=intent,
        display_list=display_list,
        phase=SessionPhase.SHOWING,
        is_open=True,
        is_loading=False,
        highlighted_index=None,
        no_results_flash=False,
        no_results_reason=None,
    )
    return Transition(showing)


def flash_expired(state: SessionState, token: int) -> Transition:
    if token != state.flash_token or not state.no_results_flash:
        return Transition(state)
    phase = SessionPhase.IDLE if state.phase is SessionPhase.NO_RESULTS else state.phase
    return Transition(replace(state, no_results_flash=False, phase=phase))


def candidate_selected(state: SessionState, candidate_id: str | int) -> Transition:
    if state.phase is SessionPhase.SELECTING:
        return Transition(state)
    candidate = _find_candidate(state, candidate_id)
    if candidate is None:
        return Transition(state)
    return _select(state, candidate)


def selection_aborted(state: SessionState) -> Transition:
    if state.phase is not SessionPhase.SELECTING:
        return Transition(state)
    return Transition(_closed(state, phase=SessionPhase.IDLE))


def key_pressed(state: SessionState, key: str) -> Transition:
    if state.phase is SessionPhase.SELECTING:
        return Transition(state)

    if key == KEY_CONFIRM:
        candidate = state.highlighted or next(iter(state.candidates), None)
        if candidate is not None:
            return _select(state, candidate)
        if state.query.strip():
            return _no_results(state, NoResultsReason.EMPTY_RESULT)
        return Transition(state)

    if key in (KEY_NEXT, KEY_PREVIOUS):
        return Transition(_move_highlight(state, forward=key == KEY_NEXT))

    if key == KEY_DISMISS:
        return Transition(
            _closed(
                replace(state, request_generation=state.request_generation + 1),
                phase=SessionPhase.IDLE,
            )
        )
    return Transition(state)


def filter_by_intent(
    candidates: Sequence[Candidate], intent: IntentLabel
) -> list[Candidate]:
    if intent is IntentLabel.CONTENT:
        return [c for c in candidates if c.type not in CHAIN_TYPES]
    allowed = INTENT_TYPES.get(intent)
    if allowed is None:
        return list(candidates)
    return [c for c in candidates if c.type in allowed]


def _select(state: SessionState, candidate: Candidate) -> Transition:
    selecting = _closed(
        replace(
            state,
            query=candidate.title,
            request_generation=state.request_generation + 1,
            suppress_next_fetch=True,
        ),
        phase=SessionPhase.SELECTING,
        keep_display=True,
    )
    try:
        path = resolve_path(candidate)
    except UnresolvableNavigation:
        return Transition(_closed(selecting, phase=SessionPhase.IDLE))
    return Transition(selecting, (Navigate(path=path),))


def _no_results(state: SessionState, reason: NoResultsReason) -> Transition:
    token = state.flash_token + 1
    flashing = replace(
        _closed(state, phase=SessionPhase.NO_RESULTS),
        no_results_flash=True,
        no_results_reason=reason,
        flash_token=token,
    )
    return Transition(flashing, (ScheduleFlashReset(token=token),))


def _closed(
    state: SessionState, *, phase: SessionPhase, keep_display: bool = False
) -> SessionState:
    return replace(
        state,
        display_list=state.display_list if keep_display else (),
        is_open=False,
        is_loading=False,
        highlighted_index=None,
        phase=phase,
    )


def _move_highlight(state: SessionState, *, forward: bool) -> SessionState:
    indexes = selectable_indexes(state.display_list)
    if not indexes or not state.is_open:
        return state
    current = state.highlighted_index
    if current is None or current not in indexes:
        target = indexes[0] if forward else None
    else:
        position = indexes.index(current) + (1 if forward else -1)
        if position < 0:
            target = None
        else:
            target = indexes[min(position, len(indexes) - 1)]
    return replace(state, highlighted_index=target)


def _find_candidate(state: SessionState, candidate_id: str | int) -> Candidate | None:
    # Ids come back from the endpoint as numbers or strings; the UI only has text.
    for candidate in state.candidates:
        if str(candidate.id) == str(candidate_id):
            return candidate
    return None


__all__ = [
    "KEY_CONFIRM",
    "KEY_DISMISS",
    "KEY_NEXT",
    "KEY_PREVIOUS",
    "Transition",
    "candidate_selected",
    "fetch_resolved",
    "filter_by_intent",
    "flash_expired",
    "input_changed",
    "key_pressed",
    "reset",
    "selection_aborted",
]
