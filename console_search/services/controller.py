"""Event driven owner of a typeahead session."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol

from console_search.config import SearchSettings, get_settings
from console_search.domain.models import (
    Effect,
    FetchFailure,
    FetchOutcome,
    Navigate,
    RequestSuggestions,
    ScheduleFlashReset,
    SessionState,
)
from console_search.logging import logger
from console_search.services import transitions
from console_search.services.transitions import Transition

Navigator = Callable[[str], Awaitable[None]]
Listener = Callable[[SessionState], None]


class Fetcher(Protocol):
    async def fetch(self, query: str, generation: int) -> FetchOutcome: ...


class SearchController:
    """Applies UI events to the session state and runs the resulting effects.

    Events are plain synchronous calls made from the running event loop. Fetches,
    the no-results flash timer and navigation are scheduled as tasks; their results
    come back through the same transition functions, so the state only ever changes
    in one place.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        navigator: Navigator,
        settings: SearchSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._fetcher = fetcher
        self._navigator = navigator
        self._state = SessionState()
        self._listeners: list[Listener] = []
        self._work: set[asyncio.Task] = set()
        self._timers: set[asyncio.Task] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_input(self, text: str) -> None:
        self._apply(transitions.input_changed(self._state, text))

    def on_select(self, candidate_id: str | int) -> None:
        self._apply(transitions.candidate_selected(self._state, candidate_id))

    def on_keydown(self, key: str) -> None:
        self._apply(transitions.key_pressed(self._state, key))

    async def drain(self) -> None:
        """Wait until no fetch or navigation is outstanding."""

        while self._work:
            await asyncio.gather(*list(self._work))

    async def aclose(self) -> None:
        """Unmount: drop pending work and start over with a blank session."""

        pending = [*self._work, *self._timers]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._set_state(transitions.reset(self._state))

    def _apply(self, transition: Transition) -> None:
        self._set_state(transition.state)
        for effect in transition.effects:
            self._run(effect)

    def _set_state(self, state: SessionState) -> None:
        previous = self._state
        if state == previous:
            return
        self._state = state
        if state.phase is not previous.phase:
            logger.debug(
                "search_phase_changed",
                previous=previous.phase.value,
                phase=state.phase.value,
                generation=state.request_generation,
                reason=state.no_results_reason.value if state.no_results_reason else None,
            )
        for listener in list(self._listeners):
            listener(state)

    def _run(self, effect: Effect) -> None:
        if isinstance(effect, RequestSuggestions):
            self._spawn(self._fetch(effect), self._work)
        elif isinstance(effect, ScheduleFlashReset):
            self._spawn(self._expire_flash(effect.token), self._timers)
        elif isinstance(effect, Navigate):
            self._spawn(self._navigate(effect.path), self._work)

    def _spawn(self, coro: Awaitable[None], bucket: set[asyncio.Task]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        bucket.add(task)
        task.add_done_callback(bucket.discard)

    async def _fetch(self, effect: RequestSuggestions) -> None:
        delay = self.settings.interaction.debounce_ms / 1000
        if delay:
            await asyncio.sleep(delay)
            if effect.generation != self._state.request_generation:
                logger.debug("search_fetch_superseded", generation=effect.generation)
                return
        try:
            outcome = await self._fetcher.fetch(effect.query, effect.generation)
        except Exception as exc:
            logger.exception(
                "search_fetcher_crashed", query=effect.query, generation=effect.generation
            )
            outcome = FetchFailure(generation=effect.generation, reason=str(exc))
        if outcome.generation != self._state.request_generation:
            logger.debug(
                "search_fetch_stale",
                generation=outcome.generation,
                current=self._state.request_generation,
            )
        self._apply(
            transitions.fetch_resolved(
                self._state,
                outcome,
                intent_mode=self.settings.interaction.intent_mode,
            )
        )

    async def _expire_flash(self, token: int) -> None:
        await asyncio.sleep(self.settings.interaction.no_results_flash_ms / 1000)
        self._apply(transitions.flash_expired(self._state, token))

    async def _navigate(self, path: str) -> None:
        logger.info("search_navigating", path=path, query=self._state.query)
        try:
            await self._navigator(path)
        except Exception:
            logger.exception("search_navigation_failed", path=path)
            self._apply(transitions.selection_aborted(self._state))


__all__ = ["Fetcher", "Listener", "Navigator", "SearchController"]
