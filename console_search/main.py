"""Interactive console entrypoint.

Every stdin line is typed into the search box. Lines starting with ``/`` are
commands: ``/enter``, ``/down``, ``/up`` and ``/esc`` press keys, ``/select <id>``
picks a candidate and ``/quit`` leaves.
"""

from __future__ import annotations

import asyncio
import sys

import httpx

from console_search.config import get_settings
from console_search.domain.models import SessionState
from console_search.logging import configure_logging, logger
from console_search.services.controller import SearchController
from console_search.services.fetcher import SuggestionFetcher
from console_search.services.transitions import (
    KEY_CONFIRM,
    KEY_DISMISS,
    KEY_NEXT,
    KEY_PREVIOUS,
)

KEY_COMMANDS = {
    "/enter": KEY_CONFIRM,
    "/down": KEY_NEXT,
    "/up": KEY_PREVIOUS,
    "/esc": KEY_DISMISS,
}


def render(state: SessionState) -> str:
    lines = [f"[{state.phase.value}] query={state.query!r} intent={state.intent.value or '-'}"]
    if state.is_loading:
        lines.append("  loading...")
    if state.no_results_flash:
        lines.append("  no results")
    if state.is_open:
        for index, entry in enumerate(state.display_list):
            if entry.is_header:
                lines.append(f"  {entry.title}")
                continue
            marker = ">" if index == state.highlighted_index else " "
            subtitle = f" ({entry.subtitle})" if entry.subtitle else ""
            lines.append(f"  {marker} [{entry.id}] {entry.title}{subtitle}")
    return "\n".join(lines)


def dispatch(controller: SearchController, line: str) -> bool:
    """Feed one console line to the controller; False means quit."""

    command, _, argument = line.partition(" ")
    if command == "/quit":
        return False
    if command in KEY_COMMANDS:
        controller.on_keydown(KEY_COMMANDS[command])
    elif command == "/select":
        controller.on_select(argument.strip())
    else:
        controller.on_input(line)
    return True


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    navigated = asyncio.Event()

    async def navigate(path: str) -> None:
        print(f"-> {settings.endpoint.page_url(path)}")
        navigated.set()

    async with httpx.AsyncClient() as client:
        controller = SearchController(
            SuggestionFetcher(client, settings=settings.endpoint),
            navigate,
            settings=settings,
        )
        controller.subscribe(lambda state: print(render(state)))
        logger.info("console_search_starting", endpoint=settings.endpoint.search_url())
        try:
            while True:
                line = await asyncio.to_thread(sys.stdin.readline)
                if not line or not dispatch(controller, line.rstrip("\n")):
                    break
                await controller.drain()
                if navigated.is_set():
                    break
        finally:
            await controller.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
