"""Resolve a chosen candidate into a console path."""

from __future__ import annotations

import re
from typing import Callable

from console_search.domain.models import Candidate, DisplayEntry
from console_search.services.exceptions import UnresolvableNavigation

BLOCK_NUMBER_PATTERN = re.compile(r"#(\d+)")


def _block_path(candidate: Candidate) -> str:
    match = BLOCK_NUMBER_PATTERN.search(candidate.title)
    height = match.group(1) if match else candidate.id
    return f"/block/{height}"


FALLBACK_ROUTES: dict[str, Callable[[Candidate], str]] = {
    "block": _block_path,
    "account": lambda c: f"/account/{c.id}",
    "transaction": lambda c: f"/transaction/{c.id}",
    "validator": lambda c: f"/validator/{c.id}",
    "track": lambda c: f"/tracks/{c.id}",
    "username": lambda c: f"/users/{c.title}",
    "playlist": lambda c: f"/playlists/{c.id}",
    "album": lambda c: f"/albums/{c.id}",
}


def resolve_path(candidate: DisplayEntry) -> str:
    """Return the server supplied url, or build one from the candidate type."""

    if candidate.is_header:
        raise UnresolvableNavigation(f"Header row {candidate.id!r} is not selectable.")
    if candidate.url:
        return candidate.url

    route = FALLBACK_ROUTES.get(candidate.type)
    if route is None:
        raise UnresolvableNavigation(
            f"No route for candidate {candidate.id!r} of type {candidate.type!r}."
        )
    return route(candidate)


__all__ = ["FALLBACK_ROUTES", "resolve_path"]
