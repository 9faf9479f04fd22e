"""Turn a flat candidate list into type groups with header rows."""

from __future__ import annotations

from typing import Iterable

from console_search.domain.models import Candidate, DisplayEntry, DisplayList, HeaderEntry

TYPE_HEADERS = {
    "track": "Tracks",
    "username": "Artists",
    "playlist": "Playlists",
    "album": "Albums",
    "block": "Blocks",
    "account": "Accounts",
    "transaction": "Transactions",
    "validator": "Validators",
}


def format_type_header(candidate_type: str) -> str:
    label = TYPE_HEADERS.get(candidate_type)
    if label:
        return label
    return f"{candidate_type[:1].upper()}{candidate_type[1:]}s"


def header_for(candidate_type: str) -> HeaderEntry:
    return HeaderEntry(
        id=f"header-{candidate_type}",
        title=format_type_header(candidate_type),
        type=candidate_type,
    )


def group(candidates: Iterable[DisplayEntry]) -> DisplayList:
    """Bucket candidates by type, keeping first-seen type order and stable order
    within each bucket. Header rows in the input are dropped and rebuilt, so
    regrouping a grouped list is a no-op."""

    buckets: dict[str, list[Candidate]] = {}
    for candidate in candidates:
        if candidate.is_header:
            continue
        buckets.setdefault(candidate.type, []).append(candidate)

    result: list[DisplayEntry] = []
    for candidate_type, items in buckets.items():
        result.append(header_for(candidate_type))
        result.extend(items)
    return tuple(result)


def candidates_of(display_list: Iterable[DisplayEntry]) -> list[Candidate]:
    return [entry for entry in display_list if not entry.is_header]


def selectable_indexes(display_list: DisplayList) -> list[int]:
    return [index for index, entry in enumerate(display_list) if not entry.is_header]


__all__ = [
    "TYPE_HEADERS",
    "candidates_of",
    "format_type_header",
    "group",
    "header_for",
    "selectable_indexes",
]
