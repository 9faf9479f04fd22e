"""Sample candidates and fakes shared by the test modules."""

from __future__ import annotations

import asyncio

from console_search.domain.models import Candidate, FetchOutcome, FetchSuccess


def make_candidate(id, type, title="", **extra) -> Candidate:
    return Candidate(id=id, type=type, title=title or str(id), **extra)


BLOCK = make_candidate("12345", "block", "Block #12345", subtitle="Added 2 hours ago")
ACCOUNT = make_candidate(
    "0x1234567890123456789012345678901234567890",
    "account",
    "0x1234567890123456789012345678901234567890",
)
TRANSACTION = make_candidate(
    "0xabcdef1234567890abcdef1234567890abcdef1234567890abcdef1234567890",
    "transaction",
    "0xabcdef1234567890abcd...",
)
TRACK = make_candidate(7, "track", "Summer Vibes", subtitle="Track by Artist123")
ARTIST = make_candidate(9, "username", "Artist123", subtitle="Verified Artist")


class StaticFetcher:
    """Answers every query from a fixed table, immediately."""

    def __init__(self, results: dict[str, list[Candidate]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, int]] = []

    async def fetch(self, query: str, generation: int) -> FetchOutcome:
        self.calls.append((query, generation))
        return FetchSuccess(generation=generation, candidates=tuple(self.results.get(query, [])))


class ControlledFetcher:
    """Holds every fetch open until the test resolves it."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []
        self._pending: dict[int, asyncio.Future] = {}

    async def fetch(self, query: str, generation: int) -> FetchOutcome:
        self.calls.append((query, generation))
        future = asyncio.get_running_loop().create_future()
        self._pending[generation] = future
        return await future

    def resolve(self, outcome: FetchOutcome) -> None:
        self._pending.pop(outcome.generation).set_result(outcome)


class RecordingNavigator:
    def __init__(self, error: Exception | None = None) -> None:
        self.paths: list[str] = []
        self.error = error

    async def __call__(self, path: str) -> None:
        self.paths.append(path)
        if self.error is not None:
            raise self.error


async def settle(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)

