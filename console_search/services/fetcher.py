"""Client for the console search endpoint."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from console_search.config import EndpointSettings
from console_search.domain.models import Candidate, FetchFailure, FetchOutcome, FetchSuccess
from console_search.logging import logger
from console_search.services.exceptions import FetchError


class SuggestionFetcher:
    """Issues one ``GET /search`` per call and reports the outcome.

    The endpoint does all matching and ranking; nothing is cached or retried here.
    Rate limiting is up to the caller.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: EndpointSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or EndpointSettings()

    async def fetch(self, query: str, generation: int) -> FetchOutcome:
        try:
            candidates = await self._request(query)
        except FetchError as exc:
            logger.warning(
                "search_fetch_failed",
                query=query,
                generation=generation,
                error=str(exc),
            )
            return FetchFailure(generation=generation, reason=str(exc))

        logger.debug(
            "search_fetch_completed",
            query=query,
            generation=generation,
            count=len(candidates),
        )
        return FetchSuccess(generation=generation, candidates=tuple(candidates))

    async def _request(self, query: str) -> list[Candidate]:
        try:
            response = await self._client.get(
                self._settings.search_url(),
                params={"q": query},
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = _error_detail(exc.response)
            raise FetchError(
                f"Search request failed ({exc.response.status_code}): {detail}"
            ) from exc
        except httpx.RequestError as exc:
            raise FetchError(f"Search request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError("Search response is not valid JSON.") from exc
        return _parse_results(data)


def _parse_results(data: Any) -> list[Candidate]:
    if not isinstance(data, dict):
        raise FetchError("Search response must be a JSON object.")
    if data.get("error") is not None:
        raise FetchError(f"Search endpoint reported an error: {data['error']}")

    records = data.get("results") or []
    if not isinstance(records, list):
        raise FetchError("Search results must be a list.")
    try:
        return [Candidate.model_validate(record) for record in records]
    except ValidationError as exc:
        raise FetchError(f"Malformed search result: {exc.errors()[0]['msg']}") from exc


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return response.text[:500]


__all__ = ["SuggestionFetcher"]
