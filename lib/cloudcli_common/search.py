"""Searchable environment list for resource-locator pickers.

Fetches the full environment list on every search unless a cache TTL is
configured. There is no pagination; errors from the fetch propagate.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from .models import Environment, SearchResult
from .protocol import CloudCliApi

logger = logging.getLogger(__name__)


def filter_environments(
    environments: list[dict[str, Any]], filter: str | None = None
) -> list[SearchResult]:
    """Keep environments whose name, id or subdomain contains ``filter``.

    Matching is case-insensitive. No filter keeps everything. Entries that
    are not objects are skipped.
    """
    results = []
    for raw in environments:
        if not isinstance(raw, dict):
            logger.debug("search: skipping non-object entry %r", raw)
            continue
        env = Environment.model_validate(raw)
        if filter and not env.matches(filter):
            continue
        results.append(
            SearchResult(
                label=env.label(),
                value=env.id or "",
                url=env.access_url,
            )
        )
    return results


class EnvironmentSearch:
    """Query-then-filter over ``GET /environments``.

    With ``cache_ttl`` > 0 the fetched list is reused for that many seconds,
    so typing in the picker does not refetch on every keystroke.
    """

    def __init__(self, client: CloudCliApi, cache_ttl: float = 0.0) -> None:
        self._client = client
        self._cache_ttl = cache_ttl
        self._cached: list[dict[str, Any]] | None = None
        self._fetched_at = 0.0

    async def search(self, filter: str | None = None) -> list[SearchResult]:
        environments = await self._environments()
        results = filter_environments(environments, filter)
        logger.debug(
            "search: %d of %d environments match %r",
            len(results),
            len(environments),
            filter,
        )
        return results

    def invalidate(self) -> None:
        self._cached = None

    async def _environments(self) -> list[dict[str, Any]]:
        now = time.monotonic()
        if (
            self._cached is not None
            and self._cache_ttl > 0
            and now - self._fetched_at < self._cache_ttl
        ):
            return self._cached
        environments = await self._client.list_environments()
        if self._cache_ttl > 0:
            self._cached = environments
            self._fetched_at = now
        return environments
