# bgsearch/client.py
"""Async client for the search API plus the autocomplete request policy.

``Autocomplete`` debounces keystrokes and makes sure only the most recent
lookup can publish results: every new value cancels the pending lookup and
bumps a token, and a response whose token is no longer current is dropped.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional

import httpx

from bgsearch.utils.logging import log_warning

LIST_PARAMS = {"designers", "artists", "publishers", "mechanics", "categories", "awards"}


def build_search_params(page: int = 1, limit: int = 20, **filters) -> dict:
    """Build ``/games/search`` query params from form values.

    Keyword names are the API parameter names (``playerCount``, ``designers``...).
    Blank values are dropped, name lists are joined with commas, page and
    limit are always sent.
    """
    params = {}
    for key, value in filters.items():
        if value is None:
            continue
        if key in LIST_PARAMS:
            names = [str(v).strip() for v in value if str(v).strip()]
            if names:
                params[key] = ",".join(names)
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        params[key] = str(value)
    params["page"] = str(page)
    params["limit"] = str(limit)
    return params


class BoardGameSearchClient:
    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 10.0):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[dict] = None):
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def artists(self, search: str = "") -> list:
        return await self._get("/artists", {"search": search})

    async def designers(self, search: str = "") -> list:
        return await self._get("/designers", {"search": search})

    async def publishers(self, search: str = "") -> list:
        return await self._get("/publishers", {"search": search})

    async def categories(self) -> list:
        return await self._get("/categories")

    async def genres(self) -> list:
        return await self._get("/genres")

    async def mechanics(self) -> list:
        return await self._get("/mechanics")

    async def award_names(self, search: str = "") -> list:
        return await self._get("/awards/names", {"search": search})

    async def award_types(self) -> list:
        return await self._get("/awards/types")

    async def game_names(self, search: str) -> list:
        return await self._get("/games/names", {"search": search})

    async def search_games(self, page: int = 1, limit: int = 20, **filters) -> dict:
        return await self._get("/games/search", build_search_params(page=page, limit=limit, **filters))

    async def game(self, game_id: int) -> dict:
        return await self._get(f"/games/{game_id}")


class Autocomplete:
    """Debounced lookup state for one text input."""

    def __init__(self, fetch: Callable[[str], Awaitable[list]], delay: float = 0.3):
        self.fetch = fetch
        self.delay = delay
        self.value = ""
        self.results: List = []
        self.error: Optional[str] = None
        self.loading = False
        self.open = False
        self._token = 0
        self._task: Optional[asyncio.Task] = None

    def update(self, value: str) -> Optional[asyncio.Task]:
        """New input value. Returns the scheduled lookup task, if any."""
        self.value = value
        self._token += 1
        self._cancel_pending()

        if not value.strip():
            self.results = []
            self.error = None
            self.open = False
            return None

        self._task = asyncio.create_task(self._lookup(self._token, value.strip(), self.delay))
        return self._task

    def retry(self) -> Optional[asyncio.Task]:
        """Re-issue the lookup for the current value immediately."""
        if not self.value.strip():
            return None
        self._token += 1
        self._cancel_pending()
        self._task = asyncio.create_task(self._lookup(self._token, self.value.strip(), 0))
        return self._task

    def close(self):
        """Hide the dropdown and drop any lookup still in flight."""
        self._token += 1
        self._cancel_pending()
        self.open = False

    def _cancel_pending(self):
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.loading = False

    async def _lookup(self, token: int, term: str, delay: float):
        if delay:
            await asyncio.sleep(delay)
        self.loading = True
        try:
            items = await self.fetch(term)
        except Exception as exc:
            if token != self._token:
                return
            log_warning(f"Autocomplete lookup for {term!r} failed: {exc}")
            self.results = []
            self.error = str(exc) or type(exc).__name__
            self.loading = False
            self.open = False
            return

        if token != self._token:
            return
        self.results = list(items)
        self.error = None
        self.loading = False
        self.open = bool(self.results)
