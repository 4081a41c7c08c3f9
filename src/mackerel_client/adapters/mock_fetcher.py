"""Fetcher en memoria para tests.

Uso:

    fetcher = MockFetcher().mock("GET", "/api/v0/org", lambda opts: {"name": "x"})
    client = MackerelClient(fetcher=fetcher)
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from mackerel_client.core.errors import NotMockedError
from mackerel_client.core.interfaces.fetcher import FetchMethod, FetchOptions, Fetcher, QueryParams

MockHandler = Callable[[FetchOptions], Any]


class MockFetcher(Fetcher):
    """Despacha cada petición al handler registrado bajo `"METHOD path"`."""

    def __init__(self) -> None:
        self._handlers: dict[str, MockHandler] = {}

    def mock(self, method: FetchMethod, path: str, handler: MockHandler) -> MockFetcher:
        self._handlers[f"{method} {path}"] = handler
        return self

    async def fetch(
        self,
        method: FetchMethod,
        path: str,
        *,
        params: QueryParams | None = None,
        body: Any = None,
    ) -> Any:
        handler = self._handlers.get(f"{method} {path}")
        if handler is None:
            raise NotMockedError(method, path)
        result = handler(FetchOptions(params=params, body=body))
        if inspect.isawaitable(result):
            result = await result
        return result
