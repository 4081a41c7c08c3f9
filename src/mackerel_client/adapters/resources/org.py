"""Cliente de la organización (`/api/v0/org`)."""

from __future__ import annotations

from typing import NotRequired, TypedDict

from mackerel_client.core.domain.org import Org
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawOrg(TypedDict):
    name: str
    displayName: NotRequired[str | None]


class OrgApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def get(self) -> Org:
        res: RawOrg = await self._fetcher.fetch("GET", "/api/v0/org")
        return Org(name=res["name"], display_name=res.get("displayName"))
