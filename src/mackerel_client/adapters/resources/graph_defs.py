"""Cliente de definiciones de gráficos (`/api/v0/graph-defs`)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.graph_defs import HostGraphDefInput
from mackerel_client.core.interfaces.fetcher import Fetcher


def to_raw_host_graph_def(graph_def: HostGraphDefInput) -> dict[str, Any]:
    return compact({
        "name": graph_def.name,
        "displayName": graph_def.display_name,
        "unit": graph_def.unit,
        "metrics": [
            compact({
                "name": metric.name,
                "displayName": metric.display_name,
                "isStacked": metric.is_stacked,
            })
            for metric in graph_def.metrics
        ],
    })


class GraphDefsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def create_host_graph_defs(self, graph_defs: Sequence[HostGraphDefInput]) -> None:
        await self._fetcher.fetch(
            "POST",
            "/api/v0/graph-defs/create",
            body=[to_raw_host_graph_def(graph_def) for graph_def in graph_defs],
        )
