"""Cliente de anotaciones de gráficos (`/api/v0/graph-annotations`)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, NotRequired, TypedDict

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.graph_annotations import CreateGraphAnnotationInput, GraphAnnotation
from mackerel_client.core.domain.timestamps import from_epoch_seconds, to_epoch_seconds
from mackerel_client.core.interfaces.fetcher import Fetcher

RawGraphAnnotation = TypedDict(
    "RawGraphAnnotation",
    {
        "id": str,
        "title": str,
        "description": str,
        "from": int,
        "to": int,
        "service": str,
        "roles": NotRequired[list[str] | None],
    },
)


def from_raw_graph_annotation(raw: RawGraphAnnotation) -> GraphAnnotation:
    return GraphAnnotation(
        id=raw["id"],
        title=raw["title"],
        description=raw.get("description") or "",
        from_=from_epoch_seconds(raw["from"]),
        to=from_epoch_seconds(raw["to"]),
        service_name=raw["service"],
        role_names=raw.get("roles") or [],
    )


def to_raw_create_graph_annotation_input(input: CreateGraphAnnotationInput | GraphAnnotation) -> dict[str, Any]:
    if isinstance(input, GraphAnnotation):
        input = CreateGraphAnnotationInput.from_entity(input)
    return compact({
        "title": input.title,
        "description": input.description,
        "from": to_epoch_seconds(input.from_),
        "to": to_epoch_seconds(input.to),
        "service": input.service_name,
        "roles": list(input.role_names) if input.role_names is not None else None,
    })


class GraphAnnotationsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self, service_name: str, *, from_: datetime, to: datetime) -> list[GraphAnnotation]:
        params = [
            ("service", service_name),
            ("from", str(to_epoch_seconds(from_))),
            ("to", str(to_epoch_seconds(to))),
        ]
        res = await self._fetcher.fetch("GET", "/api/v0/graph-annotations", params=params)
        return [from_raw_graph_annotation(raw) for raw in res["graphAnnotations"]]

    async def create(self, input: CreateGraphAnnotationInput | GraphAnnotation) -> GraphAnnotation:
        res: RawGraphAnnotation = await self._fetcher.fetch(
            "POST",
            "/api/v0/graph-annotations",
            body=to_raw_create_graph_annotation_input(input),
        )
        return from_raw_graph_annotation(res)

    async def update(
        self,
        annotation_id: str,
        input: CreateGraphAnnotationInput | GraphAnnotation,
    ) -> GraphAnnotation:
        res: RawGraphAnnotation = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/graph-annotations/{annotation_id}",
            body=to_raw_create_graph_annotation_input(input),
        )
        return from_raw_graph_annotation(res)

    async def delete(self, annotation_id: str) -> GraphAnnotation:
        res: RawGraphAnnotation = await self._fetcher.fetch(
            "DELETE",
            f"/api/v0/graph-annotations/{annotation_id}",
            body={},
        )
        return from_raw_graph_annotation(res)
