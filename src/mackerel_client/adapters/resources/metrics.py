"""Cliente de métricas: lectura de series y envío a la TSDB.

El envío acepta `{nombre: [puntos]}` (o `{host: {nombre: [puntos]}}` en bulk)
y se aplana preservando el orden de inserción.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, TypedDict

from mackerel_client.core.domain.metrics import DataPoint
from mackerel_client.core.domain.timestamps import from_epoch_seconds, to_epoch_seconds
from mackerel_client.core.interfaces.fetcher import Fetcher

MetricDataPoints = Mapping[str, Sequence[DataPoint]]


class RawDataPoint(TypedDict):
    time: int
    value: float


def from_raw_data_point(raw: RawDataPoint) -> DataPoint:
    return DataPoint(time=from_epoch_seconds(raw["time"]), value=raw["value"])


def _range_params(name: str, from_: datetime, to: datetime) -> list[tuple[str, str]]:
    return [
        ("name", name),
        ("from", str(to_epoch_seconds(from_))),
        ("to", str(to_epoch_seconds(to))),
    ]


def _flatten(data_points: MetricDataPoints, **extra: Any) -> list[dict[str, Any]]:
    return [
        {**extra, "name": name, "time": to_epoch_seconds(point.time), "value": point.value}
        for name, points in data_points.items()
        for point in points
    ]


class MetricsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def get_host_metric_data_points(
        self,
        host_id: str,
        name: str,
        *,
        from_: datetime,
        to: datetime,
    ) -> list[DataPoint]:
        res = await self._fetcher.fetch(
            "GET",
            f"/api/v0/hosts/{host_id}/metrics",
            params=_range_params(name, from_, to),
        )
        return [from_raw_data_point(raw) for raw in res["metrics"]]

    async def get_service_metric_data_points(
        self,
        service_name: str,
        name: str,
        *,
        from_: datetime,
        to: datetime,
    ) -> list[DataPoint]:
        res = await self._fetcher.fetch(
            "GET",
            f"/api/v0/services/{service_name}/metrics",
            params=_range_params(name, from_, to),
        )
        return [from_raw_data_point(raw) for raw in res["metrics"]]

    async def get_latest_host_metric_data_points(
        self,
        host_ids: Sequence[str],
        names: Sequence[str],
    ) -> dict[str, dict[str, DataPoint]]:
        """Último punto por host y métrica: `{host_id: {name: DataPoint}}`.

        Los pares sin datos no aparecen en el resultado.
        """

        params = [("hostId", host_id) for host_id in host_ids]
        params += [("name", name) for name in names]
        res = await self._fetcher.fetch("GET", "/api/v0/tsdb/latest", params=params)
        return {
            host_id: {name: from_raw_data_point(raw) for name, raw in metrics.items() if raw is not None}
            for host_id, metrics in res["tsdbLatest"].items()
        }

    async def post_host_metrics(self, host_id: str, data_points: MetricDataPoints) -> None:
        await self._fetcher.fetch("POST", "/api/v0/tsdb", body=_flatten(data_points, hostId=host_id))

    async def bulk_post_host_metrics(self, data_points: Mapping[str, MetricDataPoints]) -> None:
        body: list[dict[str, Any]] = []
        for host_id, host_data_points in data_points.items():
            body.extend(_flatten(host_data_points, hostId=host_id))
        await self._fetcher.fetch("POST", "/api/v0/tsdb", body=body)

    async def post_service_metrics(self, service_name: str, data_points: MetricDataPoints) -> None:
        await self._fetcher.fetch(
            "POST",
            f"/api/v0/services/{service_name}/tsdb",
            body=_flatten(data_points),
        )
