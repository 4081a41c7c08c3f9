"""Cliente de alertas (`/api/v0/alerts`)."""

from __future__ import annotations

from typing import NotRequired, TypedDict

from mackerel_client.core.domain.alerts import (
    AnomalyDetectionAlert,
    Alert,
    AlertPage,
    AlertStatus,
    CheckAlert,
    ConnectivityAlert,
    ExpressionAlert,
    ExternalAlert,
    HostAlert,
    QueryAlert,
    QueryAlertSeries,
    ServiceAlert,
    UpdateAlertInput,
)
from mackerel_client.core.domain.timestamps import from_epoch_seconds
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawQueryAlertSeries(TypedDict):
    name: str
    labels: dict[str, str]


class RawAlert(TypedDict):
    id: str
    type: str
    status: AlertStatus
    openedAt: int
    closedAt: NotRequired[int | None]
    reason: NotRequired[str | None]
    memo: str
    monitorId: str
    hostId: NotRequired[str]
    value: NotRequired[float | None]
    message: NotRequired[str]
    series: NotRequired[RawQueryAlertSeries]


class RawAlertPage(TypedDict):
    alerts: list[RawAlert]
    nextId: NotRequired[str | None]


def _base_fields(raw: RawAlert) -> dict:
    closed_at = raw.get("closedAt")
    is_closed = isinstance(closed_at, (int, float))
    return {
        "id": raw["id"],
        "status": raw["status"],
        "opened_at": from_epoch_seconds(raw["openedAt"]),
        "is_closed": is_closed,
        "closed_at": from_epoch_seconds(closed_at) if is_closed else None,
        "close_reason": raw.get("reason"),
        "memo": raw["memo"],
        "monitor_id": raw["monitorId"],
    }


def from_raw_alert(raw: RawAlert) -> Alert:
    base = _base_fields(raw)
    match raw["type"]:
        case "connectivity":
            return ConnectivityAlert(**base, host_id=raw["hostId"])
        case "host":
            return HostAlert(**base, host_id=raw["hostId"], value=raw["value"])
        case "service":
            return ServiceAlert(**base, value=raw["value"])
        case "external":
            return ExternalAlert(**base, value=raw.get("value"), message=raw["message"])
        case "expression":
            return ExpressionAlert(**base, value=raw.get("value"))
        case "anomalyDetection":
            return AnomalyDetectionAlert(**base, host_id=raw["hostId"])
        case "query":
            series = raw["series"]
            return QueryAlert(
                **base,
                value=raw["value"],
                series=QueryAlertSeries(name=series["name"], labels=dict(series["labels"])),
            )
        case "check":
            return CheckAlert(**base, host_id=raw["hostId"], message=raw["message"])
        case unknown:
            raise UnknownTypeError("alert", unknown, raw)


class AlertsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(
        self,
        *,
        include_closed: bool = False,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> AlertPage:
        """Lista alertas, más recientes primero.

        Para paginar, pasar el `cursor` de la página anterior. Las alertas
        cerradas solo se incluyen con `include_closed=True`.
        """

        params: list[tuple[str, str]] = []
        if include_closed:
            params.append(("withClosed", "true"))
        if limit is not None:
            params.append(("limit", str(limit)))
        if cursor is not None:
            params.append(("nextId", cursor))
        res: RawAlertPage = await self._fetcher.fetch("GET", "/api/v0/alerts", params=params)
        return AlertPage(
            alerts=[from_raw_alert(raw) for raw in res["alerts"]],
            cursor=res.get("nextId"),
        )

    async def get(self, alert_id: str) -> Alert:
        res: RawAlert = await self._fetcher.fetch("GET", f"/api/v0/alerts/{alert_id}")
        return from_raw_alert(res)

    async def update(self, alert_id: str, input: UpdateAlertInput) -> None:
        await self._fetcher.fetch("PUT", f"/api/v0/alerts/{alert_id}", body={"memo": input.memo})

    async def close(self, alert_id: str, reason: str) -> Alert:
        res: RawAlert = await self._fetcher.fetch(
            "POST",
            f"/api/v0/alerts/{alert_id}/close",
            body={"reason": reason},
        )
        return from_raw_alert(res)
