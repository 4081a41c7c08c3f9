"""Cliente de monitores (`/api/v0/monitors`) y reportes de check monitoring."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal, NotRequired, TypedDict

import httpx

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.monitors import (
    AnomalyDetectionConditions,
    AnomalyDetectionMonitor,
    BaseMonitor,
    CheckReport,
    ConnectivityMonitor,
    CreateAnomalyDetectionMonitorInput,
    CreateConnectivityMonitorInput,
    CreateExpressionMonitorInput,
    CreateExternalMonitorInput,
    CreateHostMonitorInput,
    CreateMonitorInput,
    CreateQueryMonitorInput,
    CreateServiceMonitorInput,
    ExpressionMonitor,
    ExternalMonitor,
    ExternalMonitorConditions,
    ExternalMonitorRequest,
    HostMonitor,
    InactivityConditions,
    MetricThresholdConditions,
    Monitor,
    MonitorScopes,
    QueryMonitor,
    ServiceMonitor,
    ThresholdConditions,
)
from mackerel_client.core.domain.timestamps import from_epoch_seconds, to_epoch_seconds
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawExternalMonitorHeader(TypedDict):
    name: str
    value: str


class RawMonitor(TypedDict):
    """Forma wire de un monitor. Los campos por variante son `NotRequired`."""

    id: str
    type: str
    name: str
    memo: NotRequired[str | None]
    notificationInterval: NotRequired[int | None]
    isMute: bool
    # connectivity / host / anomalyDetection
    scopes: NotRequired[list[str]]
    excludeScopes: NotRequired[list[str]]
    alertStatusOnGone: NotRequired[str]
    # host / service
    metric: NotRequired[str]
    service: NotRequired[str | None]
    operator: NotRequired[str]
    warning: NotRequired[float | None]
    critical: NotRequired[float | None]
    duration: NotRequired[int]
    maxCheckAttempts: NotRequired[int]
    missingDurationWarning: NotRequired[int | None]
    missingDurationCritical: NotRequired[int | None]
    # external
    url: NotRequired[str]
    method: NotRequired[str]
    headers: NotRequired[list[RawExternalMonitorHeader]]
    requestBody: NotRequired[str | None]
    followRedirect: NotRequired[bool | None]
    skipCertificateVerification: NotRequired[bool | None]
    containsString: NotRequired[str | None]
    responseTimeWarning: NotRequired[float | None]
    responseTimeCritical: NotRequired[float | None]
    responseTimeDuration: NotRequired[int | None]
    certificationExpirationWarning: NotRequired[int | None]
    certificationExpirationCritical: NotRequired[int | None]
    # expression
    expression: NotRequired[str]
    # anomalyDetection
    trainingPeriodFrom: NotRequired[int | None]
    warningSensitivity: NotRequired[str | None]
    criticalSensitivity: NotRequired[str | None]
    # query
    legend: NotRequired[str]
    query: NotRequired[str]


class RawCheckReportSource(TypedDict):
    type: Literal["host"]
    hostId: str


class RawCheckReport(TypedDict):
    name: str
    source: RawCheckReportSource
    status: str
    message: str
    occurredAt: int
    maxCheckAttempts: NotRequired[int]
    notificationInterval: NotRequired[int]


def _scopes_from_raw(raw: RawMonitor) -> MonitorScopes:
    return MonitorScopes(
        include=raw.get("scopes") or None,
        exclude=raw.get("excludeScopes") or None,
    )


def from_raw_monitor(raw: RawMonitor) -> Monitor:
    base: dict[str, Any] = {
        "id": raw["id"],
        "name": raw["name"],
        "memo": raw.get("memo") or "",
        "notification_interval_minutes": raw.get("notificationInterval"),
        "is_muted": raw["isMute"],
    }
    match raw["type"]:
        case "connectivity":
            return ConnectivityMonitor(
                **base,
                scopes=_scopes_from_raw(raw),
                alert_status=raw["alertStatusOnGone"],
            )
        case "host":
            return HostMonitor(
                **base,
                metric_name=raw["metric"],
                scopes=_scopes_from_raw(raw),
                conditions=MetricThresholdConditions(
                    operator=raw["operator"],
                    warning=raw.get("warning"),
                    critical=raw.get("critical"),
                    average_over_data_points=raw["duration"],
                    num_attempts=raw["maxCheckAttempts"],
                ),
            )
        case "service":
            return ServiceMonitor(
                **base,
                service_name=raw["service"],
                metric_name=raw["metric"],
                conditions=MetricThresholdConditions(
                    operator=raw["operator"],
                    warning=raw.get("warning"),
                    critical=raw.get("critical"),
                    average_over_data_points=raw["duration"],
                    num_attempts=raw["maxCheckAttempts"],
                ),
                inactivity_conditions=InactivityConditions(
                    warning_minutes=raw.get("missingDurationWarning"),
                    critical_minutes=raw.get("missingDurationCritical"),
                ),
            )
        case "external":
            return ExternalMonitor(
                **base,
                service_name=raw.get("service"),
                request=ExternalMonitorRequest(
                    url=httpx.URL(raw["url"]),
                    method=raw["method"],
                    headers=httpx.Headers([(h["name"], h["value"]) for h in raw.get("headers") or []]),
                    body=raw.get("requestBody") or "",
                    follow_redirects=raw.get("followRedirect") or False,
                    skip_certificate_verification=raw.get("skipCertificateVerification") or False,
                ),
                conditions=ExternalMonitorConditions(
                    body_must_contain=raw.get("containsString"),
                    response_time_warning_millis=raw.get("responseTimeWarning"),
                    response_time_critical_millis=raw.get("responseTimeCritical"),
                    response_time_average_over_data_points=raw.get("responseTimeDuration"),
                    certificate_expiration_warning_days=raw.get("certificationExpirationWarning"),
                    certificate_expiration_critical_days=raw.get("certificationExpirationCritical"),
                    num_attempts=raw["maxCheckAttempts"],
                ),
            )
        case "expression":
            return ExpressionMonitor(
                **base,
                expression=raw["expression"],
                conditions=ThresholdConditions(
                    operator=raw["operator"],
                    warning=raw.get("warning"),
                    critical=raw.get("critical"),
                ),
            )
        case "anomalyDetection":
            train_from = raw.get("trainingPeriodFrom")
            return AnomalyDetectionMonitor(
                **base,
                scopes=raw["scopes"],
                train_from=from_epoch_seconds(train_from) if isinstance(train_from, (int, float)) else None,
                conditions=AnomalyDetectionConditions(
                    warning=raw.get("warningSensitivity"),
                    critical=raw.get("criticalSensitivity"),
                    num_attempts=raw["maxCheckAttempts"],
                ),
            )
        case "query":
            return QueryMonitor(
                **base,
                query_name=raw["legend"],
                query=raw["query"],
                conditions=ThresholdConditions(
                    operator=raw["operator"],
                    warning=raw.get("warning"),
                    critical=raw.get("critical"),
                ),
            )
        case unknown:
            raise UnknownTypeError("monitor", unknown, raw)


def _headers_to_raw(headers: httpx.Headers | dict[str, str] | None) -> list[RawExternalMonitorHeader] | None:
    if headers is None:
        return None
    if isinstance(headers, httpx.Headers):
        return [{"name": name, "value": value} for name, value in headers.multi_items()]
    return [{"name": name, "value": value} for name, value in headers.items()]


def to_create_monitor_input(monitor: Monitor) -> CreateMonitorInput:
    """Entrada equivalente a un monitor leído, para reenviarlo en un update."""

    match monitor:
        case ConnectivityMonitor():
            return CreateConnectivityMonitorInput.from_entity(monitor)
        case HostMonitor():
            return CreateHostMonitorInput.from_entity(monitor)
        case ServiceMonitor():
            return CreateServiceMonitorInput.from_entity(monitor)
        case ExternalMonitor():
            return CreateExternalMonitorInput.from_entity(monitor)
        case ExpressionMonitor():
            return CreateExpressionMonitorInput.from_entity(monitor)
        case AnomalyDetectionMonitor():
            return CreateAnomalyDetectionMonitorInput.from_entity(monitor)
        case QueryMonitor():
            return CreateQueryMonitorInput.from_entity(monitor)
        case _:
            raise UnknownTypeError("monitor", getattr(monitor, "type", None), monitor)


def to_raw_create_monitor_input(input: CreateMonitorInput | Monitor) -> dict[str, Any]:
    """Aplana la entrada al formato wire; los campos en `None` no se envían.

    Acepta también un monitor leído (`get`/`list`), que se convierte antes con
    `to_create_monitor_input`.
    """

    if isinstance(input, BaseMonitor):
        input = to_create_monitor_input(input)

    base: dict[str, Any] = {
        "name": input.name,
        "memo": input.memo,
        "notificationInterval": input.notification_interval_minutes,
        "isMute": input.is_muted,
    }
    match input:
        case CreateConnectivityMonitorInput():
            scopes = input.scopes
            return compact({
                **base,
                "type": "connectivity",
                "scopes": scopes.include if scopes else None,
                "excludeScopes": scopes.exclude if scopes else None,
                "alertStatusOnGone": input.alert_status or "CRITICAL",
            })
        case CreateHostMonitorInput():
            scopes = input.scopes
            conditions = input.conditions
            return compact({
                **base,
                "type": "host",
                "metric": input.metric_name,
                "scopes": scopes.include if scopes else None,
                "excludeScopes": scopes.exclude if scopes else None,
                "operator": conditions.operator,
                "warning": conditions.warning,
                "critical": conditions.critical,
                "duration": 1 if conditions.average_over_data_points is None else conditions.average_over_data_points,
                "maxCheckAttempts": conditions.num_attempts,
            })
        case CreateServiceMonitorInput():
            conditions = input.conditions
            inactivity = input.inactivity_conditions
            return compact({
                **base,
                "type": "service",
                "service": input.service_name,
                "metric": input.metric_name,
                "operator": conditions.operator,
                "warning": conditions.warning,
                "critical": conditions.critical,
                "duration": 1 if conditions.average_over_data_points is None else conditions.average_over_data_points,
                "maxCheckAttempts": conditions.num_attempts,
                "missingDurationWarning": inactivity.warning_minutes if inactivity else None,
                "missingDurationCritical": inactivity.critical_minutes if inactivity else None,
            })
        case CreateExternalMonitorInput():
            request = input.request
            conditions = input.conditions
            response_time_duration = None
            if conditions is not None:
                response_time_duration = conditions.response_time_average_over_data_points
                # El servidor lo exige cuando hay umbral de tiempo de respuesta.
                if response_time_duration is None and (
                    conditions.response_time_warning_millis is not None
                    or conditions.response_time_critical_millis is not None
                ):
                    response_time_duration = 1
            return compact({
                **base,
                "type": "external",
                "service": input.service_name,
                "url": str(request.url),
                "method": request.method,
                "headers": _headers_to_raw(request.headers),
                "requestBody": request.body,
                # true por defecto, como la consola web
                "followRedirect": True if request.follow_redirects is None else request.follow_redirects,
                "skipCertificateVerification": request.skip_certificate_verification,
                "containsString": conditions.body_must_contain if conditions else None,
                "responseTimeWarning": conditions.response_time_warning_millis if conditions else None,
                "responseTimeCritical": conditions.response_time_critical_millis if conditions else None,
                "responseTimeDuration": response_time_duration,
                "certificationExpirationWarning": (
                    conditions.certificate_expiration_warning_days if conditions else None
                ),
                "certificationExpirationCritical": (
                    conditions.certificate_expiration_critical_days if conditions else None
                ),
                "maxCheckAttempts": conditions.num_attempts if conditions else None,
            })
        case CreateExpressionMonitorInput():
            conditions = input.conditions
            return compact({
                **base,
                "type": "expression",
                "expression": input.expression,
                "operator": conditions.operator,
                "warning": conditions.warning,
                "critical": conditions.critical,
            })
        case CreateAnomalyDetectionMonitorInput():
            conditions = input.conditions
            return compact({
                **base,
                "type": "anomalyDetection",
                "scopes": list(input.scopes),
                "trainingPeriodFrom": to_epoch_seconds(input.train_from) if input.train_from else None,
                "warningSensitivity": conditions.warning,
                "criticalSensitivity": conditions.critical,
                "maxCheckAttempts": conditions.num_attempts,
            })
        case CreateQueryMonitorInput():
            conditions = input.conditions
            return compact({
                **base,
                "type": "query",
                "legend": input.query_name,
                "query": input.query,
                "operator": conditions.operator,
                "warning": conditions.warning,
                "critical": conditions.critical,
            })
        case _:
            raise UnknownTypeError("monitor", getattr(input, "type", None), input)


def to_raw_check_report(report: CheckReport) -> RawCheckReport:
    match report.source.type:
        case "host":
            source: RawCheckReportSource = {"type": "host", "hostId": report.source.host_id}
        case unknown:
            raise UnknownTypeError("check report source", unknown, report)
    return compact({
        "name": report.name,
        "source": source,
        "status": report.status,
        "message": report.message,
        "occurredAt": to_epoch_seconds(report.occurred_at),
        "maxCheckAttempts": report.max_attempts,
        "notificationInterval": report.notification_interval_minutes,
    })  # type: ignore[return-value]


class MonitorsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[Monitor]:
        res = await self._fetcher.fetch("GET", "/api/v0/monitors")
        return [from_raw_monitor(raw) for raw in res["monitors"]]

    async def get(self, monitor_id: str) -> Monitor:
        # Esta ruta envuelve la entidad: `{"monitor": {...}}`.
        res = await self._fetcher.fetch("GET", f"/api/v0/monitors/{monitor_id}")
        return from_raw_monitor(res["monitor"])

    async def create(self, input: CreateMonitorInput | Monitor) -> Monitor:
        res: RawMonitor = await self._fetcher.fetch(
            "POST",
            "/api/v0/monitors",
            body=to_raw_create_monitor_input(input),
        )
        return from_raw_monitor(res)

    async def update(self, monitor_id: str, input: CreateMonitorInput | Monitor) -> Monitor:
        res: RawMonitor = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/monitors/{monitor_id}",
            body=to_raw_create_monitor_input(input),
        )
        return from_raw_monitor(res)

    async def delete(self, monitor_id: str) -> Monitor:
        res: RawMonitor = await self._fetcher.fetch("DELETE", f"/api/v0/monitors/{monitor_id}", body={})
        return from_raw_monitor(res)

    async def post_check_monitoring_reports(self, reports: Sequence[CheckReport]) -> None:
        """Envía resultados de checks externos (agente propio, cron, etc.)."""

        await self._fetcher.fetch(
            "POST",
            "/api/v0/monitoring/checks/report",
            body={"reports": [to_raw_check_report(report) for report in reports]},
        )
