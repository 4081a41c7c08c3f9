"""Alertas: instancias abiertas/cerradas producidas por monitores."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel

AlertStatus = Literal["OK", "CRITICAL", "WARNING", "UNKNOWN"]


class BaseAlert(DomainModel):
    id: str
    status: AlertStatus
    opened_at: datetime
    is_closed: bool = Field(..., description="True si el wire trae `closedAt` numérico.")
    closed_at: datetime | None = None
    close_reason: str | None = None
    memo: str
    monitor_id: str


class ConnectivityAlert(BaseAlert):
    type: Literal["connectivity"] = "connectivity"
    host_id: str


class HostAlert(BaseAlert):
    type: Literal["host"] = "host"
    host_id: str
    value: float


class ServiceAlert(BaseAlert):
    type: Literal["service"] = "service"
    value: float


class ExternalAlert(BaseAlert):
    type: Literal["external"] = "external"
    value: float | None = None
    message: str


class ExpressionAlert(BaseAlert):
    type: Literal["expression"] = "expression"
    value: float | None = None


class AnomalyDetectionAlert(BaseAlert):
    type: Literal["anomalyDetection"] = "anomalyDetection"
    host_id: str


class QueryAlertSeries(DomainModel):
    name: str
    labels: dict[str, str] = Field(default_factory=dict)


class QueryAlert(BaseAlert):
    type: Literal["query"] = "query"
    value: float
    series: QueryAlertSeries


class CheckAlert(BaseAlert):
    type: Literal["check"] = "check"
    host_id: str
    message: str


Alert = Annotated[
    Union[
        ConnectivityAlert,
        HostAlert,
        ServiceAlert,
        ExternalAlert,
        ExpressionAlert,
        AnomalyDetectionAlert,
        QueryAlert,
        CheckAlert,
    ],
    Field(discriminator="type"),
]


class AlertPage(DomainModel):
    """Una página de `alerts.list`; `cursor` es None en la última página."""

    alerts: list[Alert]
    cursor: str | None = None


class UpdateAlertInput(InputModel):
    memo: str
