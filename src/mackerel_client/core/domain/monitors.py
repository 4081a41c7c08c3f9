"""Monitores: la unión más rica del dominio (7 variantes).

Cada variante agrupa sus umbrales en `conditions`; el wire los lleva planos.
La entrada de create/update es la misma para ambas operaciones.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

import httpx
from pydantic import Field

from mackerel_client.core.domain.alerts import AlertStatus
from mackerel_client.core.domain.common import DomainModel, InputModel

MonitorOperator = Literal[">", "<"]
ConnectivityMonitorAlertStatus = Literal["CRITICAL", "WARNING"]
ExternalMonitorHttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
AnomalyDetectionMonitorSensitivity = Literal["insensitive", "normal", "sensitive"]


class MonitorScopes(DomainModel):
    """Scopes de inclusión/exclusión (`service` o `service:role`).

    `None` significa "sin restricción"; una lista vacía del wire se lee como `None`.
    """

    include: list[str] | None = None
    exclude: list[str] | None = None


class BaseMonitor(DomainModel):
    id: str
    name: str
    memo: str = ""
    notification_interval_minutes: int | None = None
    is_muted: bool = False


class ConnectivityMonitor(BaseMonitor):
    type: Literal["connectivity"] = "connectivity"
    scopes: MonitorScopes = Field(default_factory=MonitorScopes)
    alert_status: ConnectivityMonitorAlertStatus = "CRITICAL"


class ThresholdConditions(DomainModel):
    operator: MonitorOperator
    warning: float | None = None
    critical: float | None = None


class MetricThresholdConditions(ThresholdConditions):
    average_over_data_points: int
    num_attempts: int


class HostMonitor(BaseMonitor):
    type: Literal["host"] = "host"
    metric_name: str
    scopes: MonitorScopes = Field(default_factory=MonitorScopes)
    conditions: MetricThresholdConditions


class InactivityConditions(DomainModel):
    warning_minutes: int | None = None
    critical_minutes: int | None = None


class ServiceMonitor(BaseMonitor):
    type: Literal["service"] = "service"
    service_name: str
    metric_name: str
    conditions: MetricThresholdConditions
    inactivity_conditions: InactivityConditions = Field(default_factory=InactivityConditions)


class ExternalMonitorRequest(DomainModel):
    url: httpx.URL
    method: ExternalMonitorHttpMethod
    headers: httpx.Headers = Field(default_factory=httpx.Headers)
    body: str = ""
    follow_redirects: bool = False
    skip_certificate_verification: bool = False


class ExternalMonitorConditions(DomainModel):
    body_must_contain: str | None = None
    response_time_warning_millis: float | None = None
    response_time_critical_millis: float | None = None
    response_time_average_over_data_points: int | None = None
    certificate_expiration_warning_days: int | None = None
    certificate_expiration_critical_days: int | None = None
    num_attempts: int


class ExternalMonitor(BaseMonitor):
    type: Literal["external"] = "external"
    service_name: str | None = None
    request: ExternalMonitorRequest
    conditions: ExternalMonitorConditions


class ExpressionMonitor(BaseMonitor):
    type: Literal["expression"] = "expression"
    expression: str
    conditions: ThresholdConditions


class AnomalyDetectionConditions(DomainModel):
    warning: AnomalyDetectionMonitorSensitivity | None = None
    critical: AnomalyDetectionMonitorSensitivity | None = None
    num_attempts: int


class AnomalyDetectionMonitor(BaseMonitor):
    type: Literal["anomalyDetection"] = "anomalyDetection"
    scopes: list[str]
    train_from: datetime | None = None
    conditions: AnomalyDetectionConditions


class QueryMonitor(BaseMonitor):
    type: Literal["query"] = "query"
    query_name: str = Field(..., description="Leyenda del gráfico (`legend` en el wire).")
    query: str
    conditions: ThresholdConditions


Monitor = Annotated[
    Union[
        ConnectivityMonitor,
        HostMonitor,
        ServiceMonitor,
        ExternalMonitor,
        ExpressionMonitor,
        AnomalyDetectionMonitor,
        QueryMonitor,
    ],
    Field(discriminator="type"),
]


# --- Entradas de create/update ---


class BaseCreateMonitorInput(InputModel):
    name: str
    memo: str | None = None
    notification_interval_minutes: int | None = None
    is_muted: bool | None = None


class MonitorScopesInput(InputModel):
    include: list[str] | None = None
    exclude: list[str] | None = None


class CreateConnectivityMonitorInput(BaseCreateMonitorInput):
    type: Literal["connectivity"] = "connectivity"
    scopes: MonitorScopesInput | None = None
    alert_status: ConnectivityMonitorAlertStatus | None = None


class MetricThresholdConditionsInput(InputModel):
    operator: MonitorOperator
    warning: float | None = None
    critical: float | None = None
    average_over_data_points: int | None = None
    num_attempts: int | None = None


class CreateHostMonitorInput(BaseCreateMonitorInput):
    type: Literal["host"] = "host"
    metric_name: str
    scopes: MonitorScopesInput | None = None
    conditions: MetricThresholdConditionsInput


class InactivityConditionsInput(InputModel):
    warning_minutes: int | None = None
    critical_minutes: int | None = None


class CreateServiceMonitorInput(BaseCreateMonitorInput):
    type: Literal["service"] = "service"
    service_name: str
    metric_name: str
    conditions: MetricThresholdConditionsInput
    inactivity_conditions: InactivityConditionsInput | None = None


class ExternalMonitorRequestInput(InputModel):
    url: httpx.URL | str
    method: ExternalMonitorHttpMethod | None = None
    headers: httpx.Headers | dict[str, str] | None = Field(
        default=None,
        description="`{nombre: valor}` o un `httpx.Headers`.",
    )
    body: str | None = None
    follow_redirects: bool | None = None
    skip_certificate_verification: bool | None = None


class ExternalMonitorConditionsInput(InputModel):
    body_must_contain: str | None = None
    response_time_warning_millis: float | None = None
    response_time_critical_millis: float | None = None
    response_time_average_over_data_points: int | None = None
    certificate_expiration_warning_days: int | None = None
    certificate_expiration_critical_days: int | None = None
    num_attempts: int | None = None


class CreateExternalMonitorInput(BaseCreateMonitorInput):
    type: Literal["external"] = "external"
    service_name: str | None = None
    request: ExternalMonitorRequestInput
    conditions: ExternalMonitorConditionsInput | None = None


class ThresholdConditionsInput(InputModel):
    operator: MonitorOperator
    warning: float | None = None
    critical: float | None = None


class CreateExpressionMonitorInput(BaseCreateMonitorInput):
    type: Literal["expression"] = "expression"
    expression: str
    conditions: ThresholdConditionsInput


class AnomalyDetectionConditionsInput(InputModel):
    warning: AnomalyDetectionMonitorSensitivity | None = None
    critical: AnomalyDetectionMonitorSensitivity | None = None
    num_attempts: int | None = None


class CreateAnomalyDetectionMonitorInput(BaseCreateMonitorInput):
    type: Literal["anomalyDetection"] = "anomalyDetection"
    scopes: list[str]
    train_from: datetime | None = None
    conditions: AnomalyDetectionConditionsInput


class CreateQueryMonitorInput(BaseCreateMonitorInput):
    type: Literal["query"] = "query"
    query_name: str
    query: str
    conditions: ThresholdConditionsInput


CreateMonitorInput = Annotated[
    Union[
        CreateConnectivityMonitorInput,
        CreateHostMonitorInput,
        CreateServiceMonitorInput,
        CreateExternalMonitorInput,
        CreateExpressionMonitorInput,
        CreateAnomalyDetectionMonitorInput,
        CreateQueryMonitorInput,
    ],
    Field(discriminator="type"),
]


# --- Reportes de check monitoring ---


class HostCheckReportSource(InputModel):
    type: Literal["host"] = "host"
    host_id: str


CheckReportSource = HostCheckReportSource


class CheckReport(InputModel):
    name: str
    source: CheckReportSource
    status: AlertStatus
    message: str
    occurred_at: datetime
    max_attempts: int | None = None
    notification_interval_minutes: int | None = None
