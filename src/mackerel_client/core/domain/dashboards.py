"""Dashboards y sus widgets.

Uniones anidadas:
- widget: graph / value / markdown / alertStatus
- fuente de un widget graph: host / role / service / expression / query / unknown
- métrica de un widget value: host / service / expression / query / unknown
- rango X: relative / absolute
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel

FormatRuleOperator = Literal[">", "<"]


class DashboardWidgetLayout(DomainModel):
    x: int
    y: int
    width: int
    height: int


DEFAULT_WIDGET_LAYOUT = DashboardWidgetLayout(x=0, y=0, width=6, height=6)


# --- Fuentes de gráficos ---


class HostGraph(DomainModel):
    type: Literal["host"] = "host"
    host_id: str
    graph_name: str


class RoleGraph(DomainModel):
    type: Literal["role"] = "role"
    role_fullname: str
    graph_name: str
    is_stacked: bool = False


class ServiceGraph(DomainModel):
    type: Literal["service"] = "service"
    service_name: str
    graph_name: str


class ExpressionGraph(DomainModel):
    type: Literal["expression"] = "expression"
    expression: str


class QueryGraph(DomainModel):
    type: Literal["query"] = "query"
    query: str
    legend: str


class UnknownGraph(DomainModel):
    """Gráfico cuyo origen ya no existe; no puede volver a enviarse."""

    type: Literal["unknown"] = "unknown"


DashboardGraph = Annotated[
    Union[HostGraph, RoleGraph, ServiceGraph, ExpressionGraph, QueryGraph, UnknownGraph],
    Field(discriminator="type"),
]


class RelativeXRange(DomainModel):
    type: Literal["relative"] = "relative"
    period_seconds: int
    offset_seconds: int


class AbsoluteXRange(DomainModel):
    type: Literal["absolute"] = "absolute"
    from_: datetime
    to: datetime


DashboardGraphXRange = Annotated[Union[RelativeXRange, AbsoluteXRange], Field(discriminator="type")]


class DashboardGraphYRange(DomainModel):
    min: float | None = None
    max: float | None = None


class DashboardGraphReferenceLine(DomainModel):
    label: str
    value: float


# --- Métricas de widgets value ---


class HostMetric(DomainModel):
    type: Literal["host"] = "host"
    host_id: str
    metric_name: str


class ServiceMetric(DomainModel):
    type: Literal["service"] = "service"
    service_name: str
    metric_name: str


class ExpressionMetric(DomainModel):
    type: Literal["expression"] = "expression"
    expression: str


class QueryMetric(DomainModel):
    type: Literal["query"] = "query"
    query: str
    legend: str


class UnknownMetric(DomainModel):
    type: Literal["unknown"] = "unknown"


DashboardValueMetric = Annotated[
    Union[HostMetric, ServiceMetric, ExpressionMetric, QueryMetric, UnknownMetric],
    Field(discriminator="type"),
]


class FormatRuleCondition(DomainModel):
    operator: FormatRuleOperator
    threshold: float


class DashboardValueFormatRule(DomainModel):
    name: str = ""
    condition: FormatRuleCondition


# --- Widgets ---


class BaseDashboardWidget(DomainModel):
    title: str = ""
    layout: DashboardWidgetLayout = DEFAULT_WIDGET_LAYOUT


class GraphWidget(BaseDashboardWidget):
    type: Literal["graph"] = "graph"
    graph: DashboardGraph
    x_range: DashboardGraphXRange | None = None
    y_range: DashboardGraphYRange | None = None
    reference_lines: list[DashboardGraphReferenceLine] = Field(default_factory=list)


class ValueWidget(BaseDashboardWidget):
    type: Literal["value"] = "value"
    metric: DashboardValueMetric
    fraction_size: int | None = None
    suffix: str | None = None
    format_rules: list[DashboardValueFormatRule] = Field(default_factory=list)


class MarkdownWidget(BaseDashboardWidget):
    type: Literal["markdown"] = "markdown"
    markdown: str


class AlertStatusWidget(BaseDashboardWidget):
    type: Literal["alertStatus"] = "alertStatus"
    role_fullname: str | None = None


DashboardWidget = Annotated[
    Union[GraphWidget, ValueWidget, MarkdownWidget, AlertStatusWidget],
    Field(discriminator="type"),
]


class Dashboard(DomainModel):
    id: str
    title: str
    memo: str = ""
    url_path: str
    widgets: list[DashboardWidget] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CreateDashboardInput(InputModel):
    """Entrada de create/update.

    Los widgets se expresan con los mismos modelos de lectura, de modo que un
    `Dashboard` leído se puede reenviar. En la escritura se descartan los
    widgets que no pueden serializarse (gráficos/métricas `unknown` y
    alertStatus sin rol).
    """

    title: str
    memo: str | None = None
    url_path: str
    widgets: list[DashboardWidget] | None = None
