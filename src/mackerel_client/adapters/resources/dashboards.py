"""Cliente de dashboards (`/api/v0/dashboards`)."""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.dashboards import (
    DEFAULT_WIDGET_LAYOUT,
    AbsoluteXRange,
    AlertStatusWidget,
    CreateDashboardInput,
    Dashboard,
    DashboardGraph,
    DashboardGraphReferenceLine,
    DashboardGraphXRange,
    DashboardGraphYRange,
    DashboardValueFormatRule,
    DashboardValueMetric,
    DashboardWidget,
    DashboardWidgetLayout,
    ExpressionGraph,
    ExpressionMetric,
    FormatRuleCondition,
    GraphWidget,
    HostGraph,
    HostMetric,
    MarkdownWidget,
    QueryGraph,
    QueryMetric,
    RelativeXRange,
    RoleGraph,
    ServiceGraph,
    ServiceMetric,
    UnknownGraph,
    UnknownMetric,
    ValueWidget,
)
from mackerel_client.core.domain.timestamps import from_epoch_seconds, to_epoch_seconds
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawDashboardWidgetLayout(TypedDict):
    x: int
    y: int
    width: int
    height: int


class RawDashboardWidget(TypedDict):
    type: str
    title: str
    layout: RawDashboardWidgetLayout
    # graph
    graph: NotRequired[dict[str, Any]]
    range: NotRequired[dict[str, Any] | None]
    valueRange: NotRequired[dict[str, Any]]
    referenceLines: NotRequired[list[dict[str, Any]]]
    # value
    metric: NotRequired[dict[str, Any]]
    fractionSize: NotRequired[int | None]
    suffix: NotRequired[str | None]
    formatRules: NotRequired[list[dict[str, Any]]]
    # markdown
    markdown: NotRequired[str]
    # alertStatus
    roleFullname: NotRequired[str | None]


class RawDashboard(TypedDict):
    id: str
    title: str
    memo: str
    urlPath: str
    widgets: list[RawDashboardWidget]
    createdAt: int
    updatedAt: int


# --- wire -> dominio ---


def from_raw_graph(raw: dict[str, Any]) -> DashboardGraph:
    match raw.get("type"):
        case "host":
            return HostGraph(host_id=raw["hostId"], graph_name=raw["name"])
        case "role":
            return RoleGraph(
                role_fullname=raw["roleFullname"],
                graph_name=raw["name"],
                is_stacked=raw.get("isStacked") or False,
            )
        case "service":
            return ServiceGraph(service_name=raw["serviceName"], graph_name=raw["name"])
        case "expression":
            return ExpressionGraph(expression=raw["expression"])
        case "query":
            return QueryGraph(query=raw["query"], legend=raw["legend"])
        case "unknown":
            return UnknownGraph()
        case unknown:
            raise UnknownTypeError("graph", unknown, raw)


def from_raw_range(raw: dict[str, Any]) -> DashboardGraphXRange:
    match raw.get("type"):
        case "relative":
            return RelativeXRange(period_seconds=raw["period"], offset_seconds=raw["offset"])
        case "absolute":
            return AbsoluteXRange(from_=from_epoch_seconds(raw["start"]), to=from_epoch_seconds(raw["end"]))
        case unknown:
            raise UnknownTypeError("range", unknown, raw)


def from_raw_value_metric(raw: dict[str, Any]) -> DashboardValueMetric:
    match raw.get("type"):
        case "host":
            return HostMetric(host_id=raw["hostId"], metric_name=raw["name"])
        case "service":
            return ServiceMetric(service_name=raw["serviceName"], metric_name=raw["name"])
        case "expression":
            return ExpressionMetric(expression=raw["expression"])
        case "query":
            return QueryMetric(query=raw["query"], legend=raw["legend"])
        case "unknown":
            return UnknownMetric()
        case unknown:
            raise UnknownTypeError("metric", unknown, raw)


def _y_range_from_raw(raw: dict[str, Any] | None) -> DashboardGraphYRange | None:
    if not raw:
        return None
    low, high = raw.get("min"), raw.get("max")
    if not isinstance(low, (int, float)) and not isinstance(high, (int, float)):
        return None
    return DashboardGraphYRange(min=low, max=high)


def from_raw_widget(raw: RawDashboardWidget) -> DashboardWidget:
    base: dict[str, Any] = {
        "title": raw["title"],
        "layout": DashboardWidgetLayout(**raw["layout"]),
    }
    match raw["type"]:
        case "graph":
            x_range = raw.get("range")
            return GraphWidget(
                **base,
                graph=from_raw_graph(raw["graph"]),
                x_range=from_raw_range(x_range) if x_range else None,
                y_range=_y_range_from_raw(raw.get("valueRange")),
                reference_lines=[
                    DashboardGraphReferenceLine(label=line["label"], value=line["value"])
                    for line in raw.get("referenceLines") or []
                ],
            )
        case "value":
            return ValueWidget(
                **base,
                metric=from_raw_value_metric(raw["metric"]),
                fraction_size=raw.get("fractionSize"),
                suffix=raw.get("suffix"),
                format_rules=[
                    DashboardValueFormatRule(
                        name=rule["name"],
                        condition=FormatRuleCondition(operator=rule["operator"], threshold=rule["threshold"]),
                    )
                    for rule in raw.get("formatRules") or []
                ],
            )
        case "markdown":
            return MarkdownWidget(**base, markdown=raw["markdown"])
        case "alertStatus":
            return AlertStatusWidget(**base, role_fullname=raw.get("roleFullname"))
        case unknown:
            raise UnknownTypeError("widget", unknown, raw)


def from_raw_dashboard(raw: RawDashboard) -> Dashboard:
    return Dashboard(
        id=raw["id"],
        title=raw["title"],
        memo=raw.get("memo") or "",
        url_path=raw["urlPath"],
        widgets=[from_raw_widget(widget) for widget in raw.get("widgets") or []],
        created_at=from_epoch_seconds(raw["createdAt"]),
        updated_at=from_epoch_seconds(raw["updatedAt"]),
    )


# --- dominio -> wire ---


def to_raw_graph(graph: DashboardGraph) -> dict[str, Any]:
    match graph:
        case HostGraph():
            return {"type": "host", "hostId": graph.host_id, "name": graph.graph_name}
        case RoleGraph():
            return {
                "type": "role",
                "roleFullname": graph.role_fullname,
                "name": graph.graph_name,
                "isStacked": graph.is_stacked,
            }
        case ServiceGraph():
            return {"type": "service", "serviceName": graph.service_name, "name": graph.graph_name}
        case ExpressionGraph():
            return {"type": "expression", "expression": graph.expression}
        case QueryGraph():
            return {"type": "query", "query": graph.query, "legend": graph.legend}
        case _:
            raise UnknownTypeError("graph", getattr(graph, "type", None), graph)


def to_raw_range(x_range: DashboardGraphXRange) -> dict[str, Any]:
    match x_range:
        case RelativeXRange():
            return {"type": "relative", "period": x_range.period_seconds, "offset": x_range.offset_seconds}
        case AbsoluteXRange():
            return {
                "type": "absolute",
                "start": to_epoch_seconds(x_range.from_),
                "end": to_epoch_seconds(x_range.to),
            }
        case _:
            raise UnknownTypeError("xRange", getattr(x_range, "type", None), x_range)


def to_raw_value_metric(metric: DashboardValueMetric) -> dict[str, Any]:
    match metric:
        case HostMetric():
            return {"type": "host", "hostId": metric.host_id, "name": metric.metric_name}
        case ServiceMetric():
            return {"type": "service", "serviceName": metric.service_name, "name": metric.metric_name}
        case ExpressionMetric():
            return {"type": "expression", "expression": metric.expression}
        case QueryMetric():
            return {"type": "query", "query": metric.query, "legend": metric.legend}
        case _:
            raise UnknownTypeError("metric", getattr(metric, "type", None), metric)


def to_raw_widget(widget: DashboardWidget) -> dict[str, Any] | None:
    """Serializa un widget; devuelve None si no puede enviarse y debe descartarse."""

    layout = widget.layout or DEFAULT_WIDGET_LAYOUT
    base: dict[str, Any] = {
        "title": widget.title or "",
        "layout": layout.model_dump(),
    }
    match widget:
        case GraphWidget():
            if isinstance(widget.graph, UnknownGraph):
                return None
            y_range = widget.y_range
            return compact({
                **base,
                "type": "graph",
                "graph": to_raw_graph(widget.graph),
                "range": to_raw_range(widget.x_range) if widget.x_range else None,
                "valueRange": compact({"min": y_range.min, "max": y_range.max}) if y_range else None,
                "referenceLines": [{"label": line.label, "value": line.value} for line in widget.reference_lines],
            })
        case ValueWidget():
            if isinstance(widget.metric, UnknownMetric):
                return None
            return compact({
                **base,
                "type": "value",
                "metric": to_raw_value_metric(widget.metric),
                "fractionSize": widget.fraction_size,
                "suffix": widget.suffix,
                "formatRules": [
                    {
                        "name": rule.name or "",
                        "operator": rule.condition.operator,
                        "threshold": rule.condition.threshold,
                    }
                    for rule in widget.format_rules
                ],
            })
        case MarkdownWidget():
            return {**base, "type": "markdown", "markdown": widget.markdown}
        case AlertStatusWidget():
            if widget.role_fullname is None:
                return None
            return {**base, "type": "alertStatus", "roleFullname": widget.role_fullname}
        case _:
            raise UnknownTypeError("widget", getattr(widget, "type", None), widget)


def to_create_dashboard_input(dashboard: Dashboard) -> CreateDashboardInput:
    return CreateDashboardInput(
        title=dashboard.title,
        memo=dashboard.memo,
        url_path=dashboard.url_path,
        widgets=list(dashboard.widgets),
    )


def to_raw_create_dashboard_input(input: CreateDashboardInput | Dashboard) -> dict[str, Any]:
    if isinstance(input, Dashboard):
        input = to_create_dashboard_input(input)

    widgets = [to_raw_widget(widget) for widget in input.widgets or []]
    return {
        "title": input.title,
        "memo": input.memo or "",
        "urlPath": input.url_path,
        "widgets": [widget for widget in widgets if widget is not None],
    }


class DashboardsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[Dashboard]:
        res = await self._fetcher.fetch("GET", "/api/v0/dashboards")
        return [from_raw_dashboard(raw) for raw in res["dashboards"]]

    async def get(self, dashboard_id: str) -> Dashboard:
        res: RawDashboard = await self._fetcher.fetch("GET", f"/api/v0/dashboards/{dashboard_id}")
        return from_raw_dashboard(res)

    async def create(self, input: CreateDashboardInput | Dashboard) -> Dashboard:
        res: RawDashboard = await self._fetcher.fetch(
            "POST",
            "/api/v0/dashboards",
            body=to_raw_create_dashboard_input(input),
        )
        return from_raw_dashboard(res)

    async def update(self, dashboard_id: str, input: CreateDashboardInput | Dashboard) -> Dashboard:
        res: RawDashboard = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/dashboards/{dashboard_id}",
            body=to_raw_create_dashboard_input(input),
        )
        return from_raw_dashboard(res)

    async def delete(self, dashboard_id: str) -> Dashboard:
        res: RawDashboard = await self._fetcher.fetch("DELETE", f"/api/v0/dashboards/{dashboard_id}", body={})
        return from_raw_dashboard(res)
