"""Definiciones de gráficos para métricas custom de host."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from mackerel_client.core.domain.common import InputModel

GraphDefUnit = Literal[
    "float",
    "integer",
    "percentage",
    "seconds",
    "milliseconds",
    "bytes",
    "bytes/sec",
    "bits/sec",
    "iops",
]


class HostGraphDefMetricInput(InputModel):
    name: str = Field(..., description="Nombre de métrica; admite comodines (`custom.foo.*`).")
    display_name: str | None = None
    is_stacked: bool = False


class HostGraphDefInput(InputModel):
    name: str
    display_name: str | None = None
    unit: GraphDefUnit = "float"
    metrics: list[HostGraphDefMetricInput] = Field(default_factory=list)
