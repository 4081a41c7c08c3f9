"""Anotaciones de gráficos por servicio."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel


class GraphAnnotation(DomainModel):
    id: str
    title: str
    description: str = ""
    from_: datetime = Field(..., description="Inicio del intervalo anotado (`from` en el wire).")
    to: datetime
    service_name: str
    role_names: list[str] = Field(default_factory=list)


class CreateGraphAnnotationInput(InputModel):
    title: str
    description: str | None = None
    from_: datetime
    to: datetime
    service_name: str
    role_names: list[str] | None = None
