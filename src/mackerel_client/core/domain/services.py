"""Servicios y roles."""

from __future__ import annotations

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel


class Service(DomainModel):
    name: str
    memo: str = ""
    roles: list[str] = Field(default_factory=list, description="Nombres de rol (sin prefijo de servicio).")


class CreateServiceInput(InputModel):
    name: str
    memo: str | None = None


class Role(DomainModel):
    name: str
    memo: str = ""


class CreateRoleInput(InputModel):
    name: str
    memo: str | None = None
