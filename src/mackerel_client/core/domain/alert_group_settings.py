"""Configuración de agrupación de alertas."""

from __future__ import annotations

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel


class AlertGroupSettingScopes(DomainModel):
    """`None` en una dimensión significa que no restringe (lista vacía en el wire)."""

    services: list[str] | None = None
    roles: list[str] | None = None
    monitors: list[str] | None = None


class AlertGroupSetting(DomainModel):
    id: str
    name: str
    memo: str = ""
    scopes: AlertGroupSettingScopes = Field(default_factory=AlertGroupSettingScopes)
    notification_interval_minutes: int | None = None


class AlertGroupSettingScopesInput(InputModel):
    services: list[str] | None = None
    roles: list[str] | None = None
    monitors: list[str] | None = None


class CreateAlertGroupSettingInput(InputModel):
    name: str
    memo: str | None = None
    scopes: AlertGroupSettingScopesInput | None = None
    notification_interval_minutes: int | None = None
