"""Hosts: máquinas registradas en la organización."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from mackerel_client.core.domain.alerts import AlertStatus
from mackerel_client.core.domain.common import DomainModel, InputModel

HostSize = Literal["standard", "micro"]
HostStatus = Literal["working", "standby", "maintenance", "poweroff"]


class Interface(DomainModel):
    name: str
    mac_address: str | None = None
    ipv4_addresses: list[str] = Field(default_factory=list)
    ipv6_addresses: list[str] = Field(default_factory=list)
    ip_address: str | None = None
    ipv6_address: str | None = None


class Host(DomainModel):
    id: str
    created_at: datetime
    name: str
    display_name: str | None = None
    custom_identifier: str | None = None
    memo: str = ""
    meta: dict[str, Any] = Field(default_factory=dict)
    size: HostSize
    status: HostStatus
    is_retired: bool = False
    retired_at: datetime | None = None
    interfaces: list[Interface] = Field(default_factory=list)
    role_fullnames: list[str] = Field(
        default_factory=list,
        description="Roles como `service:role`, en el orden servicio-luego-rol del wire.",
    )


class CreateHostInterfaceInput(InputModel):
    name: str
    mac_address: str | None = None
    ipv4_addresses: list[str] | None = None
    ipv6_addresses: list[str] | None = None
    ip_address: str | None = None
    ipv6_address: str | None = None


class CreateHostCheckMonitorInput(InputModel):
    name: str
    memo: str | None = None


class CreateHostInput(InputModel):
    """Entrada de create/update de un host."""

    name: str
    display_name: str | None = None
    custom_identifier: str | None = None
    memo: str | None = None
    meta: dict[str, Any] | None = None
    interfaces: list[CreateHostInterfaceInput] | None = None
    role_fullnames: list[str] | None = None
    checks: list[CreateHostCheckMonitorInput] | None = None


class MonitoredStatusDetail(DomainModel):
    type: Literal["check"] = "check"
    message: str
    memo: str = ""


class MonitoredStatus(DomainModel):
    monitor_id: str
    status: AlertStatus
    detail: MonitoredStatusDetail | None = None
