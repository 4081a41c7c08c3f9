"""Cliente de hosts (`/api/v0/hosts`)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NotRequired, TypedDict

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.hosts import (
    CreateHostInput,
    Host,
    HostStatus,
    Interface,
    MonitoredStatus,
    MonitoredStatusDetail,
)
from mackerel_client.core.domain.roles import make_role_fullname
from mackerel_client.core.domain.timestamps import from_epoch_seconds
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawInterface(TypedDict):
    name: str
    macAddress: NotRequired[str | None]
    ipv4Addresses: NotRequired[list[str] | None]
    ipv6Addresses: NotRequired[list[str] | None]
    ipAddress: NotRequired[str | None]
    ipv6Address: NotRequired[str | None]


class RawHost(TypedDict):
    id: str
    createdAt: int
    name: str
    displayName: NotRequired[str | None]
    customIdentifier: NotRequired[str | None]
    memo: str
    meta: dict[str, Any]
    size: str
    status: str
    isRetired: bool
    retiredAt: NotRequired[int | None]
    interfaces: list[RawInterface]
    roles: dict[str, list[str]]


class RawMonitoredStatusDetail(TypedDict):
    type: str
    message: str
    memo: NotRequired[str | None]


class RawMonitoredStatus(TypedDict):
    monitorId: str
    status: str
    detail: NotRequired[RawMonitoredStatusDetail | None]


def from_raw_interface(raw: RawInterface) -> Interface:
    return Interface(
        name=raw["name"],
        mac_address=raw.get("macAddress"),
        ipv4_addresses=raw.get("ipv4Addresses") or [],
        ipv6_addresses=raw.get("ipv6Addresses") or [],
        ip_address=raw.get("ipAddress"),
        ipv6_address=raw.get("ipv6Address"),
    )


def from_raw_host(raw: RawHost) -> Host:
    retired_at = raw.get("retiredAt")
    return Host(
        id=raw["id"],
        created_at=from_epoch_seconds(raw["createdAt"]),
        name=raw["name"],
        display_name=raw.get("displayName"),
        custom_identifier=raw.get("customIdentifier"),
        memo=raw["memo"],
        meta=raw["meta"],
        size=raw["size"],
        status=raw["status"],
        is_retired=raw["isRetired"],
        retired_at=from_epoch_seconds(retired_at) if isinstance(retired_at, (int, float)) else None,
        interfaces=[from_raw_interface(iface) for iface in raw.get("interfaces") or []],
        role_fullnames=[
            make_role_fullname(service_name, role_name)
            for service_name, role_names in (raw.get("roles") or {}).items()
            for role_name in role_names
        ],
    )


def to_raw_create_host_input(input: CreateHostInput) -> dict[str, Any]:
    interfaces = None
    if input.interfaces is not None:
        interfaces = [
            compact({
                "name": iface.name,
                "macAddress": iface.mac_address,
                "ipv4Addresses": iface.ipv4_addresses,
                "ipv6Addresses": iface.ipv6_addresses,
                "ipAddress": iface.ip_address,
                "ipv6Address": iface.ipv6_address,
            })
            for iface in input.interfaces
        ]
    checks = None
    if input.checks is not None:
        checks = [compact({"name": check.name, "memo": check.memo}) for check in input.checks]
    return compact({
        "name": input.name,
        "displayName": input.display_name,
        "customIdentifier": input.custom_identifier,
        "memo": input.memo,
        "meta": input.meta if input.meta is not None else {},
        "interfaces": interfaces,
        "roleFullnames": input.role_fullnames,
        "checks": checks,
    })


def from_raw_monitored_status_detail(raw: RawMonitoredStatusDetail) -> MonitoredStatusDetail:
    match raw["type"]:
        case "check":
            return MonitoredStatusDetail(message=raw["message"], memo=raw.get("memo") or "")
        case unknown:
            raise UnknownTypeError("monitored status detail", unknown, raw)


def from_raw_monitored_status(raw: RawMonitoredStatus) -> MonitoredStatus:
    detail = raw.get("detail")
    return MonitoredStatus(
        monitor_id=raw["monitorId"],
        status=raw["status"],
        detail=from_raw_monitored_status_detail(detail) if detail else None,
    )


class HostsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(
        self,
        *,
        service_name: str | None = None,
        role_names: Sequence[str] | None = None,
        name: str | None = None,
        custom_identifier: str | None = None,
        statuses: Sequence[HostStatus] | None = None,
    ) -> list[Host]:
        """Lista hosts. `role_names` solo tiene efecto junto con `service_name`."""

        params: list[tuple[str, str]] = []
        if service_name is not None:
            params.append(("service", service_name))
        for role_name in role_names or []:
            params.append(("role", role_name))
        if name is not None:
            params.append(("name", name))
        if custom_identifier is not None:
            params.append(("customIdentifier", custom_identifier))
        for status in statuses or []:
            params.append(("status", status))
        res = await self._fetcher.fetch("GET", "/api/v0/hosts", params=params)
        return [from_raw_host(raw) for raw in res["hosts"]]

    async def get(self, host_id: str) -> Host:
        res = await self._fetcher.fetch("GET", f"/api/v0/hosts/{host_id}")
        return from_raw_host(res["host"])

    async def get_by_custom_identifier(self, custom_identifier: str, *, case_insensitive: bool = False) -> Host:
        params: list[tuple[str, str]] = []
        if case_insensitive:
            params.append(("caseInsensitive", "true"))
        res = await self._fetcher.fetch(
            "GET",
            f"/api/v0/hosts-by-custom-identifier/{custom_identifier}",
            params=params,
        )
        return from_raw_host(res["host"])

    async def create(self, input: CreateHostInput) -> str:
        """Registra un host y devuelve su id."""

        res = await self._fetcher.fetch("POST", "/api/v0/hosts", body=to_raw_create_host_input(input))
        return res["id"]

    async def update(self, host_id: str, input: CreateHostInput) -> None:
        await self._fetcher.fetch("PUT", f"/api/v0/hosts/{host_id}", body=to_raw_create_host_input(input))

    async def update_status(self, host_id: str, status: HostStatus) -> None:
        await self._fetcher.fetch("POST", f"/api/v0/hosts/{host_id}/status", body={"status": status})

    async def bulk_update_statuses(self, host_ids: Sequence[str], status: HostStatus) -> None:
        await self._fetcher.fetch(
            "POST",
            "/api/v0/hosts/bulk-update-statuses",
            body={"ids": list(host_ids), "status": status},
        )

    async def update_roles(self, host_id: str, role_fullnames: Sequence[str]) -> None:
        await self._fetcher.fetch(
            "PUT",
            f"/api/v0/hosts/{host_id}/role-fullnames",
            body={"roleFullnames": list(role_fullnames)},
        )

    async def retire(self, host_id: str) -> None:
        await self._fetcher.fetch("POST", f"/api/v0/hosts/{host_id}/retire", body={})

    async def bulk_retire(self, host_ids: Sequence[str]) -> None:
        await self._fetcher.fetch("POST", "/api/v0/hosts/bulk-retire", body={"ids": list(host_ids)})

    async def list_metric_names(self, host_id: str) -> list[str]:
        res = await self._fetcher.fetch("GET", f"/api/v0/hosts/{host_id}/metric-names")
        return res["names"]

    async def list_monitored_statuses(self, host_id: str) -> list[MonitoredStatus]:
        res = await self._fetcher.fetch("GET", f"/api/v0/hosts/{host_id}/monitored-statuses")
        return [from_raw_monitored_status(raw) for raw in res["monitoredStatuses"]]

    # Metadata: JSON arbitrario por namespace; se devuelve/envía sin transformar.

    async def list_metadata_namespaces(self, host_id: str) -> list[str]:
        res = await self._fetcher.fetch("GET", f"/api/v0/hosts/{host_id}/metadata")
        return [entry["namespace"] for entry in res["metadata"]]

    async def get_metadata(self, host_id: str, namespace: str) -> Any:
        return await self._fetcher.fetch("GET", f"/api/v0/hosts/{host_id}/metadata/{namespace}")

    async def put_metadata(self, host_id: str, namespace: str, metadata: Any) -> None:
        await self._fetcher.fetch("PUT", f"/api/v0/hosts/{host_id}/metadata/{namespace}", body=metadata)

    async def delete_metadata(self, host_id: str, namespace: str) -> None:
        await self._fetcher.fetch("DELETE", f"/api/v0/hosts/{host_id}/metadata/{namespace}", body={})
