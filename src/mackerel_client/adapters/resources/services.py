"""Cliente de servicios y roles (`/api/v0/services`).

Los roles se identifican por su *role fullname* (`service:role`); se valida
antes de construir la ruta, sin tocar la red.
"""

from __future__ import annotations

from typing import Any, TypedDict

from mackerel_client.core.domain.roles import parse_role_fullname
from mackerel_client.core.domain.services import CreateRoleInput, CreateServiceInput, Role, Service
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawService(TypedDict):
    name: str
    memo: str
    roles: list[str]


class RawRole(TypedDict):
    name: str
    memo: str


def from_raw_service(raw: RawService) -> Service:
    return Service(name=raw["name"], memo=raw.get("memo") or "", roles=raw.get("roles") or [])


def from_raw_role(raw: RawRole) -> Role:
    return Role(name=raw["name"], memo=raw.get("memo") or "")


def _role_path(role_fullname: str) -> str:
    service_name, role_name = parse_role_fullname(role_fullname)
    return f"/api/v0/services/{service_name}/roles/{role_name}"


class ServicesApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[Service]:
        res = await self._fetcher.fetch("GET", "/api/v0/services")
        return [from_raw_service(raw) for raw in res["services"]]

    async def create(self, input: CreateServiceInput) -> Service:
        res: RawService = await self._fetcher.fetch(
            "POST",
            "/api/v0/services",
            body={"name": input.name, "memo": input.memo or ""},
        )
        return from_raw_service(res)

    async def delete(self, service_name: str) -> Service:
        res: RawService = await self._fetcher.fetch("DELETE", f"/api/v0/services/{service_name}", body={})
        return from_raw_service(res)

    async def list_roles(self, service_name: str) -> list[Role]:
        res = await self._fetcher.fetch("GET", f"/api/v0/services/{service_name}/roles")
        return [from_raw_role(raw) for raw in res["roles"]]

    async def create_role(self, service_name: str, input: CreateRoleInput) -> Role:
        res: RawRole = await self._fetcher.fetch(
            "POST",
            f"/api/v0/services/{service_name}/roles",
            body={"name": input.name, "memo": input.memo or ""},
        )
        return from_raw_role(res)

    async def delete_role(self, role_fullname: str) -> Role:
        path = _role_path(role_fullname)
        res: RawRole = await self._fetcher.fetch("DELETE", path, body={})
        return from_raw_role(res)

    async def list_metric_names(self, service_name: str) -> list[str]:
        res = await self._fetcher.fetch("GET", f"/api/v0/services/{service_name}/metric-names")
        return res["names"]

    # Metadata de servicio

    async def list_metadata_namespaces(self, service_name: str) -> list[str]:
        res = await self._fetcher.fetch("GET", f"/api/v0/services/{service_name}/metadata")
        return [entry["namespace"] for entry in res["metadata"]]

    async def get_metadata(self, service_name: str, namespace: str) -> Any:
        return await self._fetcher.fetch("GET", f"/api/v0/services/{service_name}/metadata/{namespace}")

    async def put_metadata(self, service_name: str, namespace: str, metadata: Any) -> None:
        await self._fetcher.fetch("PUT", f"/api/v0/services/{service_name}/metadata/{namespace}", body=metadata)

    async def delete_metadata(self, service_name: str, namespace: str) -> None:
        await self._fetcher.fetch("DELETE", f"/api/v0/services/{service_name}/metadata/{namespace}", body={})

    # Metadata de rol

    async def list_role_metadata_namespaces(self, role_fullname: str) -> list[str]:
        path = _role_path(role_fullname)
        res = await self._fetcher.fetch("GET", f"{path}/metadata")
        return [entry["namespace"] for entry in res["metadata"]]

    async def get_role_metadata(self, role_fullname: str, namespace: str) -> Any:
        path = _role_path(role_fullname)
        return await self._fetcher.fetch("GET", f"{path}/metadata/{namespace}")

    async def put_role_metadata(self, role_fullname: str, namespace: str, metadata: Any) -> None:
        path = _role_path(role_fullname)
        await self._fetcher.fetch("PUT", f"{path}/metadata/{namespace}", body=metadata)

    async def delete_role_metadata(self, role_fullname: str, namespace: str) -> None:
        path = _role_path(role_fullname)
        await self._fetcher.fetch("DELETE", f"{path}/metadata/{namespace}", body={})
