"""Cliente de integraciones AWS (`/api/v0/aws-integrations`).

Las credenciales viajan planas (`key`/`secretKey` o `roleArn`/`externalId`);
los campos de la variante no usada van como `null` explícito al crear.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from mackerel_client.core.domain.aws_integrations import (
    AwsIntegration,
    AwsIntegrationAuth,
    AwsIntegrationAuthAccessKey,
    AwsIntegrationAuthAccessKeyInput,
    AwsIntegrationAuthAssumeRole,
    AwsIntegrationAuthAssumeRoleInput,
    AwsIntegrationAuthInput,
    AwsIntegrationService,
    AwsIntegrationServiceInput,
    AwsIntegrationServiceMetrics,
    AwsIntegrationServiceMetricsExclude,
    AwsIntegrationServiceMetricsInclude,
    AwsIntegrationTags,
    AwsIntegrationTagsInput,
    CreateAwsIntegrationInput,
    UpdateAwsIntegrationInput,
    supports_auto_retirement,
)
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawAwsIntegrationService(TypedDict):
    enable: bool
    retireAutomatically: NotRequired[bool | None]
    role: NotRequired[str | None]
    includedMetrics: NotRequired[list[str]]
    excludedMetrics: NotRequired[list[str]]


class RawAwsIntegration(TypedDict):
    id: str
    name: str
    memo: str
    key: str | None
    roleArn: str | None
    externalId: str | None
    region: str
    includedTags: str
    excludedTags: str
    services: dict[str, RawAwsIntegrationService]


def from_raw_aws_integration_service(service_type: str, raw: RawAwsIntegrationService) -> AwsIntegrationService:
    included = raw.get("includedMetrics")
    metrics: AwsIntegrationServiceMetrics
    if included is not None:
        metrics = AwsIntegrationServiceMetricsInclude(names=included)
    else:
        metrics = AwsIntegrationServiceMetricsExclude(names=raw.get("excludedMetrics") or [])
    return AwsIntegrationService(
        type=service_type,
        role_fullname=raw.get("role"),
        metrics=metrics,
        retire_automatically=bool(raw.get("retireAutomatically")) if supports_auto_retirement(service_type) else None,
    )


def from_raw_aws_integration(raw: RawAwsIntegration) -> AwsIntegration:
    auth: AwsIntegrationAuth
    role_arn = raw.get("roleArn")
    if isinstance(role_arn, str):
        auth = AwsIntegrationAuthAssumeRole(role_arn=role_arn, external_id=raw.get("externalId"))
    else:
        auth = AwsIntegrationAuthAccessKey(access_key=raw["key"])
    return AwsIntegration(
        id=raw["id"],
        name=raw["name"],
        memo=raw.get("memo") or "",
        auth=auth,
        region=raw["region"],
        tags=AwsIntegrationTags(include=raw["includedTags"], exclude=raw["excludedTags"]),
        services=[
            from_raw_aws_integration_service(service_type, service)
            for service_type, service in raw["services"].items()
            if service["enable"]
        ],
    )


def to_raw_aws_integration_service(service: AwsIntegrationServiceInput) -> dict[str, Any]:
    raw: dict[str, Any] = {"enable": True}
    if supports_auto_retirement(service.type) and service.retire_automatically is not None:
        raw["retireAutomatically"] = service.retire_automatically
    # `role` siempre presente: null desasocia el rol.
    raw["role"] = service.role_fullname
    match service.metrics:
        case None:
            raw["excludedMetrics"] = []
        case AwsIntegrationServiceMetricsInclude(names=names):
            raw["includedMetrics"] = list(names)
        case AwsIntegrationServiceMetricsExclude(names=names):
            raw["excludedMetrics"] = list(names)
        case unknown:
            raise UnknownTypeError("aws integration metrics", getattr(unknown, "type", None), unknown)
    return raw


def _to_raw_auth(auth: AwsIntegrationAuthInput) -> dict[str, Any]:
    match auth:
        case AwsIntegrationAuthAccessKeyInput():
            return {"key": auth.access_key, "secretKey": auth.secret_key, "roleArn": None, "externalId": None}
        case AwsIntegrationAuthAssumeRoleInput():
            raw: dict[str, Any] = {"key": None, "secretKey": None, "roleArn": auth.role_arn}
            if auth.external_id is not None:
                raw["externalId"] = auth.external_id
            return raw
        case _:
            raise UnknownTypeError("aws integration auth", getattr(auth, "type", None), auth)


def _to_raw_services(services: list[AwsIntegrationServiceInput] | None) -> dict[str, Any]:
    return {service.type: to_raw_aws_integration_service(service) for service in services or []}


def to_raw_create_aws_integration_input(input: CreateAwsIntegrationInput) -> dict[str, Any]:
    tags = input.tags
    return {
        "name": input.name,
        "memo": input.memo if input.memo is not None else "",
        **_to_raw_auth(input.auth),
        "region": input.region,
        "includedTags": tags.include if tags and tags.include is not None else "",
        "excludedTags": tags.exclude if tags and tags.exclude is not None else "",
        "services": _to_raw_services(input.services),
    }


def to_update_aws_integration_input(integration: AwsIntegration) -> UpdateAwsIntegrationInput:
    """Entrada de update equivalente a una integración leída.

    La API nunca devuelve el secret key, así que con auth por access key se
    deja `auth=None` y el servidor conserva las credenciales actuales.
    """

    auth: AwsIntegrationAuthInput | None
    match integration.auth:
        case AwsIntegrationAuthAssumeRole(role_arn=role_arn, external_id=external_id):
            auth = AwsIntegrationAuthAssumeRoleInput(role_arn=role_arn, external_id=external_id)
        case AwsIntegrationAuthAccessKey():
            auth = None
        case unknown:
            raise UnknownTypeError("aws integration auth", getattr(unknown, "type", None), integration)
    return UpdateAwsIntegrationInput(
        name=integration.name,
        memo=integration.memo,
        auth=auth,
        region=integration.region,
        tags=AwsIntegrationTagsInput.from_entity(integration.tags),
        services=[
            AwsIntegrationServiceInput(
                type=service.type,
                role_fullname=service.role_fullname,
                metrics=service.metrics,
                retire_automatically=service.retire_automatically,
            )
            for service in integration.services
        ],
    )


def to_raw_update_aws_integration_input(input: UpdateAwsIntegrationInput | AwsIntegration) -> dict[str, Any]:
    """Sin `auth` no se envía ningún campo de credenciales; tags no dados tampoco."""

    if isinstance(input, AwsIntegration):
        input = to_update_aws_integration_input(input)

    raw: dict[str, Any] = {
        "name": input.name,
        "memo": input.memo if input.memo is not None else "",
    }
    if input.auth is not None:
        raw.update(_to_raw_auth(input.auth))
    raw["region"] = input.region
    if input.tags is not None:
        if input.tags.include is not None:
            raw["includedTags"] = input.tags.include
        if input.tags.exclude is not None:
            raw["excludedTags"] = input.tags.exclude
    raw["services"] = _to_raw_services(input.services)
    return raw


class AwsIntegrationsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[AwsIntegration]:
        res = await self._fetcher.fetch("GET", "/api/v0/aws-integrations")
        return [from_raw_aws_integration(raw) for raw in res["aws_integrations"]]

    async def get(self, integration_id: str) -> AwsIntegration:
        res: RawAwsIntegration = await self._fetcher.fetch("GET", f"/api/v0/aws-integrations/{integration_id}")
        return from_raw_aws_integration(res)

    async def create(self, input: CreateAwsIntegrationInput) -> AwsIntegration:
        res: RawAwsIntegration = await self._fetcher.fetch(
            "POST",
            "/api/v0/aws-integrations",
            body=to_raw_create_aws_integration_input(input),
        )
        return from_raw_aws_integration(res)

    async def update(
        self,
        integration_id: str,
        input: UpdateAwsIntegrationInput | AwsIntegration,
    ) -> AwsIntegration:
        res: RawAwsIntegration = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/aws-integrations/{integration_id}",
            body=to_raw_update_aws_integration_input(input),
        )
        return from_raw_aws_integration(res)

    async def delete(self, integration_id: str) -> AwsIntegration:
        res: RawAwsIntegration = await self._fetcher.fetch(
            "DELETE",
            f"/api/v0/aws-integrations/{integration_id}",
            body={},
        )
        return from_raw_aws_integration(res)

    async def create_external_id(self) -> str:
        """Genera un external ID para usar con una integración por AssumeRole."""

        res = await self._fetcher.fetch("POST", "/api/v0/aws-integrations-external-id", body={})
        return res["externalId"]

    async def list_metric_names(self) -> dict[str, list[str]]:
        """Métricas excluibles por tipo de servicio."""

        res = await self._fetcher.fetch("GET", "/api/v0/aws-integrations-excludable-metrics")
        return {service_type: list(names) for service_type, names in res.items()}
