"""Cliente de configuración de agrupación de alertas (`/api/v0/alert-group-settings`)."""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.alert_group_settings import (
    AlertGroupSetting,
    AlertGroupSettingScopes,
    CreateAlertGroupSettingInput,
)
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawAlertGroupSetting(TypedDict):
    id: str
    name: str
    memo: NotRequired[str | None]
    serviceScopes: NotRequired[list[str] | None]
    roleScopes: NotRequired[list[str] | None]
    monitorScopes: NotRequired[list[str] | None]
    notificationInterval: NotRequired[int | None]


def _non_empty(scopes: list[str] | None) -> list[str] | None:
    return scopes if scopes else None


def from_raw_alert_group_setting(raw: RawAlertGroupSetting) -> AlertGroupSetting:
    return AlertGroupSetting(
        id=raw["id"],
        name=raw["name"],
        memo=raw.get("memo") or "",
        scopes=AlertGroupSettingScopes(
            services=_non_empty(raw.get("serviceScopes")),
            roles=_non_empty(raw.get("roleScopes")),
            monitors=_non_empty(raw.get("monitorScopes")),
        ),
        notification_interval_minutes=raw.get("notificationInterval"),
    )


def to_raw_create_alert_group_setting_input(
    input: CreateAlertGroupSettingInput | AlertGroupSetting,
) -> dict[str, Any]:
    if isinstance(input, AlertGroupSetting):
        input = CreateAlertGroupSettingInput.from_entity(input)
    scopes = input.scopes
    return compact({
        "name": input.name,
        "memo": input.memo,
        "serviceScopes": scopes.services if scopes else None,
        "roleScopes": scopes.roles if scopes else None,
        "monitorScopes": scopes.monitors if scopes else None,
        "notificationInterval": input.notification_interval_minutes,
    })


class AlertGroupSettingsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[AlertGroupSetting]:
        res = await self._fetcher.fetch("GET", "/api/v0/alert-group-settings")
        return [from_raw_alert_group_setting(raw) for raw in res["alertGroupSettings"]]

    async def get(self, setting_id: str) -> AlertGroupSetting:
        res: RawAlertGroupSetting = await self._fetcher.fetch("GET", f"/api/v0/alert-group-settings/{setting_id}")
        return from_raw_alert_group_setting(res)

    async def create(self, input: CreateAlertGroupSettingInput | AlertGroupSetting) -> AlertGroupSetting:
        res: RawAlertGroupSetting = await self._fetcher.fetch(
            "POST",
            "/api/v0/alert-group-settings",
            body=to_raw_create_alert_group_setting_input(input),
        )
        return from_raw_alert_group_setting(res)

    async def update(
        self,
        setting_id: str,
        input: CreateAlertGroupSettingInput | AlertGroupSetting,
    ) -> AlertGroupSetting:
        res: RawAlertGroupSetting = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/alert-group-settings/{setting_id}",
            body=to_raw_create_alert_group_setting_input(input),
        )
        return from_raw_alert_group_setting(res)

    async def delete(self, setting_id: str) -> AlertGroupSetting:
        res: RawAlertGroupSetting = await self._fetcher.fetch(
            "DELETE",
            f"/api/v0/alert-group-settings/{setting_id}",
            body={},
        )
        return from_raw_alert_group_setting(res)
