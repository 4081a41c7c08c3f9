"""Cliente de downtimes (`/api/v0/downtimes`).

En el wire los scopes son seis listas planas (`serviceScopes`,
`serviceExcludeScopes`, ...); en el dominio se agrupan por dimensión.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.downtimes import (
    CommonDowntimeRecurrence,
    CommonDowntimeRecurrenceInput,
    CreateDowntimeInput,
    CreateDowntimeRecurrenceInput,
    Downtime,
    DowntimeRecurrence,
    DowntimeScope,
    DowntimeScopeInput,
    DowntimeScopes,
    DowntimeScopesInput,
    WeeklyDowntimeRecurrence,
    WeeklyDowntimeRecurrenceInput,
)
from mackerel_client.core.domain.timestamps import from_epoch_seconds, to_epoch_seconds
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawDowntimeRecurrence(TypedDict):
    type: str
    interval: int
    until: NotRequired[int | None]
    weekdays: NotRequired[list[str] | None]


class RawDowntime(TypedDict):
    id: str
    name: str
    memo: NotRequired[str | None]
    start: int
    duration: int
    recurrence: NotRequired[RawDowntimeRecurrence | None]
    serviceScopes: NotRequired[list[str] | None]
    serviceExcludeScopes: NotRequired[list[str] | None]
    roleScopes: NotRequired[list[str] | None]
    roleExcludeScopes: NotRequired[list[str] | None]
    monitorScopes: NotRequired[list[str] | None]
    monitorExcludeScopes: NotRequired[list[str] | None]


def from_raw_recurrence(raw: RawDowntimeRecurrence, *, cause: Any = None) -> DowntimeRecurrence:
    until = raw.get("until")
    until_dt = from_epoch_seconds(until) if isinstance(until, (int, float)) else None
    match raw["type"]:
        case "weekly":
            return WeeklyDowntimeRecurrence(
                interval=raw["interval"],
                until=until_dt,
                weekdays=raw.get("weekdays") or [],
            )
        case "hourly" | "daily" | "monthly" | "yearly" as recurrence_type:
            return CommonDowntimeRecurrence(type=recurrence_type, interval=raw["interval"], until=until_dt)
        case unknown:
            raise UnknownTypeError("recurrence", unknown, cause if cause is not None else raw)


def from_raw_downtime(raw: RawDowntime) -> Downtime:
    recurrence = raw.get("recurrence")
    return Downtime(
        id=raw["id"],
        name=raw["name"],
        memo=raw.get("memo") or "",
        start=from_epoch_seconds(raw["start"]),
        duration_minutes=raw["duration"],
        recurrence=from_raw_recurrence(recurrence, cause=raw) if recurrence else None,
        scopes=DowntimeScopes(
            services=DowntimeScope(
                include=raw.get("serviceScopes") or [],
                exclude=raw.get("serviceExcludeScopes") or [],
            ),
            roles=DowntimeScope(
                include=raw.get("roleScopes") or [],
                exclude=raw.get("roleExcludeScopes") or [],
            ),
            monitors=DowntimeScope(
                include=raw.get("monitorScopes") or [],
                exclude=raw.get("monitorExcludeScopes") or [],
            ),
        ),
    )


def to_raw_recurrence(recurrence: CreateDowntimeRecurrenceInput, *, cause: Any = None) -> dict[str, Any]:
    base = {
        "interval": recurrence.interval,
        "until": to_epoch_seconds(recurrence.until) if recurrence.until else None,
    }
    match recurrence:
        case WeeklyDowntimeRecurrenceInput():
            return compact({**base, "type": "weekly", "weekdays": recurrence.weekdays})
        case CommonDowntimeRecurrenceInput():
            return compact({**base, "type": recurrence.type})
        case _:
            raise UnknownTypeError("recurrence", getattr(recurrence, "type", None), cause or recurrence)


def _scope_lists(scope: DowntimeScopeInput | None) -> tuple[list[str] | None, list[str] | None]:
    if scope is None:
        return None, None
    return scope.include, scope.exclude


def to_create_downtime_recurrence_input(recurrence: DowntimeRecurrence) -> CreateDowntimeRecurrenceInput:
    match recurrence:
        case WeeklyDowntimeRecurrence():
            return WeeklyDowntimeRecurrenceInput.from_entity(recurrence)
        case CommonDowntimeRecurrence():
            return CommonDowntimeRecurrenceInput.from_entity(recurrence)
        case _:
            raise UnknownTypeError("recurrence", getattr(recurrence, "type", None), recurrence)


def to_create_downtime_input(downtime: Downtime) -> CreateDowntimeInput:
    """Entrada equivalente a un downtime leído, para reenviarlo en un update."""

    recurrence = downtime.recurrence
    return CreateDowntimeInput(
        name=downtime.name,
        memo=downtime.memo,
        start=downtime.start,
        duration_minutes=downtime.duration_minutes,
        recurrence=to_create_downtime_recurrence_input(recurrence) if recurrence else None,
        scopes=DowntimeScopesInput.from_entity(downtime.scopes),
    )


def to_raw_create_downtime_input(input: CreateDowntimeInput | Downtime) -> dict[str, Any]:
    if isinstance(input, Downtime):
        input = to_create_downtime_input(input)
    scopes = input.scopes

    service_include, service_exclude = _scope_lists(scopes.services if scopes else None)
    role_include, role_exclude = _scope_lists(scopes.roles if scopes else None)
    monitor_include, monitor_exclude = _scope_lists(scopes.monitors if scopes else None)
    return compact({
        "name": input.name,
        "memo": input.memo,
        "start": to_epoch_seconds(input.start),
        "duration": input.duration_minutes,
        "recurrence": to_raw_recurrence(input.recurrence, cause=input) if input.recurrence else None,
        "serviceScopes": service_include,
        "serviceExcludeScopes": service_exclude,
        "roleScopes": role_include,
        "roleExcludeScopes": role_exclude,
        "monitorScopes": monitor_include,
        "monitorExcludeScopes": monitor_exclude,
    })


class DowntimesApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[Downtime]:
        res = await self._fetcher.fetch("GET", "/api/v0/downtimes")
        return [from_raw_downtime(raw) for raw in res["downtimes"]]

    async def create(self, input: CreateDowntimeInput | Downtime) -> Downtime:
        res: RawDowntime = await self._fetcher.fetch(
            "POST",
            "/api/v0/downtimes",
            body=to_raw_create_downtime_input(input),
        )
        return from_raw_downtime(res)

    async def update(self, downtime_id: str, input: CreateDowntimeInput | Downtime) -> Downtime:
        res: RawDowntime = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/downtimes/{downtime_id}",
            body=to_raw_create_downtime_input(input),
        )
        return from_raw_downtime(res)

    async def delete(self, downtime_id: str) -> Downtime:
        res: RawDowntime = await self._fetcher.fetch("DELETE", f"/api/v0/downtimes/{downtime_id}", body={})
        return from_raw_downtime(res)
