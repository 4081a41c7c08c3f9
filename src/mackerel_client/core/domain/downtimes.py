"""Downtimes: ventanas programadas en las que no se notifican alertas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel

DowntimeRecurrenceWeekday = Literal[
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


class CommonDowntimeRecurrence(DomainModel):
    type: Literal["hourly", "daily", "monthly", "yearly"]
    interval: int
    until: datetime | None = None


class WeeklyDowntimeRecurrence(DomainModel):
    type: Literal["weekly"] = "weekly"
    interval: int
    until: datetime | None = None
    weekdays: list[DowntimeRecurrenceWeekday] = Field(default_factory=list)


DowntimeRecurrence = Annotated[
    Union[CommonDowntimeRecurrence, WeeklyDowntimeRecurrence],
    Field(discriminator="type"),
]


class DowntimeScope(DomainModel):
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)


class DowntimeScopes(DomainModel):
    services: DowntimeScope = Field(default_factory=DowntimeScope)
    roles: DowntimeScope = Field(default_factory=DowntimeScope)
    monitors: DowntimeScope = Field(default_factory=DowntimeScope)


class Downtime(DomainModel):
    id: str
    name: str
    memo: str = ""
    start: datetime
    duration_minutes: int
    recurrence: DowntimeRecurrence | None = None
    scopes: DowntimeScopes = Field(default_factory=DowntimeScopes)


class CommonDowntimeRecurrenceInput(InputModel):
    type: Literal["hourly", "daily", "monthly", "yearly"]
    interval: int
    until: datetime | None = None


class WeeklyDowntimeRecurrenceInput(InputModel):
    type: Literal["weekly"] = "weekly"
    interval: int
    until: datetime | None = None
    weekdays: list[DowntimeRecurrenceWeekday] | None = None


CreateDowntimeRecurrenceInput = Annotated[
    Union[CommonDowntimeRecurrenceInput, WeeklyDowntimeRecurrenceInput],
    Field(discriminator="type"),
]


class DowntimeScopeInput(InputModel):
    include: list[str] | None = None
    exclude: list[str] | None = None


class DowntimeScopesInput(InputModel):
    services: DowntimeScopeInput | None = None
    roles: DowntimeScopeInput | None = None
    monitors: DowntimeScopeInput | None = None


class CreateDowntimeInput(InputModel):
    """Entrada de create/update de un downtime."""

    name: str
    memo: str | None = None
    start: datetime
    duration_minutes: int
    recurrence: CreateDowntimeRecurrenceInput | None = None
    scopes: DowntimeScopesInput | None = None
