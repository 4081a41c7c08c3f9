"""Canales de notificación y grupos de notificación."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union, get_args

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel

ChannelEvent = Literal["alert", "alertGroup", "hostStatus", "hostRegister", "hostRetire", "monitor"]

CommonChannelType = Literal[
    "line",
    "chatwork",
    "typetalk",
    "twilio",
    "pagerduty",
    "opsgenie",
    "microsoft-teams",
    "amazon-event-bridge",
]

COMMON_CHANNEL_TYPES: frozenset[str] = frozenset(get_args(CommonChannelType))


class BaseChannel(DomainModel):
    id: str
    name: str
    suspended_at: datetime | None = None


class CommonChannel(BaseChannel):
    """Canal sin configuración expuesta por la API (solo id/nombre/tipo)."""

    type: CommonChannelType


class EmailChannel(BaseChannel):
    type: Literal["email"] = "email"
    emails: list[str] | None = None
    user_ids: list[str] | None = None
    events: list[ChannelEvent] = Field(default_factory=list)


class SlackMentions(DomainModel):
    ok: str | None = None
    warning: str | None = None
    critical: str | None = None


class SlackChannel(BaseChannel):
    type: Literal["slack"] = "slack"
    url: str
    mentions: SlackMentions = Field(default_factory=SlackMentions)
    include_graph_images: bool = False
    events: list[ChannelEvent] = Field(default_factory=list)


class WebhookChannel(BaseChannel):
    type: Literal["webhook"] = "webhook"
    url: str
    include_graph_images: bool = False
    events: list[ChannelEvent] = Field(default_factory=list)


Channel = Annotated[
    Union[CommonChannel, EmailChannel, SlackChannel, WebhookChannel],
    Field(discriminator="type"),
]


class CreateEmailChannelInput(InputModel):
    type: Literal["email"] = "email"
    name: str
    emails: list[str] | None = None
    user_ids: list[str] | None = None
    events: list[ChannelEvent] | None = None


class SlackMentionsInput(InputModel):
    ok: str | None = None
    warning: str | None = None
    critical: str | None = None


class CreateSlackChannelInput(InputModel):
    type: Literal["slack"] = "slack"
    name: str
    url: str
    mentions: SlackMentionsInput | None = None
    include_graph_images: bool | None = None
    events: list[ChannelEvent] | None = None


class CreateWebhookChannelInput(InputModel):
    type: Literal["webhook"] = "webhook"
    name: str
    url: str
    include_graph_images: bool | None = None
    events: list[ChannelEvent] | None = None


CreateChannelInput = Annotated[
    Union[CreateEmailChannelInput, CreateSlackChannelInput, CreateWebhookChannelInput],
    Field(discriminator="type"),
]


# --- Grupos de notificación ---

NotificationLevel = Literal["all", "critical"]


class NotificationGroupServiceScope(DomainModel):
    name: str


class NotificationGroupMonitorScope(DomainModel):
    id: str
    mask_default_notification_group: bool = Field(
        default=False,
        description="Si True, el grupo por defecto no recibe las alertas de este monitor.",
    )


class NotificationGroupScopes(DomainModel):
    services: list[NotificationGroupServiceScope] = Field(default_factory=list)
    monitors: list[NotificationGroupMonitorScope] = Field(default_factory=list)


class NotificationGroup(DomainModel):
    id: str
    name: str
    notification_level: NotificationLevel
    child_notification_group_ids: list[str] = Field(default_factory=list)
    child_channel_ids: list[str] = Field(default_factory=list)
    scopes: NotificationGroupScopes = Field(default_factory=NotificationGroupScopes)


class NotificationGroupInput(InputModel):
    """Entrada común de create/update de un grupo de notificación."""

    name: str
    notification_level: NotificationLevel = "all"
    child_notification_group_ids: list[str] = Field(default_factory=list)
    child_channel_ids: list[str] = Field(default_factory=list)
    scopes: NotificationGroupScopes | None = None
