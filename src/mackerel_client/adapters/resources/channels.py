"""Cliente de canales (`/api/v0/channels`) y grupos de notificación."""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from mackerel_client.adapters.resources._wire import compact
from mackerel_client.core.domain.channels import (
    COMMON_CHANNEL_TYPES,
    BaseChannel,
    Channel,
    CommonChannel,
    CreateChannelInput,
    CreateEmailChannelInput,
    CreateSlackChannelInput,
    CreateWebhookChannelInput,
    EmailChannel,
    NotificationGroup,
    NotificationGroupInput,
    NotificationGroupMonitorScope,
    NotificationGroupScopes,
    NotificationGroupServiceScope,
    SlackChannel,
    SlackMentions,
    WebhookChannel,
)
from mackerel_client.core.domain.timestamps import from_epoch_seconds
from mackerel_client.core.errors import UnknownTypeError
from mackerel_client.core.interfaces.fetcher import Fetcher


class RawSlackMentions(TypedDict, total=False):
    ok: str | None
    warning: str | None
    critical: str | None


class RawChannel(TypedDict):
    id: str
    type: str
    name: str
    suspendedAt: NotRequired[int | None]
    emails: NotRequired[list[str] | None]
    userIds: NotRequired[list[str] | None]
    events: NotRequired[list[str]]
    url: NotRequired[str]
    mentions: NotRequired[RawSlackMentions]
    enabledGraphImage: NotRequired[bool]


class RawNotificationGroupService(TypedDict):
    name: str


class RawNotificationGroupMonitor(TypedDict):
    id: str
    skipDefault: bool


class RawNotificationGroup(TypedDict):
    id: str
    name: str
    notificationLevel: str
    childNotificationGroupIds: list[str]
    childChannelIds: list[str]
    services: NotRequired[list[RawNotificationGroupService] | None]
    monitors: NotRequired[list[RawNotificationGroupMonitor] | None]


def from_raw_channel(raw: RawChannel) -> Channel:
    suspended_at = raw.get("suspendedAt")
    base: dict[str, Any] = {
        "id": raw["id"],
        "name": raw["name"],
        "suspended_at": from_epoch_seconds(suspended_at) if isinstance(suspended_at, (int, float)) else None,
    }
    channel_type = raw["type"]
    match channel_type:
        case "email":
            return EmailChannel(
                **base,
                emails=raw.get("emails"),
                user_ids=raw.get("userIds"),
                events=raw["events"],
            )
        case "slack":
            mentions = raw.get("mentions") or {}
            return SlackChannel(
                **base,
                url=raw["url"],
                mentions=SlackMentions(
                    ok=mentions.get("ok"),
                    warning=mentions.get("warning"),
                    critical=mentions.get("critical"),
                ),
                include_graph_images=raw["enabledGraphImage"],
                events=raw["events"],
            )
        case "webhook":
            return WebhookChannel(
                **base,
                url=raw["url"],
                include_graph_images=raw["enabledGraphImage"],
                events=raw["events"],
            )
        case _ if channel_type in COMMON_CHANNEL_TYPES:
            return CommonChannel(**base, type=channel_type)
        case unknown:
            raise UnknownTypeError("channel", unknown, raw)


def to_create_channel_input(channel: Channel) -> CreateChannelInput:
    """Entrada equivalente a un canal leído.

    Los canales sin configuración expuesta (`CommonChannel`) no pueden crearse
    por la API y fallan con `ValueError`.
    """

    match channel:
        case EmailChannel():
            return CreateEmailChannelInput.from_entity(channel)
        case SlackChannel():
            return CreateSlackChannelInput.from_entity(channel)
        case WebhookChannel():
            return CreateWebhookChannelInput.from_entity(channel)
        case CommonChannel():
            raise ValueError(f"{channel.type} channels cannot be created through the API")
        case _:
            raise UnknownTypeError("channel", getattr(channel, "type", None), channel)


def to_raw_create_channel_input(input: CreateChannelInput | Channel) -> dict[str, Any]:
    if isinstance(input, BaseChannel):
        input = to_create_channel_input(input)
    match input:

        case CreateEmailChannelInput():
            return {
                "name": input.name,
                "type": "email",
                "emails": list(input.emails or []),
                "userIds": list(input.user_ids or []),
                "events": list(input.events or []),
            }
        case CreateSlackChannelInput():
            mentions = input.mentions
            return {
                "name": input.name,
                "type": "slack",
                "url": input.url,
                "mentions": compact({
                    "ok": mentions.ok if mentions else None,
                    "warning": mentions.warning if mentions else None,
                    "critical": mentions.critical if mentions else None,
                }),
                "enabledGraphImage": bool(input.include_graph_images),
                "events": list(input.events or []),
            }
        case CreateWebhookChannelInput():
            return {
                "name": input.name,
                "type": "webhook",
                "url": input.url,
                "enabledGraphImage": bool(input.include_graph_images),
                "events": list(input.events or []),
            }
        case _:
            raise UnknownTypeError("channel", getattr(input, "type", None), input)


def from_raw_notification_group(raw: RawNotificationGroup) -> NotificationGroup:
    return NotificationGroup(
        id=raw["id"],
        name=raw["name"],
        notification_level=raw["notificationLevel"],
        child_notification_group_ids=raw["childNotificationGroupIds"],
        child_channel_ids=raw["childChannelIds"],
        scopes=NotificationGroupScopes(
            services=[NotificationGroupServiceScope(name=s["name"]) for s in raw.get("services") or []],
            monitors=[
                NotificationGroupMonitorScope(id=m["id"], mask_default_notification_group=m["skipDefault"])
                for m in raw.get("monitors") or []
            ],
        ),
    )


def to_raw_notification_group_input(input: NotificationGroupInput | NotificationGroup) -> dict[str, Any]:
    if isinstance(input, NotificationGroup):
        input = NotificationGroupInput.from_entity(input)
    scopes = input.scopes or NotificationGroupScopes()
    return {
        "name": input.name,
        "notificationLevel": input.notification_level,
        "childNotificationGroupIds": list(input.child_notification_group_ids),
        "childChannelIds": list(input.child_channel_ids),
        "services": [{"name": s.name} for s in scopes.services],
        "monitors": [{"id": m.id, "skipDefault": m.mask_default_notification_group} for m in scopes.monitors],
    }


class ChannelsApiClient:
    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def list(self) -> list[Channel]:
        res = await self._fetcher.fetch("GET", "/api/v0/channels")
        return [from_raw_channel(raw) for raw in res["channels"]]

    async def create(self, input: CreateChannelInput | Channel) -> Channel:
        """Crea un canal. Solo se admiten email, slack y webhook."""

        res: RawChannel = await self._fetcher.fetch(
            "POST",
            "/api/v0/channels",
            body=to_raw_create_channel_input(input),
        )
        return from_raw_channel(res)

    async def delete(self, channel_id: str) -> Channel:
        res: RawChannel = await self._fetcher.fetch("DELETE", f"/api/v0/channels/{channel_id}", body={})
        return from_raw_channel(res)

    async def list_notification_groups(self) -> list[NotificationGroup]:
        res = await self._fetcher.fetch("GET", "/api/v0/notification-groups")
        return [from_raw_notification_group(raw) for raw in res["notificationGroups"]]

    async def create_notification_group(
        self,
        input: NotificationGroupInput | NotificationGroup,
    ) -> NotificationGroup:
        res: RawNotificationGroup = await self._fetcher.fetch(
            "POST",
            "/api/v0/notification-groups",
            body=to_raw_notification_group_input(input),
        )
        return from_raw_notification_group(res)

    async def update_notification_group(
        self,
        group_id: str,
        input: NotificationGroupInput | NotificationGroup,
    ) -> NotificationGroup:
        res: RawNotificationGroup = await self._fetcher.fetch(
            "PUT",
            f"/api/v0/notification-groups/{group_id}",
            body=to_raw_notification_group_input(input),
        )
        return from_raw_notification_group(res)

    async def delete_notification_group(self, group_id: str) -> NotificationGroup:
        res: RawNotificationGroup = await self._fetcher.fetch(
            "DELETE",
            f"/api/v0/notification-groups/{group_id}",
            body={},
        )
        return from_raw_notification_group(res)
