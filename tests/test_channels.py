"""Tests de ChannelsApiClient: canales y grupos de notificación."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from conftest import utc
from mackerel_client.adapters.resources.channels import (
    ChannelsApiClient,
    from_raw_channel,
    from_raw_notification_group,
    to_create_channel_input,
    to_raw_create_channel_input,
    to_raw_notification_group_input,
)
from mackerel_client.core.domain.channels import (
    CommonChannel,
    CreateEmailChannelInput,
    CreateSlackChannelInput,
    CreateWebhookChannelInput,
    EmailChannel,
    NotificationGroupInput,
    NotificationGroupMonitorScope,
    NotificationGroupScopes,
    NotificationGroupServiceScope,
    SlackChannel,
    SlackMentionsInput,
    WebhookChannel,
)
from mackerel_client.core.errors import UnknownTypeError

RAW_EMAIL_CHANNEL = {
    "id": "channel-0",
    "name": "email",
    "type": "email",
    "emails": ["alice@example.com"],
    "userIds": ["user-0"],
    "events": ["alert"],
}

RAW_SLACK_CHANNEL = {
    "id": "channel-1",
    "name": "slack",
    "type": "slack",
    "url": "https://hooks.slack.com/services/xxx",
    "mentions": {"critical": "@channel"},
    "enabledGraphImage": True,
    "events": ["alert", "hostStatus"],
    "suspendedAt": 1717677296,
}

RAW_NOTIFICATION_GROUP = {
    "id": "group-0",
    "name": "oncall",
    "notificationLevel": "critical",
    "childNotificationGroupIds": ["group-1"],
    "childChannelIds": ["channel-0"],
    "services": [{"name": "foo"}],
    "monitors": [{"id": "monitor-0", "skipDefault": True}],
}


class TestFromRawChannel:
    def test_email(self):
        channel = from_raw_channel(RAW_EMAIL_CHANNEL)

        assert channel == EmailChannel(
            id="channel-0",
            name="email",
            emails=["alice@example.com"],
            user_ids=["user-0"],
            events=["alert"],
        )

    def test_slack(self):
        channel = from_raw_channel(RAW_SLACK_CHANNEL)

        assert isinstance(channel, SlackChannel)
        assert channel.mentions.critical == "@channel"
        assert channel.mentions.ok is None
        assert channel.include_graph_images is True
        assert channel.suspended_at == utc("2024-06-06T12:34:56")

    def test_webhook(self):
        channel = from_raw_channel(
            {
                "id": "channel-2",
                "name": "webhook",
                "type": "webhook",
                "url": "https://example.com/hook",
                "enabledGraphImage": False,
                "events": [],
                "suspendedAt": None,
            }
        )

        assert isinstance(channel, WebhookChannel)
        assert channel.suspended_at is None

    @pytest.mark.parametrize("channel_type", ["line", "pagerduty", "microsoft-teams", "amazon-event-bridge"])
    def test_common_channel_kinds(self, channel_type):
        channel = from_raw_channel({"id": "channel-3", "name": "other", "type": channel_type})

        assert isinstance(channel, CommonChannel)
        assert channel.type == channel_type

    def test_unknown_type(self):
        with pytest.raises(UnknownTypeError) as exc_info:
            from_raw_channel({"id": "channel-4", "name": "x", "type": "carrier-pigeon"})

        assert exc_info.value.kind == "channel"
        assert exc_info.value.type == "carrier-pigeon"


class TestRoundTrip:
    @pytest.mark.parametrize("raw", [RAW_EMAIL_CHANNEL, RAW_SLACK_CHANNEL], ids=["email", "slack"])
    def test_read_channel_serializes_back_to_same_payload(self, raw):
        expected = {key: value for key, value in raw.items() if key not in ("id", "suspendedAt")}

        assert to_raw_create_channel_input(from_raw_channel(raw)) == expected

    def test_webhook_channel_round_trip(self):
        raw = {
            "id": "channel-2",
            "name": "webhook",
            "type": "webhook",
            "url": "https://example.com/hook",
            "enabledGraphImage": True,
            "events": ["alert"],
        }

        assert to_create_channel_input(from_raw_channel(raw)) == CreateWebhookChannelInput(
            name="webhook",
            url="https://example.com/hook",
            include_graph_images=True,
            events=["alert"],
        )

    def test_common_channel_cannot_be_recreated(self):
        channel = from_raw_channel({"id": "channel-3", "name": "other", "type": "line"})

        with pytest.raises(ValueError, match="line"):
            to_raw_create_channel_input(channel)

    def test_read_notification_group_serializes_back_to_same_payload(self):
        group = from_raw_notification_group(RAW_NOTIFICATION_GROUP)

        assert to_raw_notification_group_input(group) == {
            key: value for key, value in RAW_NOTIFICATION_GROUP.items() if key != "id"
        }

    @pytest.mark.asyncio
    async def test_update_notification_group_accepts_read_group(self, fetcher):
        handler = Mock(return_value=RAW_NOTIFICATION_GROUP)
        cli = ChannelsApiClient(fetcher.mock("PUT", "/api/v0/notification-groups/group-0", handler))

        await cli.update_notification_group("group-0", from_raw_notification_group(RAW_NOTIFICATION_GROUP))

        assert handler.call_args.args[0].body["monitors"] == [{"id": "monitor-0", "skipDefault": True}]


class TestChannelsApiClient:
    @pytest.mark.asyncio
    async def test_list(self, fetcher):
        cli = ChannelsApiClient(
            fetcher.mock(
                "GET",
                "/api/v0/channels",
                Mock(return_value={"channels": [RAW_EMAIL_CHANNEL, RAW_SLACK_CHANNEL]}),
            )
        )

        channels = await cli.list()

        assert [c.type for c in channels] == ["email", "slack"]

    @pytest.mark.asyncio
    async def test_create_email_channel_defaults_lists(self, fetcher):
        handler = Mock(return_value={**RAW_EMAIL_CHANNEL, "emails": [], "userIds": [], "events": []})
        cli = ChannelsApiClient(fetcher.mock("POST", "/api/v0/channels", handler))

        await cli.create(CreateEmailChannelInput(name="email"))

        assert handler.call_args.args[0].body == {
            "name": "email",
            "type": "email",
            "emails": [],
            "userIds": [],
            "events": [],
        }

    @pytest.mark.asyncio
    async def test_create_slack_channel(self, fetcher):
        handler = Mock(return_value=RAW_SLACK_CHANNEL)
        cli = ChannelsApiClient(fetcher.mock("POST", "/api/v0/channels", handler))

        channel = await cli.create(
            CreateSlackChannelInput(
                name="slack",
                url="https://hooks.slack.com/services/xxx",
                mentions=SlackMentionsInput(critical="@channel"),
                events=["alert", "hostStatus"],
            )
        )

        assert handler.call_args.args[0].body == {
            "name": "slack",
            "type": "slack",
            "url": "https://hooks.slack.com/services/xxx",
            "mentions": {"critical": "@channel"},
            "enabledGraphImage": False,
            "events": ["alert", "hostStatus"],
        }
        assert isinstance(channel, SlackChannel)

    @pytest.mark.asyncio
    async def test_create_webhook_channel(self, fetcher):
        handler = Mock(
            return_value={
                "id": "channel-2",
                "name": "webhook",
                "type": "webhook",
                "url": "https://example.com/hook",
                "enabledGraphImage": True,
                "events": ["alert"],
            }
        )
        cli = ChannelsApiClient(fetcher.mock("POST", "/api/v0/channels", handler))

        await cli.create(
            CreateWebhookChannelInput(
                name="webhook",
                url="https://example.com/hook",
                include_graph_images=True,
                events=["alert"],
            )
        )

        assert handler.call_args.args[0].body["enabledGraphImage"] is True

    @pytest.mark.asyncio
    async def test_delete(self, fetcher):
        handler = Mock(return_value=RAW_EMAIL_CHANNEL)
        cli = ChannelsApiClient(fetcher.mock("DELETE", "/api/v0/channels/channel-0", handler))

        channel = await cli.delete("channel-0")

        assert handler.call_args.args[0].body == {}
        assert channel.id == "channel-0"


class TestNotificationGroups:
    @pytest.mark.asyncio
    async def test_list_maps_scopes(self, fetcher):
        cli = ChannelsApiClient(
            fetcher.mock(
                "GET",
                "/api/v0/notification-groups",
                Mock(return_value={"notificationGroups": [RAW_NOTIFICATION_GROUP]}),
            )
        )

        (group,) = await cli.list_notification_groups()

        assert group.notification_level == "critical"
        assert group.scopes == NotificationGroupScopes(
            services=[NotificationGroupServiceScope(name="foo")],
            monitors=[NotificationGroupMonitorScope(id="monitor-0", mask_default_notification_group=True)],
        )

    @pytest.mark.asyncio
    async def test_absent_scope_lists_read_as_empty(self, fetcher):
        raw = {key: value for key, value in RAW_NOTIFICATION_GROUP.items() if key not in ("services", "monitors")}
        cli = ChannelsApiClient(
            fetcher.mock("GET", "/api/v0/notification-groups", Mock(return_value={"notificationGroups": [raw]}))
        )

        (group,) = await cli.list_notification_groups()

        assert group.scopes.services == []
        assert group.scopes.monitors == []

    @pytest.mark.asyncio
    async def test_create_and_update_send_same_body(self, fetcher):
        create_handler = Mock(return_value=RAW_NOTIFICATION_GROUP)
        update_handler = Mock(return_value=RAW_NOTIFICATION_GROUP)
        cli = ChannelsApiClient(
            fetcher.mock("POST", "/api/v0/notification-groups", create_handler).mock(
                "PUT", "/api/v0/notification-groups/group-0", update_handler
            )
        )
        input = NotificationGroupInput(
            name="oncall",
            notification_level="critical",
            child_notification_group_ids=["group-1"],
            child_channel_ids=["channel-0"],
            scopes=NotificationGroupScopes(
                services=[NotificationGroupServiceScope(name="foo")],
                monitors=[NotificationGroupMonitorScope(id="monitor-0", mask_default_notification_group=True)],
            ),
        )

        await cli.create_notification_group(input)
        group = await cli.update_notification_group("group-0", input)

        expected = {
            "name": "oncall",
            "notificationLevel": "critical",
            "childNotificationGroupIds": ["group-1"],
            "childChannelIds": ["channel-0"],
            "services": [{"name": "foo"}],
            "monitors": [{"id": "monitor-0", "skipDefault": True}],
        }
        assert create_handler.call_args.args[0].body == expected
        assert update_handler.call_args.args[0].body == expected
        assert group.id == "group-0"

    @pytest.mark.asyncio
    async def test_minimal_input_sends_empty_lists(self, fetcher):
        handler = Mock(return_value=RAW_NOTIFICATION_GROUP)
        cli = ChannelsApiClient(fetcher.mock("POST", "/api/v0/notification-groups", handler))

        await cli.create_notification_group(NotificationGroupInput(name="oncall"))

        assert handler.call_args.args[0].body == {
            "name": "oncall",
            "notificationLevel": "all",
            "childNotificationGroupIds": [],
            "childChannelIds": [],
            "services": [],
            "monitors": [],
        }

    @pytest.mark.asyncio
    async def test_delete(self, fetcher):
        handler = Mock(return_value=RAW_NOTIFICATION_GROUP)
        cli = ChannelsApiClient(fetcher.mock("DELETE", "/api/v0/notification-groups/group-0", handler))

        await cli.delete_notification_group("group-0")

        assert handler.call_args.args[0].body == {}
