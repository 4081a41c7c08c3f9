"""Tests de ServicesApiClient: servicios, roles y metadata."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from mackerel_client.adapters.resources.services import ServicesApiClient
from mackerel_client.core.domain.services import CreateRoleInput, CreateServiceInput, Role, Service
from mackerel_client.core.errors import RoleFullnameSyntaxError


class TestServices:
    @pytest.mark.asyncio
    async def test_list(self, fetcher):
        cli = ServicesApiClient(
            fetcher.mock(
                "GET",
                "/api/v0/services",
                Mock(return_value={"services": [{"name": "foo", "memo": "", "roles": ["web", "db"]}]}),
            )
        )

        assert await cli.list() == [Service(name="foo", memo="", roles=["web", "db"])]

    @pytest.mark.asyncio
    async def test_create_defaults_memo(self, fetcher):
        handler = Mock(return_value={"name": "foo", "memo": "", "roles": []})
        cli = ServicesApiClient(fetcher.mock("POST", "/api/v0/services", handler))

        service = await cli.create(CreateServiceInput(name="foo"))

        assert handler.call_args.args[0].body == {"name": "foo", "memo": ""}
        assert service.roles == []

    @pytest.mark.asyncio
    async def test_delete(self, fetcher):
        handler = Mock(return_value={"name": "foo", "memo": "bye", "roles": []})
        cli = ServicesApiClient(fetcher.mock("DELETE", "/api/v0/services/foo", handler))

        service = await cli.delete("foo")

        assert handler.call_args.args[0].body == {}
        assert service.memo == "bye"

    @pytest.mark.asyncio
    async def test_list_metric_names(self, fetcher):
        cli = ServicesApiClient(
            fetcher.mock("GET", "/api/v0/services/foo/metric-names", Mock(return_value={"names": ["req.count"]}))
        )

        assert await cli.list_metric_names("foo") == ["req.count"]


class TestRoles:
    @pytest.mark.asyncio
    async def test_list_and_create(self, fetcher):
        create = Mock(return_value={"name": "web", "memo": "frontend"})
        cli = ServicesApiClient(
            fetcher.mock("GET", "/api/v0/services/foo/roles", Mock(return_value={"roles": [{"name": "web", "memo": ""}]}))
            .mock("POST", "/api/v0/services/foo/roles", create)
        )

        assert await cli.list_roles("foo") == [Role(name="web")]
        role = await cli.create_role("foo", CreateRoleInput(name="web", memo="frontend"))

        assert create.call_args.args[0].body == {"name": "web", "memo": "frontend"}
        assert role.memo == "frontend"

    @pytest.mark.asyncio
    async def test_delete_role_splits_fullname(self, fetcher):
        handler = Mock(return_value={"name": "qux", "memo": ""})
        cli = ServicesApiClient(fetcher.mock("DELETE", "/api/v0/services/baz/roles/qux", handler))

        role = await cli.delete_role("baz: qux")

        assert role.name == "qux"
        assert handler.call_args.args[0].body == {}

    @pytest.mark.asyncio
    async def test_invalid_fullname_fails_before_io(self, fetcher):
        handler = Mock()
        cli = ServicesApiClient(fetcher.mock("DELETE", "/api/v0/services/foo/roles/bar", handler))

        with pytest.raises(RoleFullnameSyntaxError):
            await cli.delete_role("foo:bar:baz")

        handler.assert_not_called()


class TestMetadata:
    @pytest.mark.asyncio
    async def test_service_metadata(self, fetcher):
        putter = Mock(return_value={"success": True})
        deleter = Mock(return_value={"success": True})
        cli = ServicesApiClient(
            fetcher.mock("GET", "/api/v0/services/foo/metadata", Mock(return_value={"metadata": [{"namespace": "ns"}]}))
            .mock("GET", "/api/v0/services/foo/metadata/ns", Mock(return_value=[1, 2, 3]))
            .mock("PUT", "/api/v0/services/foo/metadata/ns", putter)
            .mock("DELETE", "/api/v0/services/foo/metadata/ns", deleter)
        )

        assert await cli.list_metadata_namespaces("foo") == ["ns"]
        assert await cli.get_metadata("foo", "ns") == [1, 2, 3]
        await cli.put_metadata("foo", "ns", "plain string")
        await cli.delete_metadata("foo", "ns")

        assert putter.call_args.args[0].body == "plain string"
        assert deleter.call_args.args[0].body == {}

    @pytest.mark.asyncio
    async def test_role_metadata(self, fetcher):
        putter = Mock(return_value={"success": True})
        deleter = Mock(return_value={"success": True})
        base = "/api/v0/services/foo/roles/web/metadata"
        cli = ServicesApiClient(
            fetcher.mock("GET", base, Mock(return_value={"metadata": [{"namespace": "ns"}]}))
            .mock("GET", f"{base}/ns", Mock(return_value={"owner": "team-a"}))
            .mock("PUT", f"{base}/ns", putter)
            .mock("DELETE", f"{base}/ns", deleter)
        )

        assert await cli.list_role_metadata_namespaces("foo:web") == ["ns"]
        assert await cli.get_role_metadata("foo:web", "ns") == {"owner": "team-a"}
        await cli.put_role_metadata("foo:web", "ns", {"owner": "team-b"})
        await cli.delete_role_metadata("foo:web", "ns")

        assert putter.call_args.args[0].body == {"owner": "team-b"}
        assert deleter.call_args.args[0].body == {}
