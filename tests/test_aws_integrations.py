"""Tests de AwsIntegrationsApiClient."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from mackerel_client.adapters.resources.aws_integrations import (
    AwsIntegrationsApiClient,
    from_raw_aws_integration,
    to_raw_update_aws_integration_input,
    to_update_aws_integration_input,
)
from mackerel_client.core.domain.aws_integrations import (
    AwsIntegrationAuthAccessKey,
    AwsIntegrationAuthAccessKeyInput,
    AwsIntegrationAuthAssumeRole,
    AwsIntegrationAuthAssumeRoleInput,
    AwsIntegrationService,
    AwsIntegrationServiceInput,
    AwsIntegrationServiceMetricsExclude,
    AwsIntegrationServiceMetricsInclude,
    AwsIntegrationTags,
    AwsIntegrationTagsInput,
    CreateAwsIntegrationInput,
    UpdateAwsIntegrationInput,
)

RAW_INTEGRATION = {
    "id": "integration-0",
    "name": "my integration",
    "memo": "test",
    "key": None,
    "roleArn": "test-roleArn",
    "externalId": "test-externalId",
    "region": "ap-northeast-1",
    "includedTags": "test:include",
    "excludedTags": "test:exclude",
    "services": {
        "EC2": {
            "enable": True,
            "retireAutomatically": True,
            "role": "foo:xxx",
            "excludedMetrics": ["test-metric"],
        },
        "ALB": {"enable": False, "role": None, "excludedMetrics": []},
        "SQS": {"enable": True, "role": None, "includedMetrics": ["sqs.messages"]},
    },
}

SERVICE_INPUT = AwsIntegrationServiceInput(
    type="EC2",
    role_fullname="foo:xxx",
    metrics=AwsIntegrationServiceMetricsExclude(names=["test-metric"]),
    retire_automatically=True,
)

EXPECTED_SERVICES_BODY = {
    "EC2": {
        "enable": True,
        "retireAutomatically": True,
        "role": "foo:xxx",
        "excludedMetrics": ["test-metric"],
    },
}


class TestFromRawAwsIntegration:
    def test_assume_role_and_enabled_services_only(self):
        integration = from_raw_aws_integration(RAW_INTEGRATION)

        assert integration.auth == AwsIntegrationAuthAssumeRole(
            role_arn="test-roleArn",
            external_id="test-externalId",
        )
        assert integration.tags == AwsIntegrationTags(include="test:include", exclude="test:exclude")
        assert integration.services == [
            AwsIntegrationService(
                type="EC2",
                role_fullname="foo:xxx",
                metrics=AwsIntegrationServiceMetricsExclude(names=["test-metric"]),
                retire_automatically=True,
            ),
            AwsIntegrationService(
                type="SQS",
                metrics=AwsIntegrationServiceMetricsInclude(names=["sqs.messages"]),
            ),
        ]

    def test_access_key_auth(self):
        integration = from_raw_aws_integration(
            {**RAW_INTEGRATION, "key": "AKIA", "roleArn": None, "externalId": None}
        )

        assert integration.auth == AwsIntegrationAuthAccessKey(access_key="AKIA")

    def test_rds_without_retire_flag_defaults_false(self):
        integration = from_raw_aws_integration(
            {**RAW_INTEGRATION, "services": {"RDS": {"enable": True, "excludedMetrics": []}}}
        )

        (service,) = integration.services
        assert service.retire_automatically is False
        assert service.role_fullname is None


class TestWrites:
    @pytest.mark.asyncio
    async def test_create_with_access_key_sends_explicit_nulls(self, fetcher):
        handler = Mock(return_value=RAW_INTEGRATION)
        cli = AwsIntegrationsApiClient(fetcher.mock("POST", "/api/v0/aws-integrations", handler))

        await cli.create(
            CreateAwsIntegrationInput(
                name="my integration",
                auth=AwsIntegrationAuthAccessKeyInput(access_key="AKIA", secret_key="secret"),
                region="ap-northeast-1",
                services=[
                    SERVICE_INPUT,
                    AwsIntegrationServiceInput(type="ALB"),
                    AwsIntegrationServiceInput(
                        type="SQS",
                        metrics=AwsIntegrationServiceMetricsInclude(names=["sqs.messages"]),
                        retire_automatically=True,
                    ),
                ],
            )
        )

        assert handler.call_args.args[0].body == {
            "name": "my integration",
            "memo": "",
            "key": "AKIA",
            "secretKey": "secret",
            "roleArn": None,
            "externalId": None,
            "region": "ap-northeast-1",
            "includedTags": "",
            "excludedTags": "",
            "services": {
                **EXPECTED_SERVICES_BODY,
                "ALB": {"enable": True, "role": None, "excludedMetrics": []},
                "SQS": {"enable": True, "role": None, "includedMetrics": ["sqs.messages"]},
            },
        }

    @pytest.mark.asyncio
    async def test_create_with_assume_role(self, fetcher):
        handler = Mock(return_value=RAW_INTEGRATION)
        cli = AwsIntegrationsApiClient(fetcher.mock("POST", "/api/v0/aws-integrations", handler))

        integration = await cli.create(
            CreateAwsIntegrationInput(
                name="my integration",
                memo="test",
                auth=AwsIntegrationAuthAssumeRoleInput(role_arn="test-roleArn", external_id="test-externalId"),
                region="ap-northeast-1",
                tags=AwsIntegrationTagsInput(include="test:include", exclude="test:exclude"),
                services=[SERVICE_INPUT],
            )
        )

        assert handler.call_args.args[0].body == {
            "name": "my integration",
            "memo": "test",
            "key": None,
            "secretKey": None,
            "roleArn": "test-roleArn",
            "externalId": "test-externalId",
            "region": "ap-northeast-1",
            "includedTags": "test:include",
            "excludedTags": "test:exclude",
            "services": EXPECTED_SERVICES_BODY,
        }
        assert integration.id == "integration-0"

    @pytest.mark.asyncio
    async def test_update_without_auth_omits_credentials_and_unset_tags(self, fetcher):
        handler = Mock(return_value=RAW_INTEGRATION)
        cli = AwsIntegrationsApiClient(fetcher.mock("PUT", "/api/v0/aws-integrations/integration-0", handler))

        await cli.update(
            "integration-0",
            UpdateAwsIntegrationInput(
                name="my integration",
                memo="test",
                region="ap-northeast-1",
                tags=AwsIntegrationTagsInput(include="test:include"),
                services=[SERVICE_INPUT],
            ),
        )

        assert handler.call_args.args[0].body == {
            "name": "my integration",
            "memo": "test",
            "region": "ap-northeast-1",
            "includedTags": "test:include",
            "services": EXPECTED_SERVICES_BODY,
        }

    @pytest.mark.asyncio
    async def test_update_with_auth(self, fetcher):
        handler = Mock(return_value=RAW_INTEGRATION)
        cli = AwsIntegrationsApiClient(fetcher.mock("PUT", "/api/v0/aws-integrations/integration-0", handler))

        await cli.update(
            "integration-0",
            UpdateAwsIntegrationInput(
                name="my integration",
                auth=AwsIntegrationAuthAssumeRoleInput(role_arn="test-roleArn"),
                region="ap-northeast-1",
            ),
        )

        body = handler.call_args.args[0].body
        assert body["key"] is None
        assert body["roleArn"] == "test-roleArn"
        assert "externalId" not in body
        assert body["services"] == {}
        assert "includedTags" not in body


class TestRoundTrip:
    def test_read_integration_serializes_back_as_update(self):
        raw = to_raw_update_aws_integration_input(from_raw_aws_integration(RAW_INTEGRATION))

        # Los servicios deshabilitados no se leen, así que tampoco se reenvían.
        assert raw == {
            "name": "my integration",
            "memo": "test",
            "key": None,
            "secretKey": None,
            "roleArn": "test-roleArn",
            "externalId": "test-externalId",
            "region": "ap-northeast-1",
            "includedTags": "test:include",
            "excludedTags": "test:exclude",
            "services": {
                **EXPECTED_SERVICES_BODY,
                "SQS": {"enable": True, "role": None, "includedMetrics": ["sqs.messages"]},
            },
        }

    def test_access_key_integration_keeps_server_credentials(self):
        integration = from_raw_aws_integration(
            {**RAW_INTEGRATION, "key": "AKIA", "roleArn": None, "externalId": None}
        )

        input = to_update_aws_integration_input(integration)
        raw = to_raw_update_aws_integration_input(input)

        assert input.auth is None
        assert not {"key", "secretKey", "roleArn", "externalId"} & raw.keys()

    @pytest.mark.asyncio
    async def test_update_accepts_read_integration(self, fetcher):
        handler = Mock(return_value=RAW_INTEGRATION)
        cli = AwsIntegrationsApiClient(fetcher.mock("PUT", "/api/v0/aws-integrations/integration-0", handler))
        integration = from_raw_aws_integration(RAW_INTEGRATION)

        await cli.update("integration-0", integration)

        assert handler.call_args.args[0].body["roleArn"] == "test-roleArn"
        assert handler.call_args.args[0].body["services"]["EC2"] == EXPECTED_SERVICES_BODY["EC2"]


class TestOtherOperations:
    @pytest.mark.asyncio
    async def test_list_get_delete(self, fetcher):
        delete = Mock(return_value=RAW_INTEGRATION)
        cli = AwsIntegrationsApiClient(
            fetcher.mock("GET", "/api/v0/aws-integrations", Mock(return_value={"aws_integrations": [RAW_INTEGRATION]}))
            .mock("GET", "/api/v0/aws-integrations/integration-0", Mock(return_value=RAW_INTEGRATION))
            .mock("DELETE", "/api/v0/aws-integrations/integration-0", delete)
        )

        assert [i.id for i in await cli.list()] == ["integration-0"]
        assert (await cli.get("integration-0")).region == "ap-northeast-1"
        await cli.delete("integration-0")

        assert delete.call_args.args[0].body == {}

    @pytest.mark.asyncio
    async def test_create_external_id(self, fetcher):
        handler = Mock(return_value={"externalId": "test-externalId"})
        cli = AwsIntegrationsApiClient(fetcher.mock("POST", "/api/v0/aws-integrations-external-id", handler))

        assert await cli.create_external_id() == "test-externalId"
        assert handler.call_args.args[0].body == {}

    @pytest.mark.asyncio
    async def test_list_metric_names(self, fetcher):
        cli = AwsIntegrationsApiClient(
            fetcher.mock(
                "GET",
                "/api/v0/aws-integrations-excludable-metrics",
                Mock(return_value={"EC2": ["ec2.cpu.used"], "ALB": []}),
            )
        )

        assert await cli.list_metric_names() == {"EC2": ["ec2.cpu.used"], "ALB": []}
