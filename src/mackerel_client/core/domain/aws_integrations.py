"""Integraciones con AWS.

Por qué un solo modelo de servicio:
- El tipo de servicio es abierto (AWS agrega servicios); no sirve como
  discriminante cerrado.
- Solo EC2 y RDS admiten retiro automático; para el resto
  `retire_automatically` queda en `None`.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from mackerel_client.core.domain.common import DomainModel, InputModel

KNOWN_AWS_SERVICE_TYPES: tuple[str, ...] = (
    "EC2",
    "ELB",
    "ALB",
    "NLB",
    "RDS",
    "Redshift",
    "ElastiCache",
    "SQS",
    "Lambda",
    "DynamoDB",
    "CloudFront",
    "APIGateway",
    "Kinesis",
    "S3",
    "ES",
    "ECSCluster",
    "SES",
    "States",
    "EFS",
    "Firehose",
    "Batch",
    "WAF",
    "Billing",
    "Route 53",
    "Connect",
    "DocDB",
    "CodeBuild",
)

AUTO_RETIREMENT_SUPPORTED_TYPES = frozenset({"EC2", "RDS"})


def supports_auto_retirement(service_type: str) -> bool:
    return service_type in AUTO_RETIREMENT_SUPPORTED_TYPES


class AwsIntegrationAuthAccessKey(DomainModel):
    type: Literal["accessKey"] = "accessKey"
    access_key: str


class AwsIntegrationAuthAssumeRole(DomainModel):
    type: Literal["assumeRole"] = "assumeRole"
    role_arn: str
    external_id: str | None = None


AwsIntegrationAuth = Annotated[
    Union[AwsIntegrationAuthAccessKey, AwsIntegrationAuthAssumeRole],
    Field(discriminator="type"),
]


class AwsIntegrationServiceMetricsInclude(DomainModel):
    type: Literal["include"] = "include"
    names: list[str]


class AwsIntegrationServiceMetricsExclude(DomainModel):
    type: Literal["exclude"] = "exclude"
    names: list[str]


AwsIntegrationServiceMetrics = Annotated[
    Union[AwsIntegrationServiceMetricsInclude, AwsIntegrationServiceMetricsExclude],
    Field(discriminator="type"),
]


class AwsIntegrationService(DomainModel):
    type: str = Field(..., description="Tipo de servicio AWS (`EC2`, `RDS`, `ALB`, ...).")
    role_fullname: str | None = None
    metrics: AwsIntegrationServiceMetrics
    retire_automatically: bool | None = Field(
        default=None,
        description="Solo presente para servicios con retiro automático (EC2, RDS).",
    )


class AwsIntegrationTags(DomainModel):
    include: str = ""
    exclude: str = ""


class AwsIntegration(DomainModel):
    id: str
    name: str
    memo: str = ""
    auth: AwsIntegrationAuth
    region: str
    tags: AwsIntegrationTags = Field(default_factory=AwsIntegrationTags)
    services: list[AwsIntegrationService] = Field(default_factory=list)


# --- Entradas ---


class AwsIntegrationAuthAccessKeyInput(InputModel):
    type: Literal["accessKey"] = "accessKey"
    access_key: str
    secret_key: str


class AwsIntegrationAuthAssumeRoleInput(InputModel):
    type: Literal["assumeRole"] = "assumeRole"
    role_arn: str
    external_id: str | None = None


AwsIntegrationAuthInput = Annotated[
    Union[AwsIntegrationAuthAccessKeyInput, AwsIntegrationAuthAssumeRoleInput],
    Field(discriminator="type"),
]


class AwsIntegrationTagsInput(InputModel):
    include: str | None = None
    exclude: str | None = None


class AwsIntegrationServiceInput(InputModel):
    type: str
    role_fullname: str | None = None
    metrics: AwsIntegrationServiceMetrics | None = None
    retire_automatically: bool | None = None


class CreateAwsIntegrationInput(InputModel):
    name: str
    memo: str | None = None
    auth: AwsIntegrationAuthInput
    region: str
    tags: AwsIntegrationTagsInput | None = None
    services: list[AwsIntegrationServiceInput] | None = None


class UpdateAwsIntegrationInput(InputModel):
    """Como la de creación, pero `auth` es opcional: sin él se conservan las credenciales."""

    name: str
    memo: str | None = None
    auth: AwsIntegrationAuthInput | None = None
    region: str
    tags: AwsIntegrationTagsInput | None = None
    services: list[AwsIntegrationServiceInput] | None = None
