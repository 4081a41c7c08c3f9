"""Clientes por recurso de la API de Mackerel.

Cada módulo contiene:
- Los `TypedDict` del formato wire (camelCase, epoch seconds).
- Las funciones `from_raw_*` / `to_raw_*` que traducen wire <-> dominio.
- La clase `*ApiClient` que hace exactamente una llamada HTTP por operación.
"""

from mackerel_client.adapters.resources.alert_group_settings import AlertGroupSettingsApiClient
from mackerel_client.adapters.resources.alerts import AlertsApiClient
from mackerel_client.adapters.resources.aws_integrations import AwsIntegrationsApiClient
from mackerel_client.adapters.resources.channels import ChannelsApiClient
from mackerel_client.adapters.resources.dashboards import DashboardsApiClient
from mackerel_client.adapters.resources.downtimes import DowntimesApiClient
from mackerel_client.adapters.resources.graph_annotations import GraphAnnotationsApiClient
from mackerel_client.adapters.resources.graph_defs import GraphDefsApiClient
from mackerel_client.adapters.resources.hosts import HostsApiClient
from mackerel_client.adapters.resources.metrics import MetricsApiClient
from mackerel_client.adapters.resources.monitors import MonitorsApiClient
from mackerel_client.adapters.resources.org import OrgApiClient
from mackerel_client.adapters.resources.services import ServicesApiClient
from mackerel_client.adapters.resources.users import UsersApiClient

__all__ = [
    "AlertGroupSettingsApiClient",
    "AlertsApiClient",
    "AwsIntegrationsApiClient",
    "ChannelsApiClient",
    "DashboardsApiClient",
    "DowntimesApiClient",
    "GraphAnnotationsApiClient",
    "GraphDefsApiClient",
    "HostsApiClient",
    "MetricsApiClient",
    "MonitorsApiClient",
    "OrgApiClient",
    "ServicesApiClient",
    "UsersApiClient",
]
