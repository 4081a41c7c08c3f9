"""Fachada: un transporte compartido y un cliente por recurso.

Por qué una fachada:
- El usuario construye un solo objeto con su API key.
- Todos los clientes de recurso comparten el mismo `Fetcher`, así que un
  transporte alternativo (tests, proxy) se inyecta en un único punto.
"""

from __future__ import annotations

import logging

from mackerel_client.adapters.http_client import HttpxFetcher
from mackerel_client.adapters.resources import (
    AlertGroupSettingsApiClient,
    AlertsApiClient,
    AwsIntegrationsApiClient,
    ChannelsApiClient,
    DashboardsApiClient,
    DowntimesApiClient,
    GraphAnnotationsApiClient,
    GraphDefsApiClient,
    HostsApiClient,
    MetricsApiClient,
    MonitorsApiClient,
    OrgApiClient,
    ServicesApiClient,
    UsersApiClient,
)
from mackerel_client.core.config import ClientSettings
from mackerel_client.core.interfaces.fetcher import Fetcher

logger = logging.getLogger(__name__)


class MackerelClient:
    """Punto de entrada del cliente.

    Resolución de config: argumentos explícitos > `ClientSettings` (env vars
    `MACKEREL_*` y `.env`). Sin API key y sin `fetcher` propio se lanza
    `ValueError` antes de cualquier I/O.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        api_base: str | None = None,
        settings: ClientSettings | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        if fetcher is None:
            settings = settings or ClientSettings()
            if api_base is not None:
                settings = settings.model_copy(update={"api_base": api_base})
            key = api_key if api_key is not None else settings.api_key
            if not key:
                raise ValueError("Mackerel API key is required (argument or MACKEREL_API_KEY)")
            logger.debug("Using Mackerel API at %s", settings.api_base)
            fetcher = HttpxFetcher(key, settings=settings)

        self._fetcher = fetcher
        self._alert_group_settings = AlertGroupSettingsApiClient(fetcher)
        self._alerts = AlertsApiClient(fetcher)
        self._aws_integrations = AwsIntegrationsApiClient(fetcher)
        self._channels = ChannelsApiClient(fetcher)
        self._dashboards = DashboardsApiClient(fetcher)
        self._downtimes = DowntimesApiClient(fetcher)
        self._graph_annotations = GraphAnnotationsApiClient(fetcher)
        self._graph_defs = GraphDefsApiClient(fetcher)
        self._hosts = HostsApiClient(fetcher)
        self._metrics = MetricsApiClient(fetcher)
        self._monitors = MonitorsApiClient(fetcher)
        self._org = OrgApiClient(fetcher)
        self._services = ServicesApiClient(fetcher)
        self._users = UsersApiClient(fetcher)

    @property
    def fetcher(self) -> Fetcher:
        return self._fetcher

    @property
    def alert_group_settings(self) -> AlertGroupSettingsApiClient:
        return self._alert_group_settings

    @property
    def alerts(self) -> AlertsApiClient:
        return self._alerts

    @property
    def aws_integrations(self) -> AwsIntegrationsApiClient:
        return self._aws_integrations

    @property
    def channels(self) -> ChannelsApiClient:
        return self._channels

    @property
    def dashboards(self) -> DashboardsApiClient:
        return self._dashboards

    @property
    def downtimes(self) -> DowntimesApiClient:
        return self._downtimes

    @property
    def graph_annotations(self) -> GraphAnnotationsApiClient:
        return self._graph_annotations

    @property
    def graph_defs(self) -> GraphDefsApiClient:
        return self._graph_defs

    @property
    def hosts(self) -> HostsApiClient:
        return self._hosts

    @property
    def metrics(self) -> MetricsApiClient:
        return self._metrics

    @property
    def monitors(self) -> MonitorsApiClient:
        return self._monitors

    @property
    def org(self) -> OrgApiClient:
        return self._org

    @property
    def services(self) -> ServicesApiClient:
        return self._services

    @property
    def users(self) -> UsersApiClient:
        return self._users
