"""Cliente asíncrono y tipado para la API REST de Mackerel.

Uso rápido:

    from mackerel_client import MackerelClient

    client = MackerelClient("<api key>")
    hosts = await client.hosts.list(service_name="foo")

Por qué esta estructura:
- `core` define el modelo de dominio (Pydantic v2), contratos y configuración.
- `adapters` contiene el I/O: transporte HTTP (httpx) y clientes por recurso.
"""

from __future__ import annotations

import logging

from mackerel_client.__version__ import __version__
from mackerel_client.client import MackerelClient
from mackerel_client.core.config import ClientSettings
from mackerel_client.core.domain.roles import make_role_fullname, parse_role_fullname
from mackerel_client.core.domain.timestamps import from_epoch_seconds, to_epoch_seconds
from mackerel_client.core.errors import (
    MackerelError,
    NotMockedError,
    RequestError,
    RoleFullnameSyntaxError,
    UnknownTypeError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "ClientSettings",
    "MackerelClient",
    "MackerelError",
    "NotMockedError",
    "RequestError",
    "RoleFullnameSyntaxError",
    "UnknownTypeError",
    "from_epoch_seconds",
    "make_role_fullname",
    "parse_role_fullname",
    "to_epoch_seconds",
]
