"""Transporte HTTP sobre httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts, headers y autenticación por API key.
- Convierte status no-2xx en `RequestError` en un único punto.
- Facilita testeo: se inyecta un `httpx` transport (p.ej. `MockTransport`).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from mackerel_client.core.config import ClientSettings
from mackerel_client.core.errors import RequestError
from mackerel_client.core.interfaces.fetcher import FetchMethod, Fetcher, QueryParams

logger = logging.getLogger(__name__)


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la API de Mackerel.

    Por qué un builder:
    - Centraliza base URL, timeout y headers para que todas las peticiones se
      comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or ClientSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.api_base,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


class HttpxFetcher(Fetcher):
    """Implementación de `Fetcher` sobre httpx.

    Se construye un `AsyncClient` por petición; cancelar la tarea que espera
    `fetch` cancela solo esa petición.
    """

    def __init__(
        self,
        api_key: str,
        *,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._settings = settings or ClientSettings()
        self._transport = transport

    async def fetch(
        self,
        method: FetchMethod,
        path: str,
        *,
        params: QueryParams | None = None,
        body: Any = None,
    ) -> Any:
        headers = {"X-Api-Key": self._api_key}
        request_kwargs: dict[str, Any] = {}
        if params is not None:
            request_kwargs["params"] = list(params)
        if body is not None:
            # httpx fija Content-Type: application/json.
            request_kwargs["json"] = body

        async with build_async_client(
            self._settings,
            extra_headers=headers,
            transport=self._transport,
        ) as client:
            resp = await client.request(method, path, **request_kwargs)

        logger.debug("%s %s -> %s", method, path, resp.status_code)

        if not resp.is_success:
            raise RequestError(
                method=method,
                path=path,
                status_code=resp.status_code,
                body=resp.text,
                request=resp.request,
                response=resp,
            )
        if not resp.content:
            return None
        return resp.json()
