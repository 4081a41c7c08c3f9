"""Contrato de transporte.

Por qué Protocol:
- Contrato estructural: los adaptadores del paquete lo heredan de forma
  explícita, pero cualquier objeto con un `fetch` compatible también sirve.
- Permite sustituir el transporte HTTP real por `MockFetcher` u otro
  transporte propio sin acoplar los clientes de recursos a httpx.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

FetchMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Pares (clave, valor) ordenados; se admiten claves repetidas.
QueryParams = Sequence[tuple[str, str]]


@dataclass(frozen=True)
class FetchOptions:
    """Lo que recibe un handler de `MockFetcher` por cada petición."""

    params: QueryParams | None = None
    body: Any = None


@runtime_checkable
class Fetcher(Protocol):
    """Contrato mínimo de transporte.

    Reglas:
    - `fetch` es asíncrono porque hace I/O.
    - `params`, si se da, reemplaza la query string.
    - `body=None` significa "sin cuerpo"; cualquier otro valor se envía como JSON.
    - Devuelve el JSON ya parseado de una respuesta 2xx.
    """

    async def fetch(
        self,
        method: FetchMethod,
        path: str,
        *,
        params: QueryParams | None = None,
        body: Any = None,
    ) -> Any:
        ...
