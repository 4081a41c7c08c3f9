"""Excepciones del cliente.

Taxonomía:
- `RequestError`: la API respondió con un status no-2xx.
- `UnknownTypeError`: discriminante desconocido al mapear wire <-> dominio.
  Es un fallo rápido intencional: el modelo del cliente quedó desfasado
  respecto al servidor.
- `RoleFullnameSyntaxError`: identificador `service:role` mal formado.

Ninguna se reintenta ni se registra aquí; siempre se propagan al llamador.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class MackerelError(Exception):
    """Base de todas las excepciones del cliente."""


class RequestError(MackerelError):
    """La API devolvió un status no-2xx.

    `request` y `response` quedan adjuntos para inspección programática.
    """

    def __init__(
        self,
        *,
        method: str,
        path: str,
        status_code: int,
        body: str = "",
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        message = f"Failed to fetch {method} {path}: {status_code}"
        if body:
            message = f"{message} {body}"
        super().__init__(message)
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        self.request = request
        self.response = response


class UnknownTypeError(MackerelError):
    """Discriminante de unión no reconocido.

    `raw` conserva el registro completo (wire o input) que lo provocó.
    """

    def __init__(self, kind: str, type_: Any, raw: Any) -> None:
        super().__init__(f"Unknown {kind} type: {type_}")
        self.kind = kind
        self.type = type_
        self.raw = raw


class RoleFullnameSyntaxError(MackerelError, ValueError):
    """El role fullname no tiene la forma `service:role`."""

    def __init__(self, fullname: str) -> None:
        super().__init__(f"Invalid role fullname: {fullname!r}")
        self.fullname = fullname


class NotMockedError(MackerelError, LookupError):
    """`MockFetcher` no tiene handler registrado para la petición."""

    def __init__(self, method: str, path: str) -> None:
        super().__init__(f"{method} {path} is not mocked")
        self.method = method
        self.path = path
