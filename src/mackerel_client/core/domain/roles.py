"""Role fullname: identificador compuesto `"{service}:{role}"`.

Por qué un módulo propio:
- Hosts, servicios, dashboards e integraciones usan el mismo identificador;
  el parseo/validación vive en un único lugar.
"""

from __future__ import annotations

import re

from mackerel_client.core.errors import RoleFullnameSyntaxError

_ROLE_FULLNAME_RE = re.compile(r"([^:]+):\s*([^:]+)")


def parse_role_fullname(fullname: str) -> tuple[str, str]:
    """Separa `service:role` en `(service, role)`.

    Se tolera espacio en blanco tras los dos puntos (`"baz: qux"`). Cualquier
    otra forma (sin dos puntos, más de dos partes, partes vacías) falla con
    `RoleFullnameSyntaxError` antes de tocar la red.
    """

    match = _ROLE_FULLNAME_RE.fullmatch(fullname)
    if match is None:
        raise RoleFullnameSyntaxError(fullname)
    service_name, role_name = match.group(1), match.group(2)
    if not service_name.strip() or not role_name.strip():
        raise RoleFullnameSyntaxError(fullname)
    return service_name, role_name


def make_role_fullname(service_name: str, role_name: str) -> str:
    return f"{service_name}:{role_name}"
