"""Utilidades compartidas del formato wire."""

from __future__ import annotations

from typing import Any


def compact(data: dict[str, Any]) -> dict[str, Any]:
    """Quita las claves cuyo valor es `None` (campo ausente en el wire).

    Solo actúa en el primer nivel; los sub-objetos se compactan donde se
    construyen.
    """

    return {key: value for key, value in data.items() if value is not None}
