"""Conversión entre epoch seconds (wire) y `datetime` (dominio).

Regla única para todos los recursos:
- wire -> dominio: segundos a `datetime` UTC con zona horaria.
- dominio -> wire: `floor(dt.timestamp())`; nunca se envía sub-segundo.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone


def from_epoch_seconds(seconds: int | float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def to_epoch_seconds(value: datetime) -> int:
    """Convierte a epoch seconds. Un `datetime` naive se interpreta como UTC."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return math.floor(value.timestamp())
