"""Puntos de métricas (series temporales)."""

from __future__ import annotations

from datetime import datetime

from mackerel_client.core.domain.common import DomainModel


class DataPoint(DomainModel):
    """Un valor en un instante. Se usa tanto para leer como para enviar."""

    time: datetime
    value: float
