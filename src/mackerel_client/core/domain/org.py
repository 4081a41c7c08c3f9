"""Organización dueña de la API key."""

from __future__ import annotations

from mackerel_client.core.domain.common import DomainModel


class Org(DomainModel):
    name: str
    display_name: str | None = None
