"""Fixtures compartidas: un `MockFetcher` limpio por test y helpers de fechas."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mackerel_client.adapters.mock_fetcher import MockFetcher


@pytest.fixture
def fetcher() -> MockFetcher:
    return MockFetcher()


def utc(iso: str) -> datetime:
    """`"2024-06-06T12:34:56"` -> datetime aware en UTC."""

    return datetime.fromisoformat(iso).replace(tzinfo=timezone.utc)
