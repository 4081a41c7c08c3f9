"""Tests de HttpxFetcher contra `httpx.MockTransport` (sin red)."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from mackerel_client.adapters.http_client import HttpxFetcher, build_async_client
from mackerel_client.core.config import ClientSettings
from mackerel_client.core.errors import RequestError
from mackerel_client.core.interfaces.fetcher import Fetcher


def _settings(**overrides) -> ClientSettings:
    return ClientSettings(_env_file=None, api_base="https://mackerel.test/", **overrides)


class _Recorder:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _fetcher(recorder: _Recorder, **settings_overrides) -> HttpxFetcher:
    return HttpxFetcher(
        "secret-key",
        settings=_settings(**settings_overrides),
        transport=httpx.MockTransport(recorder),
    )


@pytest.mark.asyncio
async def test_get_joins_base_url_and_sends_api_key():
    recorder = _Recorder(httpx.Response(200, json={"name": "my-org"}))

    res = await _fetcher(recorder).fetch("GET", "/api/v0/org")

    assert res == {"name": "my-org"}
    (request,) = recorder.requests
    assert request.method == "GET"
    assert str(request.url) == "https://mackerel.test/api/v0/org"
    assert request.headers["X-Api-Key"] == "secret-key"
    assert request.headers["User-Agent"].startswith("mackerel-client-python/")
    assert request.content == b""


@pytest.mark.asyncio
async def test_params_keep_order_and_repeated_keys():
    recorder = _Recorder(httpx.Response(200, json={"hosts": []}))

    await _fetcher(recorder).fetch(
        "GET",
        "/api/v0/hosts",
        params=[("service", "foo"), ("role", "a"), ("role", "b")],
    )

    (request,) = recorder.requests
    assert request.url.params.multi_items() == [("service", "foo"), ("role", "a"), ("role", "b")]


@pytest.mark.asyncio
async def test_body_is_sent_as_json():
    recorder = _Recorder(httpx.Response(200, json={"id": "x"}))

    await _fetcher(recorder).fetch("DELETE", "/api/v0/monitors/x", body={})

    (request,) = recorder.requests
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {}


@pytest.mark.asyncio
async def test_non_2xx_raises_request_error_with_body():
    recorder = _Recorder(httpx.Response(404, text='{"error":"not found"}'))

    with pytest.raises(RequestError) as exc_info:
        await _fetcher(recorder).fetch("GET", "/api/v0/hosts/nope")

    err = exc_info.value
    assert str(err) == 'Failed to fetch GET /api/v0/hosts/nope: 404 {"error":"not found"}'
    assert err.status_code == 404
    assert err.method == "GET"
    assert err.path == "/api/v0/hosts/nope"
    assert err.response is not None
    assert err.request is not None
    assert err.request.url.path == "/api/v0/hosts/nope"


@pytest.mark.asyncio
async def test_non_2xx_without_body_omits_text():
    recorder = _Recorder(httpx.Response(500))

    with pytest.raises(RequestError) as exc_info:
        await _fetcher(recorder).fetch("POST", "/api/v0/tsdb", body=[])

    assert str(exc_info.value) == "Failed to fetch POST /api/v0/tsdb: 500"


@pytest.mark.asyncio
async def test_empty_success_body_returns_none():
    recorder = _Recorder(httpx.Response(204))

    assert await _fetcher(recorder).fetch("POST", "/api/v0/graph-defs/create", body=[]) is None


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    fetcher = HttpxFetcher("k", settings=_settings(), transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.ConnectError):
        await fetcher.fetch("GET", "/api/v0/org")


@pytest.mark.asyncio
async def test_cancelling_one_fetch_leaves_the_other_running():
    release = asyncio.Event()
    started: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        started.append(request.url.path)
        await release.wait()
        return httpx.Response(200, json={"path": request.url.path})

    fetcher = HttpxFetcher("k", settings=_settings(), transport=httpx.MockTransport(handler))
    cancelled = asyncio.create_task(fetcher.fetch("GET", "/api/v0/hosts"))
    survivor = asyncio.create_task(fetcher.fetch("GET", "/api/v0/org"))
    for _ in range(1000):
        if len(started) == 2:
            break
        await asyncio.sleep(0)
    assert sorted(started) == ["/api/v0/hosts", "/api/v0/org"]

    cancelled.cancel()
    with pytest.raises(asyncio.CancelledError):
        await cancelled

    assert not survivor.done()
    release.set()
    assert await asyncio.wait_for(survivor, timeout=5) == {"path": "/api/v0/org"}


def test_httpx_fetcher_implements_fetcher():
    fetcher = HttpxFetcher("k", settings=_settings())

    assert isinstance(fetcher, Fetcher)
    assert Fetcher in HttpxFetcher.__mro__



@pytest.mark.asyncio
async def test_logs_request_without_api_key(caplog):
    recorder = _Recorder(httpx.Response(200, json={}))

    with caplog.at_level(logging.DEBUG, logger="mackerel_client.adapters.http_client"):
        await _fetcher(recorder).fetch("GET", "/api/v0/org")

    assert "GET /api/v0/org -> 200" in caplog.text
    assert "secret-key" not in caplog.text


def test_build_async_client_applies_settings():
    client = build_async_client(_settings(http_timeout_seconds=2.5, user_agent="ua/1"))

    assert str(client.base_url) == "https://mackerel.test/"
    assert client.timeout.connect == 2.5
    assert client.headers["User-Agent"] == "ua/1"
