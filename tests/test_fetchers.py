"""Tests for the HTTP and local file fetchers."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from message_resource.config import ResourceSettings
from message_resource.i18n.service import MessageResource
from message_resource.services.exceptions import FetchError
from message_resource.services.fetchers import HttpxFetcher, LocalFileFetcher


@pytest.mark.asyncio
async def test_httpx_fetcher_returns_text():
    requested: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, text="title=Home")

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport, base_url="https://cdn.example") as client:
        fetcher = HttpxFetcher(client)
        text = await fetcher("i18n/Home.properties")

    assert text == "title=Home"
    assert requested == ["https://cdn.example/i18n/Home.properties"]


@pytest.mark.asyncio
async def test_httpx_fetcher_reports_status_failures():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        fetcher = HttpxFetcher(client, max_attempts=3)
        with pytest.raises(FetchError) as excinfo:
            await fetcher("https://cdn.example/Home.properties")

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == "https://cdn.example/Home.properties"


@pytest.mark.asyncio
async def test_httpx_fetcher_rejects_non_200_success_codes():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(FetchError) as excinfo:
            await HttpxFetcher(client)("https://cdn.example/Home.properties")

    assert excinfo.value.status_code == 204


@pytest.mark.asyncio
async def test_httpx_fetcher_retries_connection_errors(monkeypatch):
    async def _noop_sleep(delay):
        return None

    monkeypatch.setattr("message_resource.utils.retry.asyncio.sleep", _noop_sleep)
    attempts = {"count": 0}

    async def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        if attempts["count"] < 3:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, text="a=1")

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        text = await HttpxFetcher(client, max_attempts=3)("https://cdn.example/A.properties")

    assert text == "a=1"
    assert attempts["count"] == 3


@pytest.mark.asyncio
async def test_httpx_fetcher_wraps_connection_errors():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(FetchError) as excinfo:
            await HttpxFetcher(client)("https://cdn.example/A.properties")

    assert excinfo.value.status_code is None
    assert "refused" in excinfo.value.detail


@pytest.mark.asyncio
async def test_message_resource_over_http():
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/i18n/Home_de_DE.properties":
            return httpx.Response(200, text="title=Startseite")
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport, base_url="https://cdn.example") as client:
        resources = MessageResource(
            ResourceSettings(_env_file=None, file_path="/i18n"),
            fetcher=HttpxFetcher(client),
        )
        report = await resources.load(["Home", "Other"], locale="de-DE")

    assert sorted(report.failures) == ["Other"]
    assert resources.get("title", "Home", "de_DE") == "Startseite"


@pytest.mark.asyncio
async def test_local_file_fetcher_reads_relative_to_root(tmp_path: Path):
    (tmp_path / "Home_fr_FR.properties").write_text("title=Caf\\u00e9", encoding="utf-8")
    fetcher = LocalFileFetcher(tmp_path)

    assert await fetcher("Home_fr_FR.properties") == "title=Caf\\u00e9"

    with pytest.raises(FetchError) as excinfo:
        await fetcher("Missing.properties")
    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_local_file_fetcher_accepts_absolute_paths(tmp_path: Path):
    target = tmp_path / "A.properties"
    target.write_text("a=1", encoding="utf-8")

    assert await LocalFileFetcher(tmp_path / "elsewhere")(str(target)) == "a=1"


@pytest.mark.asyncio
async def test_httpx_fetcher_reports_closed_client():
    fetcher = HttpxFetcher()
    await fetcher.aclose()

    with pytest.raises(FetchError) as excinfo:
        await fetcher("https://cdn.example/Home.properties")

    assert "closed" in excinfo.value.detail


@pytest.mark.asyncio
async def test_httpx_fetcher_wraps_invalid_urls():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="a=1")

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(FetchError) as excinfo:
            await HttpxFetcher(client)("http://cdn.example:notaport/A.properties")

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_load_with_closed_client_still_calls_back():
    fetcher = HttpxFetcher()
    await fetcher.aclose()
    resources = MessageResource(ResourceSettings(_env_file=None), fetcher=fetcher)
    calls: list[str] = []

    report = await resources.load("Home", lambda: calls.append("done"))

    assert calls == ["done"]
    assert isinstance(report.failures["Home"], FetchError)
