"""Shared fixtures: an in-memory fetcher and ready-to-use settings."""

from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio

from message_resource.config import ResourceSettings
from message_resource.i18n.service import MessageResource
from message_resource.services.exceptions import FetchError


class StubFetcher:
    """Serves files from a dict; unknown URLs fail with a 404."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(files or {})
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def hold(self, url: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[url] = gate
        return gate

    async def __call__(self, url: str) -> str:
        self.calls.append(url)
        gate = self._gates.get(url)
        if gate is not None:
            await gate.wait()
        if url not in self.files:
            raise FetchError(url, status_code=404)
        return self.files[url]


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict]] = []

    def _record(self, level: str, event: str, **kwargs) -> None:
        self.events.append((level, event, kwargs))

    def debug(self, event: str, **kwargs) -> None:
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        self._record("warning", event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        self._record("error", event, **kwargs)

    def names(self) -> list[str]:
        return [event for _, event, _ in self.events]


async def drain(turns: int = 10) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def settings() -> ResourceSettings:
    return ResourceSettings(_env_file=None, default_locale="en_US")


@pytest.fixture
def fetcher() -> StubFetcher:
    return StubFetcher()


@pytest_asyncio.fixture
async def resources(settings, fetcher):
    instance = MessageResource(settings, fetcher=fetcher)
    try:
        yield instance
    finally:
        await instance.aclose()
