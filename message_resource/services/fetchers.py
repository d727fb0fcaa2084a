"""Fetch capabilities that retrieve resource file text."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol

import httpx

from message_resource.logging import logger
from message_resource.services.exceptions import FetchError
from message_resource.utils.retry import retry_async


class Fetcher(Protocol):
    """Return the text behind ``url`` or raise :class:`FetchError`."""

    async def __call__(self, url: str) -> str: ...


class HttpxFetcher:
    """GET resource files over HTTP; only a 200 response counts as success."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 1,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or "",
            follow_redirects=True,
        )
        self._timeout = timeout
        self._max_attempts = max_attempts

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def __call__(self, url: str) -> str:
        if self._client.is_closed:
            raise FetchError(url, detail="HTTP client is closed")

        async def _request():
            response = await self._client.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response

        try:
            response = await retry_async(
                _request,
                max_attempts=self._max_attempts,
                base_delay=0.5,
                retry_on=(httpx.RequestError,),
                logger=logger,
                operation_name="fetch_resource",
            )
        except httpx.HTTPStatusError as exc:
            raise FetchError(url, status_code=exc.response.status_code) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise FetchError(url, detail=str(exc) or exc.__class__.__name__) from exc

        if response.status_code != 200:
            raise FetchError(url, status_code=response.status_code)
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class LocalFileFetcher:
    """Read resource files from disk, relative to ``root`` when given."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else None

    def _resolve(self, url: str) -> Path:
        path = Path(url)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    async def __call__(self, url: str) -> str:
        path = self._resolve(url)
        if not path.is_file():
            raise FetchError(url, status_code=404)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(url, detail=str(exc)) from exc


__all__ = ["Fetcher", "HttpxFetcher", "LocalFileFetcher"]
