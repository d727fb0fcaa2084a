"""Coordinate concurrent loading of resource modules into the store."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from message_resource.config import ResourceSettings
from message_resource.i18n.locale import is_explicit_locale, normalize_locale
from message_resource.i18n.parser import parse_properties
from message_resource.i18n.resolvers import DEFAULT_MODULE_NAME, FileNameResolver
from message_resource.i18n.store import ResourceStore
from message_resource.services.exceptions import InvalidContentError, MessageResourceError
from message_resource.services.fetchers import Fetcher

LoadCallback = Callable[[], Any]
ModuleSpec = str | Iterable[str] | None


@dataclass(frozen=True, slots=True)
class LoadRequest:
    modules: tuple[str, ...]
    cached: tuple[str, ...]
    locale: str
    file_locale: str


@dataclass(slots=True)
class LoadReport:
    locale: str
    loaded: list[str] = field(default_factory=list)
    cached: list[str] = field(default_factory=list)
    failures: dict[str, MessageResourceError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class LoadCoordinator:
    """Fetch and parse the modules of a load call that are not cached yet.

    Every pending module is fetched concurrently; the completion callback runs
    once, after the last fetch has resolved, whether it succeeded or not.
    """

    def __init__(
        self,
        store: ResourceStore,
        settings: ResourceSettings,
        *,
        file_name_resolver: FileNameResolver,
        fetcher: Fetcher,
        logger=None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.file_name_resolver = file_name_resolver
        self.fetcher = fetcher
        self._logger = logger

    def plan(self, modules: ModuleSpec, locale: Any, current_locale: str) -> LoadRequest:
        valid_locale = normalize_locale(locale, current_locale)
        if valid_locale == self.settings.default_locale and not is_explicit_locale(locale):
            file_locale = ""
        else:
            file_locale = valid_locale

        if isinstance(modules, str) or modules is None:
            names = [modules or DEFAULT_MODULE_NAME]
        else:
            names = list(modules)

        pending: list[str] = []
        cached: list[str] = []
        for name in names:
            if not name or name in pending or name in cached:
                continue
            if self.store.is_loaded(name, valid_locale):
                cached.append(name)
            else:
                pending.append(name)

        return LoadRequest(
            modules=tuple(pending),
            cached=tuple(cached),
            locale=valid_locale,
            file_locale=file_locale,
        )

    def file_url(self, module: str, file_locale: str) -> str:
        file_name = self.file_name_resolver(module, file_locale)
        return f"{self.settings.file_path}{file_name}{self.settings.file_extension}"

    def finish_cached(self, request: LoadRequest, callback: LoadCallback | None = None) -> LoadReport:
        """Complete a request with nothing to fetch, calling back right away."""

        if callback is not None:
            callback()
        return LoadReport(locale=request.locale, cached=list(request.cached))

    async def run(self, request: LoadRequest, callback: LoadCallback | None = None) -> LoadReport:
        if not request.modules:
            return self.finish_cached(request, callback)

        outcomes = await asyncio.gather(
            *(self._load_module(module, request) for module in request.modules)
        )

        report = LoadReport(locale=request.locale, cached=list(request.cached))
        for module, error in outcomes:
            if error is None:
                report.loaded.append(module)
            else:
                report.failures[module] = error

        if self._logger is not None:
            self._logger.info(
                "resources_loaded",
                locale=request.locale,
                loaded=report.loaded,
                failed=sorted(report.failures),
            )
        if callback is not None:
            callback()
        return report

    async def _load_module(
        self, module: str, request: LoadRequest
    ) -> tuple[str, MessageResourceError | None]:
        url = self.file_url(module, request.file_locale)
        try:
            text = await self.fetcher(url)
        except MessageResourceError as exc:
            if self._logger is not None:
                self._logger.warning(
                    "resource_fetch_failed",
                    module=module,
                    locale=request.locale,
                    url=url,
                    error=str(exc),
                )
            return module, exc

        written = parse_properties(text, module, request.locale, self.store, logger=self._logger)
        if written is None:
            return module, InvalidContentError(module, request.locale)
        return module, None


__all__ = ["LoadCallback", "LoadCoordinator", "LoadReport", "LoadRequest"]
