"""Locale-aware message lookups backed by remotely loaded resource files."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from message_resource.config import ResourceSettings
from message_resource.i18n.loader import LoadCallback, LoadCoordinator, LoadReport, ModuleSpec
from message_resource.i18n.locale import DEFAULT_LOCALE, normalize_locale
from message_resource.i18n.parser import decode_unicode_escapes
from message_resource.i18n.resolvers import (
    DEFAULT_MODULE_NAME,
    FileNameResolver,
    default_file_name_resolver,
)
from message_resource.i18n.store import ResourceStore, ResourceStoreView
from message_resource.logging import logger
from message_resource.services.exceptions import NotInitializedError
from message_resource.services.fetchers import Fetcher, HttpxFetcher, LocalFileFetcher

AlertHandler = Callable[[str], Any]


def _log_alert(message: str) -> None:
    logger.error("message_resource_alert", message=message)


class MessageResource:
    """Runtime instance owning the configuration, the store and the loader.

    Nothing is global: independent instances keep independent caches.
    """

    def __init__(
        self,
        settings: ResourceSettings | None = None,
        *,
        file_name_resolver: FileNameResolver | None = None,
        fetcher: Fetcher | None = None,
        alert: AlertHandler | None = None,
    ) -> None:
        self._store = ResourceStore()
        self._settings: ResourceSettings | None = None
        self._coordinator: LoadCoordinator | None = None
        self._owned_fetcher: HttpxFetcher | None = None
        self._owned_options: tuple[str | None, float, int] | None = None
        self._retired_fetchers: list[HttpxFetcher] = []
        self._alert = alert or _log_alert
        self._current_locale = DEFAULT_LOCALE
        if settings is not None:
            self.init(settings, file_name_resolver=file_name_resolver, fetcher=fetcher, alert=alert)

    def init(
        self,
        settings: ResourceSettings | None = None,
        *,
        file_name_resolver: FileNameResolver | None = None,
        fetcher: Fetcher | None = None,
        alert: AlertHandler | None = None,
    ) -> None:
        """Configure the instance; loaded resources survive re-initialization."""

        settings = settings or ResourceSettings()
        if alert is not None:
            self._alert = alert
        if fetcher is None:
            fetcher = self._default_fetcher(settings)

        self._settings = settings
        self._current_locale = settings.default_locale
        self._coordinator = LoadCoordinator(
            self._store,
            settings,
            file_name_resolver=file_name_resolver or default_file_name_resolver,
            fetcher=fetcher,
            logger=self._diagnostics,
        )

    def _default_fetcher(self, settings: ResourceSettings) -> Fetcher:
        if settings.transport == "file":
            return LocalFileFetcher()
        options = (settings.base_url, settings.request_timeout_seconds, settings.retry_attempts)
        owned = self._owned_fetcher
        if owned is not None and not owned.is_closed and options == self._owned_options:
            return owned
        if owned is not None:
            # Requests already in flight keep using the old client until aclose().
            self._retired_fetchers.append(owned)
        self._owned_fetcher = HttpxFetcher(
            base_url=settings.base_url,
            timeout=settings.request_timeout_seconds,
            max_attempts=settings.retry_attempts,
        )
        self._owned_options = options
        return self._owned_fetcher

    @property
    def _diagnostics(self):
        if self._settings is not None and self._settings.debug_mode:
            return logger
        return None

    @property
    def initialized(self) -> bool:
        return self._coordinator is not None

    @property
    def settings(self) -> ResourceSettings:
        if self._settings is None:
            raise NotInitializedError("MessageResource.init() has not been called.")
        return self._settings

    @property
    def store(self) -> ResourceStoreView:
        return ResourceStoreView(self._store)

    @property
    def default_locale(self) -> str:
        return self._settings.default_locale if self._settings is not None else DEFAULT_LOCALE

    @property
    def current_locale(self) -> str:
        return self._current_locale

    def set_current_locale(self, locale: Any) -> None:
        if locale and isinstance(locale, str):
            self._current_locale = normalize_locale(locale)

    def is_loaded(self, module: str | None = None, locale: Any = None) -> bool:
        valid_locale = normalize_locale(locale, self._current_locale)
        return self._store.is_loaded(module or DEFAULT_MODULE_NAME, valid_locale)

    def _require_coordinator(self) -> LoadCoordinator | None:
        if self._coordinator is None:
            logger.error("load_before_init")
            self._alert("Invalid configuration - call init() before loading resources.")
            return None
        return self._coordinator

    async def load(
        self,
        modules: ModuleSpec = None,
        callback: LoadCallback | None = None,
        locale: Any = None,
    ) -> LoadReport | None:
        """Load one module or a list of modules for ``locale``.

        ``callback`` is invoked without arguments once every pending fetch
        has resolved, or immediately when everything is cached already. Before
        ``init()`` nothing is loaded and the callback is never invoked.
        """

        coordinator = self._require_coordinator()
        if coordinator is None:
            return None
        request = coordinator.plan(modules, locale, self._current_locale)
        return await coordinator.run(request, callback)

    def load_nowait(
        self,
        modules: ModuleSpec = None,
        callback: LoadCallback | None = None,
        locale: Any = None,
    ) -> asyncio.Future[LoadReport] | None:
        """Start loading and return at once; needs a running event loop."""

        coordinator = self._require_coordinator()
        if coordinator is None:
            return None
        loop = asyncio.get_running_loop()
        request = coordinator.plan(modules, locale, self._current_locale)
        if not request.modules:
            future: asyncio.Future[LoadReport] = loop.create_future()
            future.set_result(coordinator.finish_cached(request, callback))
            return future
        return loop.create_task(coordinator.run(request, callback))

    def lookup(self, key: str, module: str | None = None, locale: Any = None) -> str | None:
        """Return the decoded stored value, or ``None`` when it is not loaded."""

        valid_locale = normalize_locale(locale, self._current_locale)
        value = self._store.lookup(key, module or DEFAULT_MODULE_NAME, valid_locale)
        if value is None:
            return None
        return decode_unicode_escapes(value)

    def get(
        self,
        key: str,
        module: str | None = None,
        locale: Any = None,
        default: str | None = None,
    ) -> str:
        """Return the message for ``key``, falling back to ``default`` or ``key``."""

        if self._settings is None:
            logger.debug("lookup_before_init", key=key)
        value = self.lookup(key, module, locale)
        if value is not None:
            return value
        fallback = default or key
        return decode_unicode_escapes("" if fallback is None else str(fallback))

    async def aclose(self) -> None:
        """Close owned HTTP clients; the instance needs init() again to load."""

        fetchers = [*self._retired_fetchers, self._owned_fetcher]
        self._retired_fetchers = []
        self._owned_fetcher = None
        self._owned_options = None
        self._coordinator = None
        self._settings = None
        for fetcher in fetchers:
            if fetcher is not None:
                await fetcher.aclose()

    async def __aenter__(self) -> MessageResource:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = ["AlertHandler", "MessageResource"]
