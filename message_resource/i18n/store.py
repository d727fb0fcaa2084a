"""In-memory cache of parsed resource files."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping


class ResourceStore:
    """Holds ``locale -> module -> key -> value``.

    Module entries are created once and never removed; callers only ever see
    read-only views of the stored mappings.
    """

    def __init__(self) -> None:
        self._locales: dict[str, dict[str, dict[str, str]]] = {}

    def is_loaded(self, module: str | None, locale: str | None) -> bool:
        if not module or not locale:
            return False
        return module in self._locales.get(locale, {})

    def module(self, module: str, locale: str) -> Mapping[str, str] | None:
        entries = self._locales.get(locale, {}).get(module)
        if entries is None:
            return None
        return MappingProxyType(entries)

    def lookup(self, key: str, module: str, locale: str) -> str | None:
        entries = self._locales.get(locale, {}).get(module)
        if entries is None:
            return None
        return entries.get(key)

    def ensure_module(self, module: str, locale: str) -> dict[str, str]:
        """Return the writable mapping for a module, creating it if needed."""

        return self._locales.setdefault(locale, {}).setdefault(module, {})

    def locales(self) -> list[str]:
        return list(self._locales)

    def modules(self, locale: str) -> list[str]:
        return list(self._locales.get(locale, {}))

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        locale, module = item
        return self.is_loaded(module, locale)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for locale, modules in self._locales.items():
            for module in modules:
                yield locale, module

    def __len__(self) -> int:
        return sum(len(modules) for modules in self._locales.values())


class ResourceStoreView:
    """Read-only facade over a :class:`ResourceStore`."""

    def __init__(self, store: ResourceStore) -> None:
        self._store = store

    def is_loaded(self, module: str | None, locale: str | None) -> bool:
        return self._store.is_loaded(module, locale)

    def module(self, module: str, locale: str) -> Mapping[str, str] | None:
        return self._store.module(module, locale)

    def lookup(self, key: str, module: str, locale: str) -> str | None:
        return self._store.lookup(key, module, locale)

    def locales(self) -> list[str]:
        return self._store.locales()

    def modules(self, locale: str) -> list[str]:
        return self._store.modules(locale)

    def __contains__(self, item: object) -> bool:
        return item in self._store

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)


__all__ = ["ResourceStore", "ResourceStoreView"]
