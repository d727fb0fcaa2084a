"""Map a (module, locale) pair to a resource file basename."""

from __future__ import annotations

from typing import Protocol

DEFAULT_MODULE_NAME = "_default"


class FileNameResolver(Protocol):
    def __call__(self, module: str, locale: str | None) -> str: ...


def default_file_name_resolver(module: str, locale: str | None) -> str:
    if locale and isinstance(locale, str):
        return f"{module}_{locale}"
    return module


__all__ = ["DEFAULT_MODULE_NAME", "FileNameResolver", "default_file_name_resolver"]
