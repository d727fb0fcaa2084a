"""Locale identifier normalization."""

from __future__ import annotations

from typing import Any

DEFAULT_LOCALE = "en_US"


def normalize_locale(locale: Any, current: str = DEFAULT_LOCALE) -> str:
    """Return a usable locale identifier.

    Falls back to ``current`` when ``locale`` is missing or not a string, then
    swaps the first hyphen for an underscore (``en-US`` -> ``en_US``). No
    validation against known locales is performed.
    """

    if not locale or not isinstance(locale, str):
        locale = current
    return locale.replace("-", "_", 1)


def is_explicit_locale(locale: Any) -> bool:
    return bool(locale) and isinstance(locale, str)


__all__ = ["DEFAULT_LOCALE", "is_explicit_locale", "normalize_locale"]
