"""Parsing of ``key=value`` resource files and ``\\uXXXX`` decoding."""

from __future__ import annotations

import re
from typing import Any

from message_resource.i18n.store import ResourceStore

_UNICODE_ESCAPE = re.compile(r"\\u([0-9A-Fa-f]{4})")
_SURROGATE_PAIR = re.compile(r"\\u([dD][89abAB][0-9A-Fa-f]{2})\\u([dD][c-fC-F][0-9A-Fa-f]{2})")


def parse_properties(
    text: Any,
    module: str,
    locale: str,
    store: ResourceStore,
    *,
    logger=None,
) -> int | None:
    """Parse resource file contents into ``store`` under ``locale``/``module``.

    Returns the number of entries written, or ``None`` when the contents are
    empty and nothing was stored. Existing keys of the module are kept; a key
    seen again is overwritten.
    """

    text = "" if text is None else str(text)
    if not text:
        if logger is not None:
            logger.warning("invalid_contents", module=module, locale=locale)
        return None

    entries = store.ensure_module(module, locale)
    written = 0
    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            if logger is not None:
                logger.warning("invalid_line", module=module, locale=locale, lineno=lineno, line=line)
            continue

        entries[key] = value.strip()
        written += 1

    return written


def _combine_pair(match: re.Match[str]) -> str:
    high = int(match.group(1), 16)
    low = int(match.group(2), 16)
    return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))


def decode_unicode_escapes(text: str) -> str:
    """Replace ``\\uXXXX`` sequences with the characters they name."""

    if "\\u" not in text:
        return text
    text = _SURROGATE_PAIR.sub(_combine_pair, text)
    return _UNICODE_ESCAPE.sub(lambda match: chr(int(match.group(1), 16)), text)


__all__ = ["decode_unicode_escapes", "parse_properties"]
