"""Domain-specific exceptions."""

from __future__ import annotations


class MessageResourceError(Exception):
    pass


class NotInitializedError(MessageResourceError):
    pass


class FetchError(MessageResourceError):
    """Raised by a fetcher when a resource file could not be retrieved."""

    def __init__(self, url: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        self.url = url
        self.status_code = status_code
        self.detail = detail
        reason = f"status {status_code}" if status_code is not None else (detail or "unknown error")
        super().__init__(f"Failed to fetch {url}: {reason}")


class InvalidContentError(MessageResourceError):
    def __init__(self, module: str, locale: str) -> None:
        self.module = module
        self.locale = locale
        super().__init__(f"Invalid contents for module {module!r} ({locale}).")


__all__ = [
    "FetchError",
    "InvalidContentError",
    "MessageResourceError",
    "NotInitializedError",
]
