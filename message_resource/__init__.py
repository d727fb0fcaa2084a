"""Load ``key=value`` message resource files and look up localized text."""

from message_resource.config import ResourceSettings, get_settings
from message_resource.i18n.loader import LoadReport
from message_resource.i18n.service import MessageResource
from message_resource.services.exceptions import (
    FetchError,
    InvalidContentError,
    MessageResourceError,
    NotInitializedError,
)
from message_resource.services.fetchers import Fetcher, HttpxFetcher, LocalFileFetcher

__all__ = [
    "FetchError",
    "Fetcher",
    "HttpxFetcher",
    "InvalidContentError",
    "LoadReport",
    "LocalFileFetcher",
    "MessageResource",
    "MessageResourceError",
    "NotInitializedError",
    "ResourceSettings",
    "get_settings",
]
