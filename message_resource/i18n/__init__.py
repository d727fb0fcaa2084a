from message_resource.i18n.locale import DEFAULT_LOCALE, normalize_locale
from message_resource.i18n.parser import decode_unicode_escapes, parse_properties
from message_resource.i18n.resolvers import DEFAULT_MODULE_NAME, default_file_name_resolver
from message_resource.i18n.store import ResourceStore, ResourceStoreView

__all__ = [
    "DEFAULT_LOCALE",
    "DEFAULT_MODULE_NAME",
    "ResourceStore",
    "ResourceStoreView",
    "decode_unicode_escapes",
    "default_file_name_resolver",
    "normalize_locale",
    "parse_properties",
]
