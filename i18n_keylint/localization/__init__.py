from .linked_keys import collect_linked_keys
from .messages import (
    LOCALE_DIR_REQUIRED_MESSAGE,
    LocaleMessage,
    LocaleMessages,
    load_locale_messages,
    parse_locale_json,
)

__all__ = [
    "LOCALE_DIR_REQUIRED_MESSAGE",
    "LocaleMessage",
    "LocaleMessages",
    "collect_linked_keys",
    "load_locale_messages",
    "parse_locale_json",
]
