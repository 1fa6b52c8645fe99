"""Linked message references (`@:other.key`) inside locale values."""

import re
from typing import Any, Iterator, List

# vue-i18n linked format: `@:key`, `@.modifier:key` or `@:(key)`
LINKED_KEY_PATTERN = re.compile(r"@(?:\.[a-z]+)?:(?:\(([\w\-|.]+)\)|([\w\-|.]+))")


def _iter_strings(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for child in value.values():
            yield from _iter_strings(child)
    elif isinstance(value, list):
        for child in value:
            yield from _iter_strings(child)


def collect_linked_keys(messages: Any) -> List[str]:
    """Key paths referenced through the linked-message marker, in a single pass."""
    keys: List[str] = []
    for text in _iter_strings(messages):
        for match in LINKED_KEY_PATTERN.finditer(text):
            key = (match.group(1) or match.group(2)).rstrip(".")
            if key and key not in keys:
                keys.append(key)
    return keys
