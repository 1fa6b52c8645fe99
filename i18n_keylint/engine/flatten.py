"""Dotted-path flattening of nested message trees."""

from typing import Any, Dict, Iterable, Optional, Sequence


class _Present:
    """Marker value for expected keys."""

    def __repr__(self) -> str:
        return "PRESENT"


PRESENT = _Present()


def flatten(tree: Any, parent_key: str = "", sep: str = ".") -> Dict[str, Any]:
    """Flatten nested dicts into `{dotted.path: leaf}` in document order.

    Lists are leaves. Empty dicts contribute no path.
    """
    items: Dict[str, Any] = {}
    if not isinstance(tree, dict):
        if parent_key:
            items[parent_key] = tree
        return items
    for k, v in tree.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else str(k)
        if isinstance(v, dict):
            items.update(flatten(v, new_key, sep=sep))
        else:
            items[new_key] = v
    return items


def build_expected(keys: Iterable[str], locales: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """Flat expected-key map; in key mode the same keys are required under every locale."""
    expected: Dict[str, Any] = {}
    prefixes = [f"{locale}." for locale in locales] if locales is not None else [""]
    for prefix in prefixes:
        for key in keys:
            expected[f"{prefix}{key}"] = PRESENT
    return expected
