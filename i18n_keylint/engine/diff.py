"""Key-consistency diff between expected keys and a locale message tree.

Both sides are flattened to dotted paths first, so the comparison is a set
comparison over paths. Each path that differs becomes one `KeyChange`:

- ADDED: only in the locale tree (unused key)
- REMOVED: only expected, the locale tree has no such message (missing key)
- CHANGED: only expected, and the locale tree has messages under it (a
  usage naming a whole subtree). Never reported by the rules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set

import structlog

from ..config.settings import LocaleKeyMode
from ..localization.linked_keys import collect_linked_keys
from ..localization.messages import LocaleMessage, parse_locale_json
from .flatten import build_expected, flatten

logger = structlog.get_logger(__name__)


class ChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class KeyChange:
    kind: ChangeKind
    path: str


def _branches(paths: Iterable[str], sep: str = ".") -> Set[str]:
    """Every proper prefix path of `paths`."""
    branches: Set[str] = set()
    for path in paths:
        parts = path.split(sep)
        for i in range(1, len(parts)):
            branches.add(sep.join(parts[:i]))
    return branches


def diff_keys(expected: Mapping[str, Any], actual: Mapping[str, Any]) -> List[KeyChange]:
    """Compare two flattened maps.

    Locale-side entries come first in document order, then expected-side
    entries in the order they were given.
    """
    actual_branches = _branches(actual)
    changes: List[KeyChange] = []

    for path in actual:
        if path in expected:
            continue
        changes.append(KeyChange(ChangeKind.ADDED, path))

    for path in expected:
        if path in actual:
            continue
        if path in actual_branches:
            changes.append(KeyChange(ChangeKind.CHANGED, path))
        else:
            changes.append(KeyChange(ChangeKind.REMOVED, path))

    return changes


def find_unused_keys(
    locale_message: LocaleMessage,
    json_text: str,
    used_keys: Iterable[str],
) -> List[str]:
    """Unused key paths of one locale file.

    Linked keys found in the file count as used. In key mode the used keys are
    required under every locale of the file independently.

    Raises:
        ParseError: `json_text` is not valid JSON.
    """
    json_value = parse_locale_json(json_text, str(locale_message.fullpath))

    compare_keys = list(used_keys) + collect_linked_keys(json_value)
    locales: Optional[Sequence[str]] = None
    if locale_message.locale_key is LocaleKeyMode.KEY:
        locales = list(json_value.keys()) if isinstance(json_value, dict) else []

    expected = build_expected(compare_keys, locales)
    changes = diff_keys(expected, flatten(json_value))
    unused = [change.path for change in changes if change.kind is ChangeKind.ADDED]
    logger.debug(
        "Computed unused keys",
        file=str(locale_message.fullpath),
        expected=len(expected),
        unused=len(unused),
    )
    return unused


def find_missing_keys(used_keys: Iterable[str], actual_tree: Any) -> List[str]:
    """Used key paths absent from one locale's message tree."""
    expected = build_expected(used_keys)
    changes = diff_keys(expected, flatten(actual_tree))
    return [change.path for change in changes if change.kind is ChangeKind.REMOVED]
