"""no-missing-keys: translation call sites whose key a locale lacks."""

from pathlib import Path
from typing import List, Sequence, Set, Tuple, Union

import structlog

from ..collector.script import KeyReference
from ..engine.diff import find_missing_keys
from ..errors import ParseError
from ..localization.messages import LocaleMessages
from ..reporting import Diagnostic, SourceLocation

logger = structlog.get_logger(__name__)

RULE_NAME = "no-missing-keys"


def _missing_by_locale(keys: List[str], locale_messages: LocaleMessages) -> List[Tuple[str, Set[str]]]:
    result: List[Tuple[str, Set[str]]] = []
    for locale_message in locale_messages:
        try:
            trees = [
                (locale, locale_message.get_messages_for_locale(locale))
                for locale in locale_message.locales
            ]
        except ParseError as e:
            # reported by no-unused-keys when the locale file itself is linted
            logger.debug("Skipping unparseable locale file", file=str(locale_message.fullpath), error=e.message)
            continue
        for locale, tree in trees:
            result.append((locale, set(find_missing_keys(keys, tree))))
    return result


def check_missing_keys(
    filename: Union[str, Path],
    references: Sequence[KeyReference],
    locale_messages: LocaleMessages,
) -> List[Diagnostic]:
    """One diagnostic per (call site, locale) where the key does not exist."""
    if not references:
        return []

    keys = list(dict.fromkeys(reference.key for reference in references))
    missing_by_locale = _missing_by_locale(keys, locale_messages)

    diagnostics: List[Diagnostic] = []
    for reference in references:
        for locale, missing in missing_by_locale:
            if reference.key in missing:
                diagnostics.append(Diagnostic(
                    RULE_NAME,
                    f"'{reference.key}' does not exist in '{locale}'",
                    SourceLocation(reference.line, reference.column),
                    str(filename),
                ))
    return diagnostics
