"""Locale tree model.

Binds physical locale files to logical locales for both supported layouts:

- file mode: `locales/en.json` holds the `en` message tree
- key mode: one file holds `{"en": {...}, "ja": {...}}`
"""

import glob
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import structlog

from ..config.settings import LocaleDirConfig, LocaleKeyMode
from ..errors import ConfigurationError, ParseError

logger = structlog.get_logger(__name__)

LOCALE_DIR_REQUIRED_MESSAGE = (
    "You need to set 'localeDir' at 'settings'. See the i18n-keylint documentation"
)


def parse_locale_json(text: str, filename: Optional[str] = None) -> Any:
    """Decode locale JSON, converting decoder failures into `ParseError`."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Invalid JSON in {filename or '<text>'}: {e.msg} (line {e.lineno}, column {e.colno})",
            filename=filename,
            line=e.lineno,
            column=e.colno - 1,
            previous_error=e,
        ) from e


class LocaleMessage:
    """One locale file and the locale(s) it provides."""

    def __init__(self, fullpath: Union[str, Path], locale_key: LocaleKeyMode = LocaleKeyMode.FILE):
        self.fullpath = Path(fullpath).resolve()
        self.locale_key = LocaleKeyMode(locale_key)
        self._messages: Any = None
        self._loaded = False

    def __repr__(self) -> str:
        return f"LocaleMessage({str(self.fullpath)!r}, {self.locale_key.value!r})"

    def read_text(self) -> str:
        return self.fullpath.read_text(encoding="utf-8-sig")

    @property
    def messages(self) -> Any:
        """Parsed JSON value of the file, loaded on first access."""
        if not self._loaded:
            self._messages = parse_locale_json(self.read_text(), str(self.fullpath))
            self._loaded = True
        return self._messages

    @property
    def locales(self) -> List[str]:
        if self.locale_key is LocaleKeyMode.FILE:
            return [self.fullpath.stem]
        messages = self.messages
        if not isinstance(messages, dict):
            return []
        return list(messages.keys())

    def get_messages_for_locale(self, locale: str) -> Any:
        """Message tree of `locale`, or None when this file does not provide it."""
        if locale not in self.locales:
            return None
        if self.locale_key is LocaleKeyMode.FILE:
            return self.messages
        return self.messages.get(locale)


class LocaleMessages:
    """All locale files of a configuration, in configuration order."""

    def __init__(self, locale_messages: Iterable[LocaleMessage]):
        self.locale_messages: List[LocaleMessage] = list(locale_messages)
        self._by_path: Dict[Path, LocaleMessage] = {m.fullpath: m for m in self.locale_messages}

    def __iter__(self) -> Iterator[LocaleMessage]:
        return iter(self.locale_messages)

    def __len__(self) -> int:
        return len(self.locale_messages)

    @property
    def locales(self) -> List[str]:
        """Union of all locales, first-seen order. Files that fail to parse are skipped."""
        seen: List[str] = []
        for message in self.locale_messages:
            try:
                locales = message.locales
            except ParseError:
                continue
            for locale in locales:
                if locale not in seen:
                    seen.append(locale)
        return seen

    def find_locale_message_for(self, path: Union[str, Path]) -> Optional[LocaleMessage]:
        """Locale file bound to `path`; None means the file is not a locale file."""
        return self._by_path.get(Path(path).resolve())


def _expand_pattern(pattern: str, base_dir: Path) -> List[Path]:
    full_pattern = pattern if os.path.isabs(pattern) else os.path.join(str(base_dir), pattern)
    return [Path(p) for p in sorted(glob.glob(full_pattern, recursive=True)) if os.path.isfile(p)]


def load_locale_messages(
    locale_dir: Optional[List[LocaleDirConfig]],
    base_dir: Optional[Union[str, Path]] = None,
) -> LocaleMessages:
    """Build the locale tree model for the configured locale roots.

    Raises:
        ConfigurationError: no locale root is configured, or the configured
            roots resolve to no locale file at all.
    """
    if not locale_dir:
        raise ConfigurationError(LOCALE_DIR_REQUIRED_MESSAGE, config_key="localeDir")

    base = Path(base_dir) if base_dir else Path.cwd()
    messages: List[LocaleMessage] = []
    seen = set()
    for entry in locale_dir:
        matched = _expand_pattern(entry.pattern, base)
        logger.debug(
            "Expanded locale pattern",
            pattern=entry.pattern,
            locale_key=entry.locale_key.value,
            files=len(matched),
        )
        for path in matched:
            resolved = path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            messages.append(LocaleMessage(resolved, entry.locale_key))

    if not messages:
        patterns = ", ".join(entry.pattern for entry in locale_dir)
        raise ConfigurationError(
            f"No locale files match 'localeDir' ({patterns})",
            config_key="localeDir",
        )
    return LocaleMessages(messages)
