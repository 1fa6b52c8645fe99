"""
Pytest configuration and fixtures for i18n-keylint tests.

Locale fixtures come in the two supported layouts:
- vue-cli-format: one JSON file per locale (file mode)
- constructor-option-format: one JSON file keyed by locale (key mode)
"""

import json
import textwrap
from pathlib import Path
from typing import Callable, Tuple

import pytest

from i18n_keylint.config import LocaleDirConfig
from i18n_keylint.localization import LocaleMessages, load_locale_messages

FIXTURES_DIR = Path(__file__).parent / "fixtures"

LOCALE_DIRS = {
    "file": {"pattern": "vue-cli-format/locales/*.json"},
    "key": {"pattern": "constructor-option-format/locales/*.json", "localeKey": "key"},
}


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(params=sorted(LOCALE_DIRS))
def locale_messages(request) -> LocaleMessages:
    """Locale tree model for each fixture layout."""
    return load_locale_messages([LocaleDirConfig(**LOCALE_DIRS[request.param])], FIXTURES_DIR)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a dedented text file under tmp_path and return its path."""
    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[..., Path]:
    def _write(relative: str, data) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def position_of() -> Callable[[str, str], Tuple[int, int]]:
    """1-based line and 0-based column of the first `needle` in `text`."""
    return _position_of


def _position_of(text: str, needle: str) -> Tuple[int, int]:
    offset = text.index(needle)
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1)
    return line, column
