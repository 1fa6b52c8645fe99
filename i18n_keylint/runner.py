"""Run orchestration: one pass over the given files with both rules.

Files are checked one at a time. A failure in one file becomes a diagnostic
for that file and never stops the run.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import structlog

from .collector.keys import collect_keys, extract_key_references, iter_source_files
from .config.settings import LintConfig
from .errors import ConfigurationError, ErrorContextManager, KeyLintError, ParseError
from .localization.messages import LocaleMessages, load_locale_messages
from .reporting import UNEXPECTED_ERROR_LOCATION, Diagnostic
from .rules import ALL_RULES, no_missing_keys, no_unused_keys

logger = structlog.get_logger(__name__)

CONFIGURATION_RULE_NAME = "configuration"


class RunCache:
    """Per-run memo of the locale tree model and the used-key set.

    Both are populated on first use and kept for the rest of the run.
    """

    def __init__(self):
        self._locale_messages: Optional[LocaleMessages] = None
        self._used_keys: Optional[List[str]] = None

    def get_locale_messages(self, config: LintConfig, base_dir: Path) -> LocaleMessages:
        if self._locale_messages is None:
            self._locale_messages = load_locale_messages(config.locale_dir, base_dir)
            logger.debug("Loaded locale messages", files=len(self._locale_messages))
        return self._locale_messages

    def get_used_keys(self, src: Path, extensions: Sequence[str]) -> List[str]:
        if self._used_keys is None:
            self._used_keys = collect_keys([src], extensions)
            logger.debug("Cached used keys", src=str(src), keys=len(self._used_keys))
        return self._used_keys

    @property
    def is_populated(self) -> bool:
        return self._used_keys is not None

    def reset(self) -> None:
        self._locale_messages = None
        self._used_keys = None


class LintRunner:
    """Runs the enabled rules over files and directories."""

    def __init__(
        self,
        config: LintConfig,
        base_dir: Optional[Union[str, Path]] = None,
        rules: Optional[Iterable[str]] = None,
        cache: Optional[RunCache] = None,
    ):
        self.config = config
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.rules = set(rules) if rules else set(ALL_RULES)
        unknown = self.rules - set(ALL_RULES)
        if unknown:
            raise ConfigurationError(f"Unknown rule(s): {', '.join(sorted(unknown))}", config_key="rules")
        self.cache = cache or RunCache()
        self.errors = ErrorContextManager()

    @property
    def source_extensions(self) -> List[str]:
        return list(self.config.rules.no_unused_keys.extensions)

    @property
    def src_root(self) -> Path:
        src = self.config.rules.no_unused_keys.src
        if not src:
            return self.base_dir
        src_path = Path(src)
        return src_path if src_path.is_absolute() else self.base_dir / src_path

    def iter_files(self, paths: Iterable[Union[str, Path]]) -> List[Path]:
        extensions = [".json"] + self.source_extensions
        return list(iter_source_files(
            (p if Path(p).is_absolute() else self.base_dir / p for p in paths),
            extensions,
        ))

    def run(self, paths: Iterable[Union[str, Path]]) -> List[Diagnostic]:
        try:
            locale_messages = self.cache.get_locale_messages(self.config, self.base_dir)
        except ConfigurationError as e:
            self.errors.record_error(e)
            return [Diagnostic(CONFIGURATION_RULE_NAME, e.message, UNEXPECTED_ERROR_LOCATION)]

        diagnostics: List[Diagnostic] = []
        for path in self.iter_files(paths):
            try:
                diagnostics.extend(self.check_file(path, locale_messages))
            except KeyLintError as e:
                self.errors.record_error(e, {"file": str(path)})
                diagnostics.append(Diagnostic(self._rule_for(path), e.message, UNEXPECTED_ERROR_LOCATION, str(path)))

        logger.info(
            "Lint run finished",
            diagnostics=len(diagnostics),
            errors=self.errors.get_error_stats()["total_errors"],
        )
        return diagnostics

    def _rule_for(self, path: Path) -> str:
        return no_unused_keys.RULE_NAME if path.suffix == ".json" else no_missing_keys.RULE_NAME

    def check_file(self, path: Path, locale_messages: LocaleMessages) -> List[Diagnostic]:
        """Diagnostics of one file; raises `KeyLintError` subclasses on failure."""
        if path.suffix == ".json":
            if no_unused_keys.RULE_NAME not in self.rules:
                return []
            if locale_messages.find_locale_message_for(path) is None:
                logger.debug("Ignoring non-locale JSON file", file=str(path))
                return []
            try:
                text = path.read_text(encoding="utf-8-sig")
            except (OSError, UnicodeDecodeError) as e:
                raise ParseError(f"Cannot read {path}: {e}", filename=str(path), previous_error=e) from e
            used_keys = self.cache.get_used_keys(self.src_root, self.source_extensions)
            return no_unused_keys.check_unused_keys(path, text, locale_messages, used_keys, self.errors)

        if path.suffix in self.source_extensions:
            if no_missing_keys.RULE_NAME not in self.rules:
                return []
            references = extract_key_references(path)
            return no_missing_keys.check_missing_keys(path, references, locale_messages)

        return []
