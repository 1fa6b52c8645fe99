"""Configuration file discovery and loading."""

from pathlib import Path
from typing import Optional, Union

import structlog
import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .settings import LintConfig

logger = structlog.get_logger(__name__)

CONFIG_FILENAMES = (
    ".i18n-keylint.yml",
    ".i18n-keylint.yaml",
    ".i18n-keylint.json",
)


def find_config_file(start: Union[str, Path]) -> Optional[Path]:
    """Look for a configuration file in `start` and its parents."""
    directory = Path(start).resolve()
    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILENAMES:
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
    return None


def load_config(path: Optional[Union[str, Path]] = None, base_dir: Optional[Path] = None) -> LintConfig:
    """Load and validate a configuration file.

    Without an explicit path the file is discovered from `base_dir`; when none
    exists an empty configuration is returned, which the runner then reports
    as a missing `localeDir`.
    """
    config_path = Path(path) if path else find_config_file(base_dir or Path.cwd())
    if config_path is None:
        logger.debug("No configuration file found", base_dir=str(base_dir or Path.cwd()))
        return LintConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file {config_path}: {e}",
            config_key="config_file",
            previous_error=e,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid configuration file {config_path}: {e}",
            config_key="config_file",
            previous_error=e,
        ) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Configuration file {config_path} must contain a mapping",
            config_key="config_file",
        )

    try:
        config = LintConfig(**raw)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration in {config_path}: {key}: {first.get('msg')}",
            config_key=key or None,
            previous_error=e,
        ) from e

    logger.debug("Loaded configuration", path=str(config_path))
    return config
