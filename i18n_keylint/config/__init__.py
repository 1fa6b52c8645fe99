from .loader import find_config_file, load_config
from .settings import (
    DEFAULT_EXTENSIONS,
    LintConfig,
    LocaleDirConfig,
    LocaleKeyMode,
    MissingKeysOptions,
    RulesConfig,
    Settings,
    UnusedKeysOptions,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "LintConfig",
    "LocaleDirConfig",
    "LocaleKeyMode",
    "MissingKeysOptions",
    "RulesConfig",
    "Settings",
    "UnusedKeysOptions",
    "find_config_file",
    "load_config",
]
