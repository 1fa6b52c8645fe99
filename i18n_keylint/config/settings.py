"""Configuration models.

`LintConfig` mirrors the configuration file; `Settings` holds the process
level knobs read from the environment.
"""

from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings

DEFAULT_EXTENSIONS = [".js", ".vue"]


class LocaleKeyMode(str, Enum):
    """How locale identifiers are derived from a locale file."""
    FILE = "file"
    KEY = "key"


class LocaleDirConfig(BaseModel):
    """One configured locale-data root."""

    class Config:
        extra = "forbid"

    pattern: str = Field(..., description="Glob matching the locale files")
    locale_key: LocaleKeyMode = Field(default=LocaleKeyMode.FILE, alias="localeKey")


class UnusedKeysOptions(BaseModel):
    """Options of the `no-unused-keys` rule."""

    class Config:
        extra = "forbid"

    src: Optional[str] = Field(None, description="Source root scanned for used keys (default: cwd)")
    extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    @validator("extensions", each_item=True)
    def normalize_extension(cls, v):
        """Accept `vue` as well as `.vue`."""
        v = v.strip()
        if not v:
            raise ValueError("Empty extension")
        return v if v.startswith(".") else f".{v}"


class MissingKeysOptions(BaseModel):
    """`no-missing-keys` takes no options."""

    class Config:
        extra = "forbid"


class RulesConfig(BaseModel):

    class Config:
        extra = "forbid"

    no_unused_keys: UnusedKeysOptions = Field(default_factory=UnusedKeysOptions, alias="no-unused-keys")
    no_missing_keys: MissingKeysOptions = Field(default_factory=MissingKeysOptions, alias="no-missing-keys")


class LintConfig(BaseModel):
    """Validated contents of a configuration file."""

    class Config:
        extra = "forbid"

    locale_dir: Optional[List[LocaleDirConfig]] = Field(None, alias="localeDir")
    rules: RulesConfig = Field(default_factory=RulesConfig)

    @validator("locale_dir", pre=True)
    def coerce_locale_dir(cls, v: Any):
        """A glob string means file mode; a single entry becomes a list."""
        if v is None or v == "" or v == []:
            return None
        entries = v if isinstance(v, list) else [v]
        return [{"pattern": entry} if isinstance(entry, str) else entry for entry in entries]


class Settings(BaseSettings):
    """Process settings loaded from `I18N_KEYLINT_*` environment variables."""

    class Config:
        env_prefix = "I18N_KEYLINT_"
        case_sensitive = False
        extra = "ignore"

    debug: bool = False
    config_file: Optional[Path] = None
