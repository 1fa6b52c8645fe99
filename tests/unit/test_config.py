"""
Unit tests for configuration models and loading.
"""

import pytest
from pydantic import ValidationError

from i18n_keylint.config import (
    LintConfig,
    LocaleDirConfig,
    LocaleKeyMode,
    Settings,
    UnusedKeysOptions,
    find_config_file,
    load_config,
)
from i18n_keylint.errors import ConfigurationError


class TestLintConfig:

    def test_glob_string_means_file_mode(self):
        config = LintConfig(localeDir="./locales/*.json")
        assert config.locale_dir == [LocaleDirConfig(pattern="./locales/*.json")]
        assert config.locale_dir[0].locale_key is LocaleKeyMode.FILE

    def test_object_entry(self):
        config = LintConfig(localeDir={"pattern": "./locales/index.json", "localeKey": "key"})
        assert config.locale_dir[0].locale_key is LocaleKeyMode.KEY

    def test_mixed_list(self):
        config = LintConfig(localeDir=["a/*.json", {"pattern": "b.json", "localeKey": "key"}])
        assert [entry.pattern for entry in config.locale_dir] == ["a/*.json", "b.json"]

    def test_missing_locale_dir(self):
        assert LintConfig().locale_dir is None
        assert LintConfig(localeDir="").locale_dir is None

    def test_unknown_locale_dir_property(self):
        with pytest.raises(ValidationError):
            LintConfig(localeDir={"pattern": "a/*.json", "mode": "file"})

    def test_invalid_locale_key(self):
        with pytest.raises(ValidationError):
            LintConfig(localeDir={"pattern": "a/*.json", "localeKey": "dir"})

    def test_rule_defaults(self):
        options = LintConfig().rules.no_unused_keys
        assert options.src is None
        assert options.extensions == [".js", ".vue"]

    def test_extensions_normalized(self):
        assert UnusedKeysOptions(extensions=["vue", ".js", " ts "]).extensions == [".vue", ".js", ".ts"]

    def test_unknown_rule_option(self):
        with pytest.raises(ValidationError):
            LintConfig(rules={"no-unused-keys": {"src": ".", "ignore": ["x"]}})


class TestLoadConfig:

    def test_load_yaml(self, write_file):
        path = write_file(".i18n-keylint.yml", """
            localeDir:
              - ./locales/*.json
              - pattern: ./messages.json
                localeKey: key
            rules:
              no-unused-keys:
                src: ./src
                extensions: [.js, .vue, .ts]
        """)

        config = load_config(path)

        assert [entry.locale_key for entry in config.locale_dir] == [LocaleKeyMode.FILE, LocaleKeyMode.KEY]
        assert config.rules.no_unused_keys.src == "./src"
        assert config.rules.no_unused_keys.extensions == [".js", ".vue", ".ts"]

    def test_load_json(self, write_json):
        path = write_json("keylint.json", {"localeDir": "./locales/*.json"})
        assert load_config(path).locale_dir[0].pattern == "./locales/*.json"

    def test_empty_file(self, write_file):
        assert load_config(write_file("empty.yml", "")).locale_dir is None

    def test_unknown_property(self, write_file):
        path = write_file("bad.yml", "localeDir: a/*.json\nsrc: ./src\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert exc_info.value.context["config_key"] == "src"

    def test_invalid_yaml(self, write_file):
        with pytest.raises(ConfigurationError):
            load_config(write_file("bad.yml", "localeDir: [unclosed\n"))

    def test_not_a_mapping(self, write_file):
        with pytest.raises(ConfigurationError):
            load_config(write_file("bad.yml", "- a\n- b\n"))

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yml")

    def test_discovery(self, write_file, tmp_path):
        path = write_file(".i18n-keylint.yml", "localeDir: ./locales/*.json\n")
        nested = tmp_path / "src" / "components"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == path
        assert load_config(base_dir=nested).locale_dir[0].pattern == "./locales/*.json"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("I18N_KEYLINT_DEBUG", raising=False)
        monkeypatch.delenv("I18N_KEYLINT_CONFIG_FILE", raising=False)
        settings = Settings()
        assert settings.debug is False
        assert settings.config_file is None

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("I18N_KEYLINT_DEBUG", "true")
        monkeypatch.setenv("I18N_KEYLINT_CONFIG_FILE", str(tmp_path / "c.yml"))
        settings = Settings()
        assert settings.debug is True
        assert settings.config_file == tmp_path / "c.yml"
