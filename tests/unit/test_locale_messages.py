"""
Unit tests for the locale tree model and linked keys.
"""

import pytest

from i18n_keylint.config import LocaleDirConfig, LocaleKeyMode
from i18n_keylint.errors import ConfigurationError, ParseError
from i18n_keylint.localization import (
    LOCALE_DIR_REQUIRED_MESSAGE,
    LocaleMessage,
    collect_linked_keys,
    load_locale_messages,
)


class TestLoadLocaleMessages:

    def test_file_mode(self, fixtures_dir):
        messages = load_locale_messages(
            [LocaleDirConfig(pattern="vue-cli-format/locales/*.json")], fixtures_dir
        )

        assert [m.fullpath.name for m in messages] == ["en.json", "ja.json"]
        assert messages.locales == ["en", "ja"]
        assert all(m.locale_key is LocaleKeyMode.FILE for m in messages)

    def test_key_mode(self, fixtures_dir):
        messages = load_locale_messages(
            [LocaleDirConfig(pattern="constructor-option-format/locales/*.json", localeKey="key")],
            fixtures_dir,
        )

        assert len(messages) == 1
        assert messages.locales == ["en", "ja"]
        message = messages.locale_messages[0]
        assert message.get_messages_for_locale("ja")["hello"] == "ハローワールド"
        assert message.get_messages_for_locale("fr") is None

    def test_find_locale_message_for(self, fixtures_dir):
        messages = load_locale_messages(
            [LocaleDirConfig(pattern="vue-cli-format/locales/*.json")], fixtures_dir
        )

        found = messages.find_locale_message_for(fixtures_dir / "vue-cli-format" / "locales" / "ja.json")
        assert found is not None
        assert found.locales == ["ja"]
        assert messages.find_locale_message_for(fixtures_dir / "other.json") is None

    def test_multiple_roots_deduplicated(self, fixtures_dir):
        messages = load_locale_messages(
            [
                LocaleDirConfig(pattern="vue-cli-format/locales/*.json"),
                LocaleDirConfig(pattern="vue-cli-format/locales/en.json"),
                LocaleDirConfig(pattern="constructor-option-format/**/*.json", localeKey="key"),
            ],
            fixtures_dir,
        )

        assert [m.fullpath.name for m in messages] == ["en.json", "ja.json", "index.json"]

    @pytest.mark.parametrize("locale_dir", [None, []])
    def test_missing_locale_dir(self, locale_dir, fixtures_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            load_locale_messages(locale_dir, fixtures_dir)
        assert exc_info.value.message == LOCALE_DIR_REQUIRED_MESSAGE

    def test_no_matching_files(self, fixtures_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            load_locale_messages([LocaleDirConfig(pattern="nowhere/*.json")], fixtures_dir)
        assert "nowhere/*.json" in exc_info.value.message


class TestLocaleMessage:

    def test_lazy_parse_error(self, write_file):
        path = write_file("locales/en.json", "{ not json")
        message = LocaleMessage(path, LocaleKeyMode.FILE)

        assert message.locales == ["en"]
        with pytest.raises(ParseError):
            message.messages

    def test_key_mode_locales_need_valid_json(self, write_file):
        path = write_file("locales/index.json", "{ not json")
        message = LocaleMessage(path, LocaleKeyMode.KEY)

        with pytest.raises(ParseError):
            message.locales

    def test_byte_order_mark_is_ignored(self, tmp_path):
        path = tmp_path / "locales" / "index.json"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xef\xbb\xbf" + b'{"en": {"hello": "hi"}}')
        message = LocaleMessage(path, LocaleKeyMode.KEY)

        assert message.locales == ["en"]
        assert message.get_messages_for_locale("en") == {"hello": "hi"}

    def test_key_mode_non_object_document(self, write_json, tmp_path):
        path = write_json("locales/index.json", ["en", "ja"])
        assert LocaleMessage(path, LocaleKeyMode.KEY).locales == []


class TestLinkedKeys:

    def test_plain_link(self):
        assert collect_linked_keys({"a": "@:b", "b": "value"}) == ["b"]

    def test_links_inside_text_and_nested(self):
        messages = {
            "a": "See @:common.more and @.lower:common.title.",
            "nested": {"b": ["@:(list.item)"]},
        }
        assert collect_linked_keys(messages) == ["common.more", "common.title", "list.item"]

    def test_no_links(self):
        assert collect_linked_keys({"a": "email@example.com", "b": 1}) == []

    def test_links_are_not_followed(self):
        # `b` links to `c`; both targets are found because every value is scanned
        assert collect_linked_keys({"a": "@:b", "b": "@:c", "c": "x"}) == ["b", "c"]
