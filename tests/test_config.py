"""Unit tests for language handling in the config module."""

import pytest

from catala_weaver.config import (
    MESSAGES,
    WeaveConfig,
    lexer_for,
    message,
    reduce_language,
)


class TestReduceLanguage:

    @pytest.mark.parametrize("option,reduced", [
        ("fr", "fr"),
        ("en", "en"),
        ("non-verbose", "en"),
        ("FR", "fr"),
        (" en ", "en"),
    ])
    def test_known_options(self, option, reduced):
        assert reduce_language(option) == reduced

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unsupported language 'de'"):
            reduce_language("de")


def test_lexer_for():
    assert lexer_for("fr") == "catala_fr"
    assert lexer_for("non-verbose") == "catala_en"


def test_messages_cover_same_keys():
    assert set(MESSAGES["fr"]) == set(MESSAGES["en"])
    assert message("non-verbose", "title") == "Legislative text implementation"


def test_weave_config_reduces_language():
    assert WeaveConfig(language="non-verbose").language == "en"
    with pytest.raises(ValueError):
        WeaveConfig(language="es")
