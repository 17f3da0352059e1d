"""Tests for locale normalization and language table lookup."""

from __future__ import annotations

import logging

import pytest
from babel import Locale

from msgtemplate.locale_utils import (
    get_babel_locale,
    get_system_locale,
    language_fallback_chain,
    normalize_locale,
    resolve_language,
)


class TestNormalizeLocale:
    """Test BCP-47 to POSIX conversion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en-US", "en_US"), ("pt-BR", "pt_BR"), ("en", "en"), ("zh-Hant-TW", "zh_Hant_TW")],
    )
    def test_hyphens_become_underscores(self, code: str, expected: str) -> None:
        """Separators are converted, case is kept."""
        assert normalize_locale(code) == expected


class TestGetBabelLocale:
    """Test cached Babel locale lookup."""

    def test_returns_babel_locale(self) -> None:
        """BCP-47 input is accepted."""
        locale = get_babel_locale("pt-BR")

        assert isinstance(locale, Locale)
        assert locale.language == "pt"
        assert locale.territory == "BR"

    def test_cached(self) -> None:
        """Repeated lookups return the same object."""
        assert get_babel_locale("de") is get_babel_locale("de")


class TestLanguageFallbackChain:
    """Test fallback chain construction."""

    def test_region(self) -> None:
        """Region falls back to language, then default."""
        assert language_fallback_chain("pt-BR") == ("pt_BR", "pt", "default")

    def test_language_only(self) -> None:
        """Bare language has no duplicate entries."""
        assert language_fallback_chain("fi") == ("fi", "default")

    def test_script(self) -> None:
        """Script subtags are an intermediate step."""
        assert language_fallback_chain("zh-Hant-TW") == (
            "zh_Hant_TW",
            "zh_Hant",
            "zh",
            "default",
        )

    def test_unknown_locale_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales log a warning and keep only the code and default."""
        with caplog.at_level(logging.WARNING, logger="msgtemplate"):
            chain = language_fallback_chain("xx-invalid")

        assert chain == ("xx_invalid", "default")
        assert "Unknown locale 'xx-invalid'" in caplog.text

    def test_empty_locale(self, caplog: pytest.LogCaptureFixture) -> None:
        """An empty code falls straight back to default."""
        with caplog.at_level(logging.WARNING, logger="msgtemplate"):
            assert language_fallback_chain("") == ("default",)


class TestResolveLanguage:
    """Test language table selection."""

    TABLES = {"pt": "PT", "zh-Hant": "HANT", "default": "DEFAULT"}

    def test_first_match_along_chain(self) -> None:
        """The most specific available table wins."""
        assert resolve_language("pt-BR", self.TABLES) == "PT"
        assert resolve_language("zh-Hant-TW", self.TABLES) == "HANT"

    def test_default(self) -> None:
        """Unlisted locales use the default table."""
        assert resolve_language("fi", self.TABLES) == "DEFAULT"

    def test_keys_case_insensitive(self) -> None:
        """Table keys may use any case and separator."""
        assert resolve_language("pt_BR", {"PT-br": "EXACT", "pt": "PT"}) == "EXACT"

    def test_no_match(self) -> None:
        """Without a default and no match the result is None."""
        assert resolve_language("fi", {"pt": "PT"}) is None


class TestGetSystemLocale:
    """Test system locale detection."""

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables are used when the OS locale is C."""
        monkeypatch.setattr("locale.getlocale", lambda: (None, None))
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.delenv("LC_MESSAGES", raising=False)
        monkeypatch.setenv("LANG", "pt_BR.UTF-8")

        assert get_system_locale() == "pt_BR"

    def test_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without any locale information en_US is returned."""
        monkeypatch.setattr("locale.getlocale", lambda: ("C", None))
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.delenv(var, raising=False)

        assert get_system_locale() == "en_US"

    def test_raise_on_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """raise_on_failure turns the fallback into an error."""
        monkeypatch.setattr("locale.getlocale", lambda: (None, None))
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.setenv(var, "C")

        with pytest.raises(RuntimeError, match="Could not determine system locale"):
            get_system_locale(raise_on_failure=True)
