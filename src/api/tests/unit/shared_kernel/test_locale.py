"""Unit tests for locale parsing and Accept-Language negotiation."""

import pytest

from shared_kernel.locale import Locale, is_valid_locale, negotiate_locale, parse_locale


class TestLocale:
    def test_direction(self):
        assert Locale.ARABIC.direction == "rtl"
        assert Locale.ENGLISH.direction == "ltr"

    def test_is_valid_locale(self):
        assert is_valid_locale("en")
        assert is_valid_locale("ar")
        assert not is_valid_locale("fr")
        assert not is_valid_locale(None)

    def test_parse_locale_falls_back_on_unsupported(self):
        assert parse_locale("ar", default=Locale.ENGLISH) is Locale.ARABIC
        assert parse_locale("de", default=Locale.ENGLISH) is Locale.ENGLISH
        assert parse_locale(None, default=Locale.ARABIC) is Locale.ARABIC


class TestNegotiateLocale:
    """Tests for Accept-Language negotiation."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("en-US,en;q=0.9", Locale.ENGLISH),
            ("ar-SA", Locale.ARABIC),
            ("fr-CH, ar;q=0.9, en;q=0.8", Locale.ARABIC),
            ("en;q=0.5, ar;q=0.8", Locale.ARABIC),
            ("EN-gb", Locale.ENGLISH),
        ],
    )
    def test_picks_most_preferred_supported_locale(self, header, expected):
        """The highest q-value supported language should win."""
        assert negotiate_locale(header, fallback=Locale.ARABIC) is expected

    def test_uses_fallback_when_nothing_matches(self):
        """Unsupported languages fall back to the configured locale."""
        assert negotiate_locale("fr, de;q=0.5", fallback=Locale.ARABIC) is Locale.ARABIC

    def test_uses_fallback_without_header(self):
        assert negotiate_locale(None, fallback=Locale.ARABIC) is Locale.ARABIC
        assert negotiate_locale("", fallback=Locale.ENGLISH) is Locale.ENGLISH

    def test_ignores_rejected_and_malformed_entries(self):
        """q=0 means "not acceptable"; malformed q-values are skipped."""
        assert negotiate_locale("en;q=0, ar;q=abc", fallback=Locale.ARABIC) is Locale.ARABIC
        assert negotiate_locale("ar;q=0, en", fallback=Locale.ARABIC) is Locale.ENGLISH

    def test_ties_keep_header_order(self):
        assert negotiate_locale("ar, en", fallback=Locale.ENGLISH) is Locale.ARABIC
