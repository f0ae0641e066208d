"""Supported storefront locales and Accept-Language negotiation."""

from __future__ import annotations

from enum import StrEnum


class Locale(StrEnum):
    """Locales the storefront can render and request from the API."""

    ENGLISH = "en"
    ARABIC = "ar"

    @property
    def direction(self) -> str:
        """Text direction for documents rendered in this locale."""
        return "rtl" if self is Locale.ARABIC else "ltr"


def is_valid_locale(value: str | None) -> bool:
    """Check whether a raw string names a supported locale."""
    return value in {locale.value for locale in Locale}


def parse_locale(value: str | None, default: Locale) -> Locale:
    """Return the locale named by ``value``, or ``default`` if unsupported."""
    if value is not None and is_valid_locale(value):
        return Locale(value)
    return default


def negotiate_locale(accept_language: str | None, fallback: Locale) -> Locale:
    """Pick the supported locale the browser prefers most.

    Parses an Accept-Language header such as ``"fr-CH, ar;q=0.9, en;q=0.8"``,
    reduces each tag to its primary language subtag and returns the first
    supported one in descending q-value order. Entries with a malformed or
    zero q-value are ignored.

    Args:
        accept_language: Raw header value, or None if absent.
        fallback: Locale returned when nothing matches.

    Returns:
        The negotiated locale.
    """
    if not accept_language:
        return fallback

    candidates: list[tuple[float, int, str]] = []
    for position, entry in enumerate(accept_language.split(",")):
        tag, _, params = entry.strip().partition(";")
        code = tag.strip().split("-")[0].lower()
        if not code:
            continue

        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                continue
        if quality <= 0:
            continue

        # Stable on ties: earlier entries win
        candidates.append((-quality, position, code))

    for _, _, code in sorted(candidates):
        if is_valid_locale(code):
            return Locale(code)
    return fallback
