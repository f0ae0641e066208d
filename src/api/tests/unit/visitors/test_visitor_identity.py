"""Unit tests for VisitorIdentityManager and device fingerprinting."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from hydration import BrowserCookieJar
from visitors import (
    DeviceFingerprinter,
    DeviceSignals,
    InMemoryLocalStorage,
    VisitorIdentityManager,
)
from visitors.application.identity import VISITOR_FINGERPRINT_KEY, VISITOR_ID_STORAGE_KEY
from visitors.application.observability import VisitorProbe
from visitors.infrastructure.fingerprint import compute_fingerprint
from visitors.ports.exceptions import FingerprintUnavailableError

SIGNALS = DeviceSignals(
    user_agent="Mozilla/5.0 (X11; Linux x86_64)",
    language="en-US",
    languages=("en-US", "ar"),
    timezone="Asia/Riyadh",
    screen_resolution=(1920, 1080),
)


@pytest.fixture
def cookies() -> BrowserCookieJar:
    return BrowserCookieJar("shop1.example.com")


@pytest.fixture
def storage() -> InMemoryLocalStorage:
    return InMemoryLocalStorage()


@pytest.fixture
def fingerprinter() -> AsyncMock:
    mock = AsyncMock(spec=DeviceFingerprinter)
    mock.fingerprint.return_value = "fp-123"
    return mock


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=VisitorProbe)


def make_manager(cookies, storage, fingerprinter, cookie_settings, probe=None, ids=None):
    ids = iter(ids or ["visitor-1", "visitor-2"])
    return VisitorIdentityManager(
        cookies=cookies,
        storage=storage,
        fingerprinter=fingerprinter,
        cookie_settings=cookie_settings,
        probe=probe,
        id_factory=lambda: next(ids),
    )


class TestEnsureVisitorId:
    """Tests for durable visitor ids."""

    def test_new_visitor_gets_id_in_cookie_and_storage(
        self, cookies, storage, fingerprinter, cookie_settings
    ):
        manager = make_manager(cookies, storage, fingerprinter, cookie_settings)

        visitor_id = manager.ensure_visitor_id()

        assert visitor_id == "visitor-1"
        assert cookies.get("sf_visitor_id") == "visitor-1"
        assert storage.get_item(VISITOR_ID_STORAGE_KEY) == "visitor-1"

    def test_id_is_stable_across_loads(self, cookies, storage, fingerprinter, cookie_settings):
        first = make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()
        second = make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()

        assert first == second

    def test_cookie_survives_cleared_local_storage(
        self, cookies, storage, fingerprinter, cookie_settings
    ):
        """The cookie is authoritative; local storage is only a mirror."""
        first = make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()
        storage.clear()

        second = make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()

        assert second == first
        assert storage.get_item(VISITOR_ID_STORAGE_KEY) == first

    def test_local_storage_restores_missing_cookie(
        self, cookies, storage, fingerprinter, cookie_settings, mock_probe
    ):
        storage.set_item(VISITOR_ID_STORAGE_KEY, "stored-visitor")

        visitor_id = make_manager(
            cookies, storage, fingerprinter, cookie_settings, probe=mock_probe
        ).ensure_visitor_id()

        assert visitor_id == "stored-visitor"
        assert cookies.get("sf_visitor_id") == "stored-visitor"
        mock_probe.visitor_id_restored.assert_called_once_with(
            "stored-visitor", source="local_storage"
        )

    def test_works_with_storage_disabled(self, cookies, fingerprinter, cookie_settings):
        storage = InMemoryLocalStorage(enabled=False)

        first = make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()
        second = make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()

        assert first == second == "visitor-1"

    def test_cookie_lifetime_is_refreshed(self, storage, fingerprinter, cookie_settings):
        now = 1_700_000_000
        cookies = BrowserCookieJar("shop1.example.com", clock=lambda: now)

        make_manager(cookies, storage, fingerprinter, cookie_settings).ensure_visitor_id()

        cookie = cookies.attributes("sf_visitor_id")
        assert cookie.expires == now + cookie_settings.visitor_id_max_age


class TestEnsureFingerprint:
    """Tests for fingerprint caching and failure handling."""

    @pytest.mark.asyncio
    async def test_fingerprint_is_computed_once(
        self, cookies, storage, fingerprinter, cookie_settings
    ):
        manager = make_manager(cookies, storage, fingerprinter, cookie_settings)

        assert await manager.ensure_fingerprint() == "fp-123"
        assert await manager.ensure_fingerprint() == "fp-123"

        fingerprinter.fingerprint.assert_awaited_once()
        assert storage.get_item(VISITOR_FINGERPRINT_KEY) == "fp-123"

    @pytest.mark.asyncio
    async def test_cached_fingerprint_is_reused(
        self, cookies, storage, fingerprinter, cookie_settings
    ):
        storage.set_item(VISITOR_FINGERPRINT_KEY, "fp-cached")
        manager = make_manager(cookies, storage, fingerprinter, cookie_settings)

        assert await manager.ensure_fingerprint() == "fp-cached"
        fingerprinter.fingerprint.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_yields_empty_fingerprint(
        self, cookies, storage, fingerprinter, cookie_settings, mock_probe
    ):
        error = FingerprintUnavailableError("no signals")
        fingerprinter.fingerprint.side_effect = error
        manager = make_manager(cookies, storage, fingerprinter, cookie_settings, probe=mock_probe)

        assert await manager.ensure_fingerprint() == ""
        mock_probe.fingerprint_failed.assert_called_once_with(error)

    @pytest.mark.asyncio
    async def test_identify(self, cookies, storage, fingerprinter, cookie_settings):
        identity = await make_manager(cookies, storage, fingerprinter, cookie_settings).identify()

        assert identity.visitor_id == "visitor-1"
        assert identity.fingerprint == "fp-123"
        assert identity.is_new_visitor

    @pytest.mark.asyncio
    async def test_identify_returning_visitor_without_fingerprint(
        self, cookies, storage, fingerprinter, cookie_settings
    ):
        cookies.set("sf_visitor_id", "known", max_age=60)
        fingerprinter.fingerprint.side_effect = RuntimeError("blocked")

        identity = await make_manager(cookies, storage, fingerprinter, cookie_settings).identify()

        assert identity.visitor_id == "known"
        assert identity.fingerprint is None
        assert not identity.is_new_visitor


class TestFingerprint:
    def test_same_signals_same_fingerprint(self):
        assert compute_fingerprint(SIGNALS) == compute_fingerprint(SIGNALS)
        assert len(compute_fingerprint(SIGNALS)) == 64

    def test_different_signals_different_fingerprint(self):
        other = DeviceSignals(user_agent=SIGNALS.user_agent, language="ar")

        assert compute_fingerprint(other) != compute_fingerprint(SIGNALS)

    def test_requires_user_agent(self):
        with pytest.raises(FingerprintUnavailableError):
            compute_fingerprint(DeviceSignals(user_agent=""))

    @pytest.mark.asyncio
    async def test_fingerprinter_hashes_collected_signals(self):
        fingerprinter = DeviceFingerprinter(lambda: SIGNALS)

        assert await fingerprinter.fingerprint() == compute_fingerprint(SIGNALS)
