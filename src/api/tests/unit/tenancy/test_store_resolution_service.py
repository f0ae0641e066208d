"""Unit tests for StoreResolutionService.

Covers per-request memoization of the store lookup, request context
population and the mapping of lookup failures to StoreError types.
"""

from __future__ import annotations

import asyncio
from unittest.mock import ANY, AsyncMock, MagicMock

import pytest

from shared_kernel.locale import Locale
from shared_kernel.middleware.tenant_context import get_locale, get_store_id
from shared_kernel.request_scope import RequestScopeError, request_scope
from tenancy.application.observability import StoreResolutionProbe
from tenancy.application.services import StoreResolutionService
from tenancy.domain.value_objects import StoreErrorType, TenantKey
from tenancy.ports.exceptions import (
    StoreLookupError,
    TenantInactiveError,
    TenantNotFoundError,
    TransientUpstreamError,
)
from tenancy.ports.repositories import IStoreRepository


@pytest.fixture
def mock_repository() -> AsyncMock:
    return AsyncMock(spec=IStoreRepository)


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=StoreResolutionProbe)


@pytest.fixture
def service(mock_repository, tenancy_settings, mock_probe) -> StoreResolutionService:
    return StoreResolutionService(
        repository=mock_repository,
        settings=tenancy_settings,
        probe=mock_probe,
    )


class TestResolveRequestStore:
    """Tests for binding a request to its store."""

    @pytest.mark.asyncio
    async def test_resolves_store_and_populates_context(
        self, service, mock_repository, store
    ):
        mock_repository.get_by_subdomain.return_value = store

        with request_scope(hostname="shop1.example.com", preferred_locale=Locale.ARABIC):
            resolved = await service.resolve_request_store()

            assert get_store_id() == "abc123"
            assert get_locale() is Locale.ARABIC

        assert resolved.store is store
        assert resolved.tenant_key == TenantKey(value="shop1")
        assert resolved.error is None
        mock_repository.get_by_subdomain.assert_awaited_once_with(TenantKey(value="shop1"))

    @pytest.mark.asyncio
    async def test_concurrent_call_sites_share_one_lookup(
        self, service, mock_repository, store
    ):
        """Metadata, layout and body resolving concurrently cost one upstream call."""

        async def slow_lookup(tenant_key):
            await asyncio.sleep(0.01)
            return store

        mock_repository.get_by_subdomain.side_effect = slow_lookup

        with request_scope(hostname="shop1.example.com"):
            results = await asyncio.gather(
                service.resolve_request_store(),
                service.resolve_request_store(),
                service.resolve_request_store(),
            )

        assert mock_repository.get_by_subdomain.await_count == 1
        assert all(result.store is store for result in results)

    @pytest.mark.asyncio
    async def test_instances_share_the_request_memo(
        self, mock_repository, tenancy_settings, store
    ):
        """Each dependency-injected service instance hits the same memo."""
        mock_repository.get_by_subdomain.return_value = store

        with request_scope(hostname="shop1.example.com"):
            for _ in range(3):
                await StoreResolutionService(mock_repository, tenancy_settings).resolve_request_store()

        assert mock_repository.get_by_subdomain.await_count == 1

    @pytest.mark.asyncio
    async def test_each_request_looks_up_again(self, service, mock_repository, store):
        """There is no cache across requests."""
        mock_repository.get_by_subdomain.return_value = store

        with request_scope(hostname="shop1.example.com"):
            await service.resolve_request_store()
        with request_scope(hostname="shop1.example.com"):
            await service.resolve_request_store()

        assert mock_repository.get_by_subdomain.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_requests_do_not_leak_store_ids(
        self, service, mock_repository, store_factory
    ):
        """Two stores resolved at the same time keep their own context."""
        stores = {
            "shop1": store_factory(store_id="abc123", subdomain="shop1"),
            "shop2": store_factory(store_id="xyz789", subdomain="shop2"),
        }

        async def lookup(tenant_key):
            await asyncio.sleep(0.01 if tenant_key.value == "shop1" else 0)
            return stores[tenant_key.value]

        mock_repository.get_by_subdomain.side_effect = lookup

        async def handle(host: str) -> str | None:
            with request_scope(hostname=host):
                await service.resolve_request_store()
                await asyncio.sleep(0.01)
                return get_store_id()

        first, second = await asyncio.gather(
            handle("shop1.example.com"), handle("shop2.example.com")
        )

        assert (first, second) == ("abc123", "xyz789")

    @pytest.mark.asyncio
    async def test_non_tenant_host(self, service, mock_repository, mock_probe):
        with request_scope(hostname="www.example.com"):
            resolved = await service.resolve_request_store()
            assert get_store_id() is None

        assert not resolved.is_tenant_host
        assert resolved.store is None
        assert resolved.error is None
        mock_repository.get_by_subdomain.assert_not_called()
        mock_probe.non_tenant_host.assert_called_once_with("www.example.com")

    @pytest.mark.parametrize(
        "error,expected",
        [
            (TenantNotFoundError("shop1"), StoreErrorType.NOT_FOUND),
            (TenantInactiveError("shop1"), StoreErrorType.INACTIVE),
            (TransientUpstreamError("shop1", "down"), StoreErrorType.NETWORK_ERROR),
            (StoreLookupError("shop1", "weird"), StoreErrorType.UNKNOWN),
        ],
    )
    @pytest.mark.asyncio
    async def test_lookup_failures_become_store_errors(
        self, service, mock_repository, error, expected
    ):
        mock_repository.get_by_subdomain.side_effect = error

        with request_scope(hostname="shop1.example.com"):
            resolved = await service.resolve_request_store()
            assert get_store_id() is None

        assert resolved.store is None
        assert resolved.error.type is expected
        assert resolved.error.tenant_key == TenantKey(value="shop1")

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(
        self, service, mock_repository, mock_probe, tenancy_settings
    ):
        """A lookup that outlives the bounded wait is treated as transient."""

        async def hang(tenant_key):
            await asyncio.sleep(10)

        mock_repository.get_by_subdomain.side_effect = hang

        with request_scope(hostname="shop1.example.com"):
            resolved = await service.resolve_request_store()

        assert resolved.error.type is StoreErrorType.NETWORK_ERROR
        assert not resolved.error.is_terminal
        mock_probe.store_lookup_timed_out.assert_called_once_with(
            "shop1", timeout=tenancy_settings.store_lookup_timeout
        )

    @pytest.mark.asyncio
    async def test_failure_is_shared_by_all_call_sites(self, service, mock_repository):
        mock_repository.get_by_subdomain.side_effect = TenantNotFoundError("shop1")

        with request_scope(hostname="shop1.example.com"):
            first, second = await asyncio.gather(
                service.resolve_request_store(), service.resolve_request_store()
            )

        assert first == second
        assert mock_repository.get_by_subdomain.await_count == 1

    @pytest.mark.asyncio
    async def test_requires_request_scope(self, service):
        with pytest.raises(RequestScopeError):
            await service.resolve_request_store()


class TestGetStore:
    @pytest.mark.asyncio
    async def test_get_store_raises_lookup_errors(self, service, mock_repository):
        mock_repository.get_by_subdomain.side_effect = TenantNotFoundError("shop1")

        with request_scope():
            with pytest.raises(TenantNotFoundError):
                await service.get_store(TenantKey(value="shop1"))

    @pytest.mark.asyncio
    async def test_get_store_by_id_is_memoized(self, service, mock_repository, store):
        mock_repository.get_by_id.return_value = store

        with request_scope():
            await service.get_store_by_id("abc123")
            await service.get_store_by_id("abc123")

        mock_repository.get_by_id.assert_awaited_once_with("abc123")

    def test_tenant_key_for_uses_configured_policy(self, mock_repository, tenancy_settings):
        settings = tenancy_settings.model_copy(update={"reserved_labels": ["shop1"]})
        service = StoreResolutionService(mock_repository, settings)

        assert service.tenant_key_for("shop1.example.com") is None
        assert service.tenant_key_for("shop2.example.com") == TenantKey(value="shop2")


class TestBindActionContext:
    """Tests for populating the context of server actions."""

    @pytest.mark.asyncio
    async def test_cookie_store_id_wins(
        self, service, mock_repository, mock_probe, cookie_settings, store
    ):
        mock_repository.get_by_id.return_value = store

        with request_scope(hostname="shop1.example.com", preferred_locale=Locale.ARABIC):
            store_id = await service.bind_action_context(
                {"sf_store_id": "abc123"}, cookie_settings
            )
            assert get_store_id() == "abc123"
            assert get_locale() is Locale.ARABIC

        assert store_id == "abc123"
        mock_repository.get_by_id.assert_awaited_once_with("abc123")
        mock_repository.get_by_subdomain.assert_not_called()
        mock_probe.store_bound_from_cookie.assert_called_once_with("abc123")

    @pytest.mark.asyncio
    async def test_stale_cookie_falls_back_to_host(
        self, service, mock_repository, mock_probe, cookie_settings, store
    ):
        """A cookie naming an unknown store never reaches upstream calls."""
        mock_repository.get_by_id.side_effect = TenantNotFoundError("gone-store")
        mock_repository.get_by_subdomain.return_value = store

        with request_scope(hostname="shop1.example.com"):
            store_id = await service.bind_action_context(
                {"sf_store_id": "gone-store"}, cookie_settings
            )
            assert get_store_id() == "abc123"

        assert store_id == "abc123"
        mock_probe.store_bound_from_cookie.assert_not_called()
        mock_probe.store_resolution_failed.assert_any_call(
            "gone-store", error_type=StoreErrorType.NOT_FOUND.value, message=ANY
        )

    @pytest.mark.asyncio
    async def test_stale_cookie_on_apex_binds_nothing(
        self, service, mock_repository, cookie_settings
    ):
        mock_repository.get_by_id.side_effect = TenantInactiveError("old")

        with request_scope(hostname="example.com"):
            assert await service.bind_action_context({"sf_store_id": "old"}, cookie_settings) is None
            assert get_store_id() is None

    @pytest.mark.asyncio
    async def test_falls_back_to_host_resolution(
        self, service, mock_repository, cookie_settings, store
    ):
        mock_repository.get_by_subdomain.return_value = store

        with request_scope(hostname="shop1.example.com"):
            store_id = await service.bind_action_context({}, cookie_settings)
            assert get_store_id() == "abc123"

        assert store_id == "abc123"

    @pytest.mark.asyncio
    async def test_no_store_on_apex(self, service, cookie_settings):
        with request_scope(hostname="example.com"):
            assert await service.bind_action_context({}, cookie_settings) is None
