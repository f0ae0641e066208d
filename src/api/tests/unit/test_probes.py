"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import (
    DefaultCommerceClientProbe,
    DefaultStartupProbe,
    ObservationContext,
)
from shared_kernel.middleware.observability import DefaultRequestScopeProbe
from storefront.application.observability import DefaultPageProbe
from tenancy.application.observability import DefaultStoreResolutionProbe
from tenancy.infrastructure.observability import DefaultStoreRepositoryProbe
from visitors.application.observability import DefaultVisitorProbe


def mock_logger() -> MagicMock:
    return MagicMock(spec=structlog.stdlib.BoundLogger)


class TestCommerceClientProbe:
    """Tests for CommerceClientProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultCommerceClientProbe()
        assert probe._logger is not None

    def test_request_sent_is_silent_by_default(self):
        """Per-request logging is opt-in."""
        logger = mock_logger()
        probe = DefaultCommerceClientProbe(logger=logger)

        probe.request_sent(method="GET", endpoint="/x", store_id="abc123", locale="en")

        logger.debug.assert_not_called()

    def test_request_sent_logs_when_enabled(self):
        logger = mock_logger()
        probe = DefaultCommerceClientProbe(logger=logger, enable_request_logging=True)

        probe.request_sent(method="GET", endpoint="/x", store_id="abc123", locale="en")

        logger.debug.assert_called_once_with(
            "commerce_api_request_sent",
            method="GET",
            endpoint="/x",
            store_id="abc123",
            locale="en",
        )

    def test_request_failed_logs_warning(self):
        logger = mock_logger()
        probe = DefaultCommerceClientProbe(logger=logger)

        probe.request_failed(method="GET", endpoint="/x", status_code=503, message="down")

        logger.warning.assert_called_once_with(
            "commerce_api_request_failed",
            method="GET",
            endpoint="/x",
            status_code=503,
            message="down",
        )

    def test_with_context_keeps_request_logging_flag(self):
        logger = mock_logger()
        probe = DefaultCommerceClientProbe(logger=logger, enable_request_logging=True)
        context = ObservationContext(request_id="req-1")

        bound = probe.with_context(context)
        bound.request_sent(method="GET", endpoint="/x", store_id=None, locale="ar")

        logger.debug.assert_called_once_with(
            "commerce_api_request_sent",
            method="GET",
            endpoint="/x",
            store_id=None,
            locale="ar",
            request_id="req-1",
        )


class TestStartupProbe:
    def test_application_started_logs_info(self):
        logger = mock_logger()
        probe = DefaultStartupProbe(logger=logger)

        probe.application_started(version="0.1.0", environment="test")

        logger.info.assert_called_once_with(
            "application_started",
            version="0.1.0",
            environment="test",
        )


class TestRequestScopeProbe:
    def test_scope_closed_includes_store(self):
        logger = mock_logger()
        probe = DefaultRequestScopeProbe(logger=logger)

        probe.scope_closed(request_id="req-1", store_id="abc123", status_code=200)

        logger.debug.assert_called_once_with(
            "request_scope_closed",
            request_id="req-1",
            store_id="abc123",
            status_code=200,
        )


class TestStoreRepositoryProbe:
    def test_store_not_found_logs_info(self):
        logger = mock_logger()
        probe = DefaultStoreRepositoryProbe(logger=logger)

        probe.store_not_found("shop1")

        logger.info.assert_called_once_with("store_not_found", identifier="shop1")

    def test_upstream_unavailable_logs_warning(self):
        logger = mock_logger()
        probe = DefaultStoreRepositoryProbe(logger=logger)

        probe.upstream_unavailable("shop1", status_code=503, reason="down")

        logger.warning.assert_called_once_with(
            "store_lookup_upstream_unavailable",
            identifier="shop1",
            status_code=503,
            reason="down",
        )


class TestStoreResolutionProbe:
    def test_store_resolution_failed_includes_context(self):
        """Bound observation context should be merged into every event."""
        logger = mock_logger()
        context = ObservationContext(request_id="req-1", host="shop1.example.com")
        probe = DefaultStoreResolutionProbe(logger=logger).with_context(context)

        probe.store_resolution_failed("shop1", error_type="STORE_NOT_FOUND", message="gone")

        logger.warning.assert_called_once_with(
            "store_resolution_failed",
            tenant_key="shop1",
            error_type="STORE_NOT_FOUND",
            message="gone",
            request_id="req-1",
            host="shop1.example.com",
        )


class TestVisitorProbe:
    def test_tracking_failed_logs_error(self):
        logger = mock_logger()
        probe = DefaultVisitorProbe(logger=logger)

        probe.tracking_failed("abc123", RuntimeError("boom"))

        logger.error.assert_called_once_with(
            "visitor_tracking_failed",
            store_id="abc123",
            error="boom",
            error_type="RuntimeError",
        )


class TestPageProbe:
    def test_secondary_section_omitted_logs_warning(self):
        logger = mock_logger()
        probe = DefaultPageProbe(logger=logger)

        probe.secondary_section_omitted("static_pages", reason="timeout")

        logger.warning.assert_called_once_with(
            "secondary_section_omitted",
            section="static_pages",
            reason="timeout",
        )
