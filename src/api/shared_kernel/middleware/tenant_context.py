"""Request context value object and the server-side context store.

``RequestContext`` is the pure value object carried across bounded contexts:
which store (if any) and which locale outbound commerce API calls are made
for. The server copy lives in the current ``RequestScope``; the functions
below are the only way to read or write it, so two concurrent requests can
never observe each other's values.

The client runtime keeps its own copy (see ``hydration``), which is not
shared memory with this one.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared_kernel.locale import Locale
from shared_kernel.request_scope import current_scope, require_scope


@dataclass(frozen=True)
class RequestContext:
    """Store id and locale stamped onto outbound commerce API calls.

    Attributes:
        store_id: Resolved store identifier, or None before resolution and for
            platform-level (unscoped) calls.
        locale: Locale sent as the language preference.
    """

    store_id: str | None
    locale: Locale

    @property
    def is_tenant_scoped(self) -> bool:
        """Whether calls made with this context are scoped to a store."""
        return bool(self.store_id)


def set_store_id(store_id: str | None) -> None:
    """Set (or clear) the store id for the current request.

    An empty string is treated as "no store" so it can never be sent as an
    empty routing header.

    Raises:
        RequestScopeError: If called outside a request scope.
    """
    require_scope().store_id = store_id or None


def set_locale(locale: Locale) -> None:
    """Set the locale for the current request.

    Raises:
        RequestScopeError: If called outside a request scope.
    """
    require_scope().locale = locale


def get_store_id() -> str | None:
    """Return the current request's store id, or None."""
    scope = current_scope()
    return scope.store_id if scope is not None else None


def get_locale(default: Locale = Locale.ENGLISH) -> Locale:
    """Return the current request's locale, or ``default`` outside a request."""
    scope = current_scope()
    return scope.locale if scope is not None else default


def get_request_context() -> RequestContext:
    """Snapshot the current request's context."""
    return RequestContext(store_id=get_store_id(), locale=get_locale())
