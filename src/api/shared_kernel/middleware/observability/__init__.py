"""Observability for shared middleware operations."""

from shared_kernel.middleware.observability.request_scope_probe import (
    DefaultRequestScopeProbe,
    RequestScopeProbe,
)

__all__ = [
    "DefaultRequestScopeProbe",
    "RequestScopeProbe",
]
