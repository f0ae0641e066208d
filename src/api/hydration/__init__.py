"""Cross-boundary synchronization of the request context.

The server resolves the store once and renders it into the document as a
bootstrap payload. The client runtime that takes over afterwards keeps its
own copy of the context, which is not shared memory with the server's, kept
consistent through three channels:

1. the bootstrap payload (write-once, read synchronously at start-up);
2. the ``StoreProvider`` (reactive holder, updated on navigation);
3. the host-only store-id cookie (written only by the provider).
"""

from hydration.bootstrap import BootstrapPayload, extract_bootstrap, render_bootstrap_script
from hydration.cookies import BrowserCookieJar
from hydration.runtime import ClientRuntime
from hydration.store_provider import StoreProvider

__all__ = [
    "BootstrapPayload",
    "BrowserCookieJar",
    "ClientRuntime",
    "StoreProvider",
    "extract_bootstrap",
    "render_bootstrap_script",
]
