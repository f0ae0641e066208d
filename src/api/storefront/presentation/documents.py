"""HTML documents of the storefront, rendered with Jinja2.

Every document that serves a store embeds the bootstrap payload in its head,
so the client runtime starts from the same store the server rendered.
"""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from hydration.bootstrap import render_bootstrap_script
from storefront.application.pages import StorefrontPage

_ENV = Environment(
    loader=PackageLoader("storefront.presentation", "templates"),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _common(page: StorefrontPage) -> dict:
    return {
        "locale": page.locale,
        "metadata": page.metadata,
        "path": page.path,
        "bootstrap_script": Markup(render_bootstrap_script(page.bootstrap)),
    }


def render_storefront(page: StorefrontPage) -> str:
    """Document of a servable store."""
    return _ENV.get_template("storefront.html").render(
        store=page.resolved.store,
        layout=page.layout,
        **_common(page),
    )


def render_status(page: StorefrontPage, heading: str, message: str) -> str:
    """Not-found and unavailable documents."""
    return _ENV.get_template("status.html").render(
        heading=heading,
        message=message,
        **_common(page),
    )


def render_landing(page: StorefrontPage) -> str:
    """Platform landing document on non-tenant hosts."""
    return _ENV.get_template("landing.html").render(**_common(page))
