"""Commerce API endpoint paths, relative to the configured base URL."""

from urllib.parse import quote

STORE_ID_HEADER = "X-Store-Id"
LANGUAGE_HEADER = "Accept-Language"


def _segment(value: str) -> str:
    return quote(value, safe="")


def store_by_subdomain(subdomain: str) -> str:
    return f"/public/stores/{_segment(subdomain)}"


def store_by_id(store_id: str) -> str:
    return f"/public/stores/id/{_segment(store_id)}"


STATIC_PAGES = "/public/stores/static-pages"


def fulfillment_methods(store_id: str) -> str:
    return f"/public/stores/{_segment(store_id)}/fulfillment-methods"


PRODUCTS = "/public/products"
CATEGORIES = "/public/categories"


def product_reviews(product_id: str) -> str:
    return f"/public/products/{_segment(product_id)}/reviews"


VISITOR_TRACK = "/public/visitors/track"
