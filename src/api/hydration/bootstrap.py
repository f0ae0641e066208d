"""Bootstrap payload embedded in the rendered document.

The payload is data, not executable code: a JSON document inside a
``<script type="application/json">`` element. Characters that could close
the element early are escaped.
"""

from __future__ import annotations

from html.parser import HTMLParser

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared_kernel.locale import Locale

BOOTSTRAP_ELEMENT_ID = "__SF_BOOTSTRAP__"

_SCRIPT_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


class BootstrapPayload(BaseModel):
    """Context the server resolved for the document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    store_id: str | None = Field(default=None, alias="storeId")
    locale: Locale = Locale.ENGLISH

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


def render_bootstrap_script(payload: BootstrapPayload) -> str:
    """Render the payload as an inert JSON script element."""
    body = payload.to_json().translate(_SCRIPT_ESCAPES)
    return (
        f'<script id="{BOOTSTRAP_ELEMENT_ID}" type="application/json">'
        f"{body}</script>"
    )


class _BootstrapExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self._inside = False
        self._chunks: list[str] = []
        self.found = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "script" and not self.found and dict(attrs).get("id") == BOOTSTRAP_ELEMENT_ID:
            self._inside = True
            self.found = True

    def handle_endtag(self, tag: str) -> None:
        if tag == "script":
            self._inside = False

    def handle_data(self, data: str) -> None:
        if self._inside:
            self._chunks.append(data)

    @property
    def content(self) -> str:
        return "".join(self._chunks)


def extract_bootstrap(document: str) -> BootstrapPayload | None:
    """Read the bootstrap payload out of a rendered document.

    Returns:
        The payload, or None when the document carries none or it does not
        validate (the runtime then falls back to the store-id cookie).
    """
    parser = _BootstrapExtractor()
    parser.feed(document)
    parser.close()
    if not parser.found:
        return None

    try:
        return BootstrapPayload.model_validate_json(parser.content)
    except ValidationError:
        return None
