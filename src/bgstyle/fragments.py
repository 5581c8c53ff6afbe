# src/bgstyle/fragments.py
from __future__ import annotations

import uuid
from typing import Sequence

from . import config
from .collaborators import UrlRelativizer
from .entities import StyleFragment
from .errors import EmptySelector


class StyleFragmentBuilder:
    def __init__(self, urls: UrlRelativizer) -> None:
        self._urls = urls

    def build(
        self,
        selector: str,
        urls: Sequence[str],
        *,
        entity_id: str | None = None,
        source_ids: Sequence[str] = (),
    ) -> StyleFragment:
        """
        Build one `background-image` rule for `selector`.

        URL order is kept as given: the first URL is the top layer.
        The key is random on every call, so identical input still gets a
        new key.
        """
        selector = selector.strip()
        if not selector:
            raise EmptySelector("refusing to emit a background rule without a selector")
        if not urls:
            raise ValueError("at least one url is required")

        layers = ", ".join(
            f"url('{_escape_css_url(self._urls.to_relative(u))}')" for u in urls
        )
        css = f"{selector} {{ background-image: {layers}; }}"

        ids = tuple(source_ids) or ((entity_id,) if entity_id is not None else ())
        return StyleFragment(
            css_text=css,
            fragment_key=new_fragment_key(entity_id),
            source_ids=ids,
        )


def new_fragment_key(entity_id: str | None = None) -> str:
    prefix = config.get_fragment_key_prefix()
    token = uuid.uuid4().hex
    if entity_id is None or str(entity_id) == "":
        return f"{prefix}__{token}"
    return f"{prefix}__{_slug(str(entity_id))}__{token}"


def _escape_css_url(s: str) -> str:
    # Inside url('...'): quotes, backslashes and newlines would end the token.
    return (
        s.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "")
        .replace("\r", "")
    )


def _slug(s: str) -> str:
    return "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in s)
