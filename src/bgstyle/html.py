# src/bgstyle/html.py
from __future__ import annotations

from typing import Iterable, Sequence

from .entities import HeadTag

Attachment = tuple[HeadTag, str]


def merge_head(
    existing: Sequence[Attachment], new: Iterable[Attachment]
) -> list[Attachment]:
    """
    Append attachments to a head list, at most once per key.

    The head list is append-only; an attachment whose key is already present
    is dropped, earlier entries are never replaced.
    """
    out = list(existing)
    seen = {key for _, key in out}
    for tag, key in new:
        if key in seen:
            continue
        seen.add(key)
        out.append((tag, key))
    return out


def render_head_tag(tag: HeadTag, key: str) -> str:
    # css is emitted verbatim; only "</" could break out of the element
    body = tag.value.replace("</", "<\\/")
    return f'<{tag.tag} data-bgstyle-key="{_escape_html(key)}">{body}</{tag.tag}>'


def render_head(attachments: Iterable[Attachment]) -> str:
    return "\n".join(render_head_tag(t, k) for t, k in merge_head([], attachments))


def render_preview_page(
    *,
    attachments: Iterable[Attachment],
    body_html: str = "",
    title: str = "bgstyle preview",
) -> str:
    """
    Return a minimal page with the style fragments in <head>.
    """
    head = render_head(attachments)
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>{_escape_html(title)}</title>
    {head}
  </head>
  <body>
    {body_html}
  </body>
</html>
"""


def _escape_html(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
