"""Markdown rendering for read-only previews.

Both helpers are pure functions of the raw content string.
"""

from __future__ import annotations

import re

from rich.markdown import Markdown

_FENCE_RE = re.compile(r"^```.*$", re.MULTILINE)
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE)
_LIST_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+", re.MULTILINE)
_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_EMPHASIS_RE = re.compile(r"(\*\*|__|\*|_|`|~~)")
_WHITESPACE_RE = re.compile(r"\s+")


def render_markdown(content: str) -> Markdown:
    """Turn entry content into a renderable for a rich ``Console``.

    Inline HTML is shown as text rather than interpreted.
    """
    return Markdown(content or "", hyperlinks=False)


def excerpt(content: str, length: int = 80) -> str:
    """Collapse Markdown into a single plain-text line for list views."""
    text = _FENCE_RE.sub("", content)
    text = _HEADING_RE.sub("", text)
    text = _LIST_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _EMPHASIS_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if len(text) > length:
        return text[: length - 3].rstrip() + "..."
    return text
