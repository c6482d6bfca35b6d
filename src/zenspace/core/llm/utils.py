"""Helpers for turning litellm responses into plain text."""

from typing import Any

from loguru import logger

# Content blocks that carry no user-facing text.
_SKIPPED_BLOCKS = frozenset({"thinking", "redacted_thinking", "tool_use", "tool_result"})


def safe_get_content(response: Any, default: str = "") -> str:
    """Return the first choice's message text, or ``default`` if there is none.

    Providers occasionally answer with no choices or a choice without a
    message (safety blocks, truncated streams); those are logged and
    treated as an empty reply rather than raised.
    """
    try:
        message = response.choices[0].message
    except (AttributeError, IndexError, TypeError):
        logger.warning(f"LLM response carried no message; using {default!r}")
        return default
    if message is None:
        logger.warning(f"LLM response carried no message; using {default!r}")
        return default

    content = getattr(message, "content", None)
    return default if content is None else extract_text_from_response(content)


def extract_text_from_response(content: Any) -> str:
    """Flatten message content to a string.

    litellm normally hands back a string. Some providers return a list of
    content blocks instead; only their text parts are kept.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(_block_text(block) for block in content)
    return getattr(content, "text", None) or str(content)


def _block_text(block: Any) -> str:
    if isinstance(block, str):
        return block
    if isinstance(block, dict):
        if block.get("type") in _SKIPPED_BLOCKS:
            return ""
        return block.get("text") or ""
    return getattr(block, "text", "") or ""


def strip_code_fences(text: str) -> str:
    """Drop a wrapping Markdown fence (```json ... ```) around a structured reply."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    _, _, body = text.partition("\n")
    body = body.rstrip()
    if body.endswith("```"):
        body = body[:-3]
    return body.strip()
