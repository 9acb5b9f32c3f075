"""
Message body formatting for Zoom Team Chat.

Zoom chat renders a markdown-like syntax natively, so markdown passes through
untouched. Plain text has its emphasis characters stripped, and a small set of
HTML tags is rewritten into the native syntax before any other tag is dropped.
"""

import re
from typing import Any, Optional

_MARKUP_CHARS = re.compile(r"[*_`~]")

# Applied in order; later rules see the output of earlier ones.
_HTML_RULES = (
    (re.compile(r"<br\s*/?>"), "\n"),
    (re.compile(r"</?p>"), "\n"),
    (re.compile(r"<strong>(.*?)</strong>"), r"*\1*"),
    (re.compile(r"<b>(.*?)</b>"), r"*\1*"),
    (re.compile(r"<em>(.*?)</em>"), r"_\1_"),
    (re.compile(r"<i>(.*?)</i>"), r"_\1_"),
    (re.compile(r"<code>(.*?)</code>"), r"`\1`"),
    (re.compile(r"<[^>]+>"), ""),
)


def format_message(message: str, fmt: Optional[Any] = None) -> str:
    """
    Render *message* for Zoom according to *fmt*.

    - ``markdown``, ``None`` or anything unrecognized: returned unchanged.
    - ``plain``: ``*``, ``_``, backtick and ``~`` are removed.
    - ``html``: converted with :func:`html_to_zoom`.
    """
    if fmt == "plain":
        return strip_markup(message)
    if fmt == "html":
        return html_to_zoom(message)
    return message


def strip_markup(message: str) -> str:
    return _MARKUP_CHARS.sub("", message)


def html_to_zoom(message: str) -> str:
    for pattern, replacement in _HTML_RULES:
        message = pattern.sub(replacement, message)
    return message
