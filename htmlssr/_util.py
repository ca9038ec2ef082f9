from __future__ import annotations

import re

__all__ = ("html_escape",)


HTML_ESCAPE_TABLE = {
    '"': "&quot;",
    "&": "&amp;",
    "'": "&#39;",
    "<": "&lt;",
    ">": "&gt;",
}

_HTML_ESCAPE_RE = re.compile("[" + re.escape("".join(HTML_ESCAPE_TABLE)) + "]")

# str.translate() scans the text once, left to right, so an ampersand produced by
# one replacement is never seen again by another.
_HTML_ESCAPE_TRANSLATION = str.maketrans(HTML_ESCAPE_TABLE)


def html_escape(text: str) -> str:
    """
    Escape text for use as element content or as a double-quoted attribute value.

    Replaces ``"``, ``&``, ``'``, ``<`` and ``>`` with their HTML entities. When
    ``text`` contains none of them, the very same object is returned.

    Examples
    --------
    >>> from htmlssr import html_escape
    >>> html_escape('&"')
    '&amp;&quot;'
    >>> html_escape("plain")
    'plain'
    """
    if not _HTML_ESCAPE_RE.search(text):
        return text
    return text.translate(_HTML_ESCAPE_TRANSLATION)


# Attribute names are never entity-encoded, so any of these makes a name unusable.
_INVALID_ATTR_NAME_RE = re.compile(r"[\"&'<>/=\s]")


def is_valid_attr_name(name: str) -> bool:
    return name != "" and not _INVALID_ATTR_NAME_RE.search(name)
