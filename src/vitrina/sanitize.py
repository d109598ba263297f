"""HTML sanitization for compiled documents.

Compiled markdown may carry raw HTML from the source. Before any other stage
touches it, executable script and inline event handlers are removed. Math
payloads (``<script type="math/tex">``) are kept so the host can typeset them.

Example:
    >>> from vitrina.sanitize import sanitize
    >>> sanitize('<p onclick="x()">Hi</p><script>alert(1)</script>')
    '<p>Hi</p>'
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from vitrina.utils.html import parse_fragment

MATH_SCRIPT_TYPE_PREFIX = "math/tex"

# Inline event-handler content attributes stripped from every element.
# Enumerated, not pattern-matched on "on*".
EVENT_HANDLER_ATTRIBUTES = frozenset(
    (
        "onabort",
        "onblur",
        "onchange",
        "onclick",
        "ondbclick",
        "ondblclick",
        "onerror",
        "onfocus",
        "onkeydown",
        "onkeypress",
        "onkeyup",
        "onload",
        "onmousedown",
        "onmousemove",
        "onmouseover",
        "onmouseout",
        "onmouseup",
        "onreset",
        "onresize",
        "onscroll",
        "onselect",
        "onsubmit",
        "onunload",
    )
)


def _is_math_script(script: Tag) -> bool:
    script_type = script.get("type") or ""
    return script_type.startswith(MATH_SCRIPT_TYPE_PREFIX)


def sanitize_tree(tree: BeautifulSoup) -> BeautifulSoup:
    """Sanitize a parsed tree in place and return it.

    Args:
        tree: Parsed HTML tree owned by the caller.

    Returns:
        The same tree, without disallowed scripts and handler attributes.
    """
    for script in tree.find_all("script"):
        if not _is_math_script(script):
            script.decompose()

    for element in tree.find_all(True):
        for attribute in EVENT_HANDLER_ATTRIBUTES.intersection(element.attrs):
            del element[attribute]

    return tree


def sanitize(html: str) -> str:
    """Remove executable script and inline event handlers from HTML.

    Idempotent: sanitizing sanitized output returns it unchanged.

    Args:
        html: Untrusted HTML fragment.

    Returns:
        Sanitized HTML fragment.
    """
    return str(sanitize_tree(parse_fragment(html)))


__all__ = [
    "EVENT_HANDLER_ATTRIBUTES",
    "MATH_SCRIPT_TYPE_PREFIX",
    "sanitize",
    "sanitize_tree",
]
