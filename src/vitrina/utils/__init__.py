"""Utility modules for Vitrina.

Provides:
- logger: get_logger for namespaced logging
- html: parse_fragment, set_font_family for BeautifulSoup trees
"""

from vitrina.utils.html import parse_fragment, set_font_family
from vitrina.utils.logger import get_logger

__all__ = [
    "get_logger",
    "parse_fragment",
    "set_font_family",
]
