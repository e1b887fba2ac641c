"""
Shared HTML parsing helpers.
"""

import re
from html import unescape
from typing import Any

from bs4 import BeautifulSoup

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def make_soup(html: str) -> BeautifulSoup:
    """Parse a page with the lenient lxml parser."""
    return BeautifulSoup(html or "", "lxml")


def plain_text(value: Any) -> str:
    """Strip inline markup and entities from a structured-data string."""
    if not isinstance(value, str):
        return ""
    text = unescape(_TAG_RE.sub(" ", value))
    return _SPACE_RE.sub(" ", text).strip()
