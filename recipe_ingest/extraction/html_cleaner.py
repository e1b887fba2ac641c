"""
Best-effort HTML -> text cleaner for AI extraction.

Removes page chrome (scripts, navigation, ads, cookie banners), keeps the
main content region and preserves block structure as line breaks.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Comment, Tag

from .soup import make_soup

logger = logging.getLogger(__name__)

CHROME_TAGS = ["script", "style", "noscript", "header", "footer", "nav", "aside"]

# Containers whose class/id marks them as ads, tracking, social or overlays.
NOISE_CONTAINERS = ["div", "section", "aside", "form", "ul"]
NOISE_KEYWORDS = (
    "advertisement",
    "sponsor",
    "tracking",
    "cookie",
    "popup",
    "modal",
    "sidebar",
    "comment",
    "share",
    "social",
)
# "ad"/"ads" only as whole tokens or prefixes ("ad-slot"), never inside "header".
AD_TOKEN_RE = re.compile(r"^ads?(?:[-_]|$)")

CONTENT_CLASS_RE = re.compile(r"recipe|content|post", re.IGNORECASE)

BLOCK_BREAKS = {
    "p": "\n\n",
    "li": "\n",
    "tr": "\n",
    "td": " | ",
    "th": " | ",
    **{f"h{level}": "\n\n" for level in range(1, 7)},
}

_HSPACE_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def _is_noise(tag: Tag) -> bool:
    if tag.attrs is None:
        return False
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    tokens = [c.lower() for c in classes]
    element_id = tag.get("id")
    if isinstance(element_id, str) and element_id:
        tokens.append(element_id.lower())

    for token in tokens:
        if AD_TOKEN_RE.match(token):
            return True
        if any(keyword in token for keyword in NOISE_KEYWORDS):
            return True
    return False


def _strip_chrome(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(CHROME_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for tag in soup.find_all(NOISE_CONTAINERS):
        if tag.decomposed:
            continue
        if _is_noise(tag):
            tag.decompose()


def _main_region(soup: BeautifulSoup) -> Optional[Tag]:
    region = soup.find("main") or soup.find("article")
    if region is None:
        region = soup.find("div", class_=CONTENT_CLASS_RE)
    return region


def _collapse(text: str) -> str:
    lines = [_HSPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def clean_text(html: str) -> str:
    """
    Reduce a page to readable text.

    Block-level closings become newlines, table cells become " | ",
    entities are decoded and whitespace is collapsed.
    """
    soup = make_soup(html)
    _strip_chrome(soup)

    region = _main_region(soup)
    if region is None:
        region = soup.body or soup
    else:
        logger.debug("Using <%s> as main content region", region.name)

    for br in region.find_all("br"):
        br.replace_with("\n")
    for name, separator in BLOCK_BREAKS.items():
        for tag in region.find_all(name):
            tag.append(separator)

    return _collapse(region.get_text(" "))
