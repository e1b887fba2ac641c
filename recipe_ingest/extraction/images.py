"""
Recipe image candidates from a page.

Priority (discovery order is the ranking):
1. schema.org Recipe `image`
2. Open Graph `og:image`
3. <img src> (lazy `data-src` when src is missing or excluded)
4. first URL of every `srcset`

Icons, logos, tracking pixels and similar are excluded from 3 and 4.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from ..core.config import get_settings
from .schema_org import find_schema_recipe
from .soup import make_soup

logger = logging.getLogger(__name__)

EXCLUDED_SUBSTRINGS = (
    "data:image",
    "pixel",
    "tracking",
    "avatar",
    "logo",
    "icon",
    "share",
    "button",
    "ad-",
    "sponsor",
    "gravatar",
    "emoji",
    ".svg",
    ".gif",
)
# Pixel-size path segments: /1x1.png (sized uploads like photo-1024x683.jpg are kept)
SIZE_SUFFIX_RE = re.compile(r"/\d+x\d+\.")


def is_excluded(src: str) -> bool:
    lowered = src.lower()
    if lowered.startswith("data:"):
        return True
    if any(token in lowered for token in EXCLUDED_SUBSTRINGS):
        return True
    return bool(SIZE_SUFFIX_RE.search(lowered))


def resolve_url(src: str, base_url: Optional[str]) -> Optional[str]:
    """Absolute http(s) URL, or None when it cannot be resolved."""
    src = (src or "").strip()
    if not src:
        return None
    try:
        url = urljoin(base_url or "", src)
        parsed = urlparse(url)
    except ValueError as exc:
        logger.debug("Skipping unresolvable image URL %r: %s", src, exc)
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return url


def _schema_image_urls(image: Any) -> List[str]:
    items = image if isinstance(image, list) else [image]
    urls = []
    for item in items:
        if isinstance(item, str):
            urls.append(item)
        elif isinstance(item, dict):
            url = item.get("url") or item.get("contentUrl")
            if isinstance(url, str):
                urls.append(url)
    return urls


def _og_image(soup: BeautifulSoup) -> Optional[str]:
    meta = soup.find("meta", attrs={"property": "og:image"}) or soup.find("meta", attrs={"name": "og:image"})
    if meta is None:
        return None
    content = meta.get("content")
    return content if isinstance(content, str) else None


def _img_sources(soup: BeautifulSoup) -> Iterable[str]:
    for img in soup.find_all("img"):
        for attr in ("src", "data-src", "data-lazy-src"):
            src = img.get(attr)
            if isinstance(src, str) and src.strip() and not is_excluded(src):
                yield src
                break


def _srcset_sources(soup: BeautifulSoup) -> Iterable[str]:
    for element in soup.find_all(attrs={"srcset": True}):
        srcset = element.get("srcset")
        if not isinstance(srcset, str):
            continue
        # "url1 1x, url2 2x" / "url1 300w, url2 600w"
        first = srcset.strip().split(",")[0].strip().split()
        if first and not is_excluded(first[0]):
            yield first[0]


def extract_image_candidates(html: str, base_url: Optional[str], limit: Optional[int] = None) -> List[str]:
    """Ranked, de-duplicated absolute image URLs (capped, default 12)."""
    limit = limit or get_settings().max_image_candidates
    soup = make_soup(html)

    discovered: List[str] = []
    schema = find_schema_recipe(soup)
    if schema and schema.get("image"):
        discovered.extend(_schema_image_urls(schema["image"]))
    og_image = _og_image(soup)
    if og_image:
        discovered.append(og_image)
    discovered.extend(_img_sources(soup))
    discovered.extend(_srcset_sources(soup))

    images: List[str] = []
    seen = set()
    for src in discovered:
        url = resolve_url(src, base_url)
        if url is None or url in seen:
            continue
        seen.add(url)
        images.append(url)
        if len(images) >= limit:
            break
    return images
