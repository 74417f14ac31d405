# keyscout/crawler/link_extractor.py
"""
Link extraction for KeyScout: same-domain absolute URLs from anchor elements.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from keyscout.errors import LinkParseFailure
from keyscout.logger import logger


def host_in_domain(host: Optional[str], domain: str) -> bool:
    """True when *host* is *domain* itself or one of its subdomains."""
    if not host:
        return False
    host = host.lower().rstrip(".")
    domain = domain.lower().rstrip(".")
    return host == domain or host.endswith("." + domain)


def resolve_href(href: str, base_url: str) -> str:
    """
    Resolve *href* against *base_url*.

    Raises LinkParseFailure when the result is not a usable URL.
    """
    try:
        absolute = urljoin(base_url, href)
        urlsplit(absolute).port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise LinkParseFailure(href, str(exc)) from exc
    return absolute


def extract_links(content: str, base_url: str, domain: str) -> List[str]:
    """
    Extract absolute URLs on *domain* (or its subdomains) from anchor hrefs.

    Query strings, fragments and trailing slashes are kept as-is, so
    ``/a?x=1`` and ``/a?x=2`` are two different links. The result keeps
    document order with duplicates removed.
    """
    soup = BeautifulSoup(content, "html.parser")
    links: dict[str, None] = {}
    discarded = 0
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str) or not href_val.strip():
            continue
        try:
            absolute = resolve_href(href_val.strip(), base_url)
        except LinkParseFailure as exc:
            discarded += 1
            logger.debug("Discarded link on %s: %s", base_url, exc)
            continue
        if host_in_domain(urlsplit(absolute).hostname, domain):
            links.setdefault(absolute, None)
    if discarded:
        logger.debug("Discarded %d malformed links on %s", discarded, base_url)
    return list(links)


__all__ = ["extract_links", "host_in_domain", "resolve_href"]
