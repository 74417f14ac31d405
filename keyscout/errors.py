# keyscout/errors.py
"""
Failure taxonomy for KeyScout.

Only problems with the initial domain/keyword inputs are fatal to a run;
everything below is handled at the level named in each docstring.
"""
from __future__ import annotations


class KeyScoutError(Exception):
    """Base class for all KeyScout errors."""


class SeedFetchFailure(KeyScoutError):
    """Search API unreachable or returned no usable result; the domain is skipped."""

    def __init__(self, domain: str, reason: str) -> None:
        super().__init__(f"no seed URLs for {domain}: {reason}")
        self.domain = domain
        self.reason = reason


class PageFetchFailure(KeyScoutError):
    """Both the HTTP fetch and the browser render failed; the URL is skipped."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"could not fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class LinkParseFailure(KeyScoutError):
    """An href could not be resolved to an absolute URL; the link is discarded."""

    def __init__(self, href: str, reason: str) -> None:
        super().__init__(f"malformed link {href!r}: {reason}")
        self.href = href
        self.reason = reason


class DomainProcessingError(KeyScoutError):
    """Unexpected failure mid-domain; the crawl for that domain is aborted."""

    def __init__(self, domain: str, cause: BaseException) -> None:
        super().__init__(f"crawl of {domain} aborted: {cause}")
        self.domain = domain
        self.cause = cause


__all__ = [
    "KeyScoutError",
    "SeedFetchFailure",
    "PageFetchFailure",
    "LinkParseFailure",
    "DomainProcessingError",
]
