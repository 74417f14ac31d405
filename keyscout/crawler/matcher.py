# keyscout/crawler/matcher.py
"""
Keyword matching on page text.
"""
from __future__ import annotations

from typing import Iterable, List

from bs4 import BeautifulSoup


def page_text(html: str) -> str:
    """Return the text of the page ``<body>``, or of the whole document if it has none."""
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    return root.get_text(" ")


def unique_keywords(keywords: Iterable[str]) -> List[str]:
    """
    Drop blank keywords and case-insensitive duplicates.

    The first spelling of each keyword wins.
    """
    seen = set()
    unique: List[str] = []
    for keyword in keywords:
        key = keyword.strip().casefold()
        if key and key not in seen:
            seen.add(key)
            unique.append(keyword)
    return unique


def match_keywords(text: str, wanted: Iterable[str]) -> List[str]:
    """
    Case-insensitive substring search of each wanted keyword in *text*.

    Returns the keywords that occur, in the order they were given.
    """
    if not text:
        return []
    haystack = text.lower()
    found: List[str] = []
    for keyword in wanted:
        if keyword and keyword not in found and keyword.lower() in haystack:
            found.append(keyword)
    return found


__all__ = ["page_text", "match_keywords", "unique_keywords"]
