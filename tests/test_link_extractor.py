# File: tests/test_link_extractor.py
import pytest

from keyscout.crawler.link_extractor import extract_links, host_in_domain, resolve_href
from keyscout.errors import LinkParseFailure

BASE = "https://www.example.com/docs/index.html"


def test_relative_links_resolved_against_base():
    html = '<a href="page2.html">2</a><a href="/root">r</a><a href="../up">u</a>'
    assert extract_links(html, BASE, "example.com") == [
        "https://www.example.com/docs/page2.html",
        "https://www.example.com/root",
        "https://www.example.com/up",
    ]


def test_foreign_hosts_dropped():
    html = (
        '<a href="https://example.com/a">a</a>'
        '<a href="https://shop.example.com/b">b</a>'
        '<a href="https://badexample.com/c">c</a>'
        '<a href="https://example.com.evil.org/d">d</a>'
        '<a href="mailto:me@example.com">m</a>'
        '<a href="javascript:void(0)">j</a>'
    )
    assert extract_links(html, BASE, "example.com") == [
        "https://example.com/a",
        "https://shop.example.com/b",
    ]


def test_malformed_href_is_discarded_silently():
    html = '<a href="http://[::1">bad</a><a href="http://example.com:99999/">port</a><a href="/ok">ok</a>'
    assert extract_links(html, BASE, "example.com") == ["https://www.example.com/ok"]


def test_no_normalisation_and_duplicates_removed():
    html = (
        '<a href="/p">1</a><a href="/p/">2</a><a href="/p?x=1">3</a>'
        '<a href="/p#frag">4</a><a href="/p">again</a>'
    )
    assert extract_links(html, BASE, "example.com") == [
        "https://www.example.com/p",
        "https://www.example.com/p/",
        "https://www.example.com/p?x=1",
        "https://www.example.com/p#frag",
    ]


def test_anchors_without_href_ignored():
    assert extract_links("<a name='x'>x</a><a href=''>e</a><p>no links</p>", BASE, "example.com") == []


@pytest.mark.parametrize(
    "host,expected",
    [
        ("example.com", True),
        ("EXAMPLE.com", True),
        ("a.b.example.com", True),
        ("example.com.", True),
        ("myexample.com", False),
        ("example.org", False),
        (None, False),
        ("", False),
    ],
)
def test_host_in_domain(host, expected):
    assert host_in_domain(host, "example.com") is expected


def test_resolve_href_raises_on_bad_url():
    with pytest.raises(LinkParseFailure):
        resolve_href("http://[::1", BASE)
