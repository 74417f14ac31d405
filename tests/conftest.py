# File: tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from keyscout.config import ScoutConfig
from keyscout.errors import PageFetchFailure
from keyscout.logger import init_logging


def html_page(text: str = "", links: Iterable[str] = (), *, padding: int = 0) -> str:
    """Build a small HTML page with *text* in the body and one anchor per link."""
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    filler = f"<!-- {'x' * padding} -->" if padding else ""
    return f"<html><head><title>t</title></head><body><p>{text}</p>{anchors}{filler}</body></html>"


class FakeFetcher:
    """Serves pages from a dict; unknown URLs fail like an unreachable page."""

    def __init__(self, pages: Dict[str, str], errors: Optional[Dict[str, Exception]] = None) -> None:
        self.pages = pages
        self.errors = errors or {}
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise PageFetchFailure(url, "not served")
        return self.pages[url]


class FakeBrowser:
    """Stands in for BrowserSession and tracks how many are open at once."""

    live = 0
    max_live = 0
    opened: List["FakeBrowser"] = []

    def __init__(self, config: ScoutConfig) -> None:
        self.config = config
        self.closed = False
        self.rendered: List[str] = []

    async def __aenter__(self) -> "FakeBrowser":
        FakeBrowser.live += 1
        FakeBrowser.max_live = max(FakeBrowser.max_live, FakeBrowser.live)
        FakeBrowser.opened.append(self)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        FakeBrowser.live -= 1
        self.closed = True

    async def render(self, url: str, timeout: float) -> str:
        self.rendered.append(url)
        return html_page("rendered", padding=600)


@pytest.fixture()
def fake_browser():
    FakeBrowser.live = 0
    FakeBrowser.max_live = 0
    FakeBrowser.opened = []
    return FakeBrowser


@pytest.fixture()
def make_config(tmp_path: Path):
    """Factory for a fast ScoutConfig writing under tmp_path."""

    def _make(**overrides) -> ScoutConfig:
        values = {
            "domains_file": tmp_path / "input.csv",
            "keywords_file": tmp_path / "keywords.json",
            "results_dir": tmp_path / "saved_google",
            "results_csv": tmp_path / "results.csv",
            "request_delay": 0,
            "http_timeout": 2.0,
            "render_timeout": 2.0,
            "search": {"api_key": "test-key", "save_raw": False},
        }
        values.update(overrides)
        return ScoutConfig(**values)

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner swaps stdout; rebuild the handlers so later tests log to the real stream."""
    yield
    init_logging(level="INFO")
