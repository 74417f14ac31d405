# File: keyscout/search.py
"""keyscout.search: site:-поиск по домену через внешний API и извлечение seed-URL."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, ValidationError

from keyscout.config import ScoutConfig
from keyscout.errors import SeedFetchFailure
from keyscout.logger import LOGGER_NAME

__all__ = ["OrganicResult", "SearchResponse", "SearchClient", "extract_seed_urls"]


class OrganicResult(BaseModel):
    """Один органический результат поиска; нужен только link."""
    model_config = ConfigDict(extra="ignore")

    link: Optional[str] = None


class SearchResponse(BaseModel):
    """
    Ответ поискового API.

    Разные версии API кладут результаты в ``organic_results`` или в
    ``organic_data``; предпочтение у первого поля, если оно присутствует.
    """
    model_config = ConfigDict(extra="ignore")

    organic_results: Optional[List[OrganicResult]] = None
    organic_data: Optional[List[OrganicResult]] = None

    def organic(self) -> List[OrganicResult]:
        if self.organic_results is not None:
            return self.organic_results
        if self.organic_data is not None:
            return self.organic_data
        return []

    def links(self) -> List[str]:
        return [r.link for r in self.organic() if r.link]


def extract_seed_urls(data: Dict[str, Any]) -> List[str]:
    """Извлекает URL органической выдачи из сырого JSON-ответа."""
    try:
        return SearchResponse.model_validate(data).links()
    except ValidationError:
        return []


class SearchClient:
    """Клиент поискового API: возвращает seed-URL для домена."""

    def __init__(self, session: ClientSession, config: ScoutConfig) -> None:
        self.session = session
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)

    def query_for(self, domain: str) -> str:
        return f"site:{domain} {self.config.search.query}"

    async def search(self, domain: str) -> Dict[str, Any]:
        """Выполняет запрос к API; при ошибке бросает SeedFetchFailure."""
        search_cfg = self.config.search
        query = self.query_for(domain)
        self.logger.info('🔍 Searching for: "%s"', query)
        try:
            async with self.session.get(
                str(search_cfg.endpoint),
                params={"api_key": search_cfg.api_key, "query": query},
                timeout=ClientTimeout(total=search_cfg.timeout),
                raise_for_status=True,
            ) as resp:
                data = await resp.json(content_type=None)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            # ValueError: невалидный JSON или не-UTF-8 тело ответа
            raise SeedFetchFailure(domain, str(exc) or type(exc).__name__) from exc
        if not isinstance(data, dict) or not data:
            raise SeedFetchFailure(domain, "empty response")
        if search_cfg.save_raw:
            self._save_raw(domain, data)
        return data

    def _save_raw(self, domain: str, data: Dict[str, Any]) -> Optional[Path]:
        path = Path(self.config.results_dir) / f"{domain}.json"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            self.logger.warning("Could not save search results to %s: %s", path, exc)
            return None
        self.logger.info("✅ Saved search results to: %s", path)
        return path

    async def seed_urls(self, domain: str) -> List[str]:
        data = await self.search(domain)
        urls = extract_seed_urls(data)
        if not urls:
            self.logger.warning("⚠️ No organic results found in search data for %s.", domain)
            raise SeedFetchFailure(domain, "no organic results")
        return urls
