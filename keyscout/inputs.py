# File: keyscout/inputs.py
"""keyscout.inputs: чтение списка доменов и ключевых слов."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from keyscout.crawler.matcher import unique_keywords
from keyscout.logger import logger

__all__ = ["read_domains", "read_keywords", "resolve_path"]

_KEYWORDS = TypeAdapter(List[str])


def resolve_path(path: Union[str, Path]) -> Path:
    """Раскрывает `~`, проверяет существование и возвращает Path."""
    p = Path(path).expanduser()
    if not p.exists():
        logger.error("Path not found: %s", p)
        raise FileNotFoundError(f"Path not found: {p}")
    return p


def read_domains(path: Union[str, Path]) -> List[str]:
    """Читает домены по одному в строке, пропуская пустые строки."""
    p = resolve_path(path)
    domains = [line.strip() for line in p.read_text(encoding="utf-8").splitlines() if line.strip()]
    logger.debug("Loaded %d domains from %s", len(domains), p)
    return domains


def read_keywords(path: Union[str, Path]) -> List[str]:
    """Читает JSON-массив строк; дубликаты (без учёта регистра) и пустые строки отбрасываются."""
    p = resolve_path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {p}: {exc}") from exc
    try:
        keywords = _KEYWORDS.validate_python(raw)
    except ValidationError as exc:
        raise TypeError(f"{p} должен содержать JSON-массив строк") from exc
    unique = unique_keywords(keywords)
    logger.debug("Loaded %d keywords from %s", len(unique), p)
    return unique
