# === FILE: keyscout/config.py ===
"""
Модуль для загрузки и валидации конфигурации KeyScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

API_KEY_ENV = "SCRAPINGDOG_API_KEY"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class SearchConfig(BaseModel):
    """Настройки внешнего поискового API (site:-поиск по домену)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint: HttpUrl = Field(
        "https://api.scrapingdog.com/google", description="URL поискового API."
    )
    api_key: str = Field("", description="Ключ API; пусто — берётся из окружения.")
    query: str = Field("vmware", min_length=1, description="Поисковый термин после site:<домен>.")
    timeout: float = Field(30.0, gt=0, description="Таймаут запроса к API (секунд).")
    save_raw: bool = Field(True, description="Сохранять сырой JSON-ответ в results_dir.")

    @model_validator(mode="before")
    @classmethod
    def _api_key_from_env(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("api_key"):
            env_key = os.environ.get(API_KEY_ENV)
            if env_key:
                return {**data, "api_key": env_key}
        return data


class ScoutConfig(BaseModel):
    """Конфигурация одного запуска поиска ключевых слов по доменам."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    domains_file: Path = Field(Path("input.csv"), description="Список доменов, по одному в строке.")
    keywords_file: Path = Field(Path("keywords.json"), description="JSON-массив ключевых слов.")
    results_dir: Path = Field(Path("saved_google"), description="Папка для ответов поискового API.")
    results_csv: Path = Field(Path("results.csv"), description="CSV с найденными ключевыми словами.")

    max_crawl_depth: int = Field(3, ge=1, description="Максимальная глубина обхода (seed = 1).")
    max_keywords_per_domain: int = Field(
        3, ge=1, description="Сколько разных ключевых слов достаточно найти на домене."
    )
    request_delay: float = Field(1.5, ge=0, description="Пауза между запросами (секунд).")
    http_timeout: float = Field(15.0, gt=0, description="Таймаут прямого HTTP-запроса (секунд).")
    render_timeout: float = Field(45.0, gt=0, description="Таймаут рендеринга в браузере (секунд).")
    min_content_length: int = Field(
        500, ge=0, description="Минимальная длина HTML, чтобы не считать ответ заглушкой."
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    headless: bool = Field(True, description="Запускать браузер без окна.")
    browser_args: List[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"],
        description="Аргументы запуска Chromium.",
    )

    search: SearchConfig = Field(default_factory=SearchConfig)

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScoutConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScoutConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return ScoutConfig(**data)
    except ValidationError:
        raise


__all__ = ["ScoutConfig", "SearchConfig", "load_config", "API_KEY_ENV", "DEFAULT_USER_AGENT"]
