"""
Модуль для загрузки и валидации конфигурации SitemapScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from sitemap_scout.crawler.fetcher import DEFAULT_TIMEOUT, USER_AGENTS


class ScraperConfig(BaseModel):
    """Конфигурация для одного запуска обхода sitemap."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    sitemap_url: HttpUrl = Field(..., description="URL корневого sitemap.xml (или sitemap index).")
    concurrency: int = Field(10, ge=1, description="Максимум одновременных запросов на этапе сбора страниц.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Таймаут на один запрос (секунд).")
    phase_timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут одной фазы обхода (секунд); None - без ограничения."
    )
    user_agents: List[str] = Field(
        default_factory=lambda: list(USER_AGENTS),
        min_length=1,
        description="Пул заголовков User-Agent, выбираемых случайно для каждого запроса.",
    )
    dedupe_pages: bool = Field(False, description="Удалять повторяющиеся URL страниц перед сбором.")

    @field_validator("user_agents")
    def _strip_user_agents(cls, v: List[str]) -> List[str]:
        agents = [ua.strip() for ua in v if ua and ua.strip()]
        if not agents:
            raise ValueError("user_agents must contain at least one non-empty value")
        return agents


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


def load_config(path: Union[str, Path, None]) -> ScraperConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScraperConfig.
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

    return ScraperConfig(**data)
