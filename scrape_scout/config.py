"""
Модуль для загрузки и валидации конфигурации ScrapeScout.
Используется Pydantic для описания схемы и проверки данных.

The resulting :class:`ScraperConfig` is frozen: it is built once (file values
overlaid with CLI overrides) and handed by reference to the crawler and the
extraction pipeline.
"""
from __future__ import annotations

import json
import os
import errno
from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, Literal, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from scrape_scout.utils import parse_domain_list

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass(frozen=True, slots=True)
class DomainFilterConfig:
    """Allow/block lists and the cross-domain switch, fixed for one run."""

    allow_domains: FrozenSet[str] = frozenset()
    block_domains: FrozenSet[str] = frozenset()
    cross_domain: bool = False


class ScraperConfig(BaseModel):
    """Конфигурация для одного запуска."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    output_format: Literal["json", "csv", "text", "txt"] = Field(
        "json", description="Формат вывода: json, csv или text."
    )
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    proxy: Optional[str] = Field(None, description="URL прокси, например http://proxy:8080.")
    selectors: Tuple[str, ...] = Field((), description="Пользовательские CSS-селекторы.")
    delay_ms: int = Field(1000, ge=0, description="Пауза между запросами (мс).")
    crawl: bool = Field(False, description="Следовать по ссылкам.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages: int = Field(10, ge=1, description="Жесткий лимит по числу страниц.")
    allow_domains: FrozenSet[str] = Field(
        default_factory=frozenset, description="Разрешённые домены (CSV или список)."
    )
    block_domains: FrozenSet[str] = Field(
        default_factory=frozenset, description="Запрещённые домены (CSV или список)."
    )
    cross_domain: bool = Field(False, description="Разрешить переход на любые домены.")
    metadata: bool = Field(False, description="Извлекать meta/Open Graph.")

    @field_validator("allow_domains", "block_domains", mode="before")
    def _parse_domains(cls, v: Any) -> Any:
        if v is None or isinstance(v, (str, list, tuple, set, frozenset)):
            return parse_domain_list(v)
        return v

    @field_validator("selectors", mode="before")
    def _single_selector(cls, v: Any) -> Any:
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("proxy", mode="before")
    def _blank_proxy(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    @property
    def domain_filter(self) -> DomainFilterConfig:
        return DomainFilterConfig(
            allow_domains=self.allow_domains,
            block_domains=self.block_domains,
            cross_domain=self.cross_domain,
        )


_DEFAULT_CFG = Path("scrape_scout.yaml")


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


def read_config_file(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Читает YAML или JSON и возвращает «сырой» словарь настроек.
    Без пути используется ./scrape_scout.yaml, если он есть, иначе {}.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return {}
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ScraperConfig:
    """
    Возвращает проверенный ScraperConfig: значения из файла, поверх них overrides.
    Ключи overrides со значением None игнорируются (опция CLI не задана).
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ScraperConfig(**data)
