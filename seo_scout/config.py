"""
Модуль для загрузки и валидации конфигурации SeoScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class CrawlerConfig(BaseModel):
    """Конфигурация одного пакетного запуска проверки сайтов."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    sites: List[str] = Field(default_factory=list, description="Стартовые URL сайтов, по порядку.")
    max_pages: int = Field(1000, ge=1, description="Жесткий лимит страниц на один сайт.")
    page_timeout: float = Field(10.0, gt=0, description="Таймаут загрузки страницы (секунд).")
    probe_timeout: float = Field(20.0, gt=0, description="Таймаут HEAD-проверки ресурса (секунд).")
    max_redirects: int = Field(5, ge=0, description="Макс. число редиректов при HEAD-проверке.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    excluded_path_keywords: List[str] = Field(
        default_factory=lambda: ["blog"],
        description="Подстроки пути, страницы с которыми не обходятся.",
    )
    bypass_markers: List[str] = Field(
        default_factory=lambda: ["npm/eruda"],
        description="Подстроки URL, которые считаются доступными без проверки.",
    )
    output_dir: Path = Field(Path("downloads"), description="Каталог для JSON-отчётов.")

    @field_validator("excluded_path_keywords", "bypass_markers")
    def _lowercase(cls, v: List[str]) -> List[str]:
        return [item.lower() for item in v if item]

    @field_validator("sites", mode="before")
    def _strip_sites(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [s.strip() if isinstance(s, str) else s for s in v]
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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    Явно указанный, но отсутствующий файл: FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
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

    return CrawlerConfig(**data)
