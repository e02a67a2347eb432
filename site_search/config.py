# === FILE: site_search/config.py ===
"""
Загрузка и валидация конфигурации SiteSearch.
Схема описана моделью Pydantic, файл конфигурации в формате YAML или JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

__all__ = ["CrawlerConfig", "load_config", "DEFAULT_CONFIG_PATH"]


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска: обход, хранилище страниц и индекс."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="Стартовый URL и префикс области обхода.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода ссылок.")
    pages_dir: Path = Field(Path("pages"), description="Каталог для сохранённых страниц.")
    index_file: Path = Field(Path("index.json"), description="Файл JSON-индекса.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteSearchBot/1.0", min_length=1, description="Заголовок User-Agent.")
    max_concurrency: Optional[int] = Field(
        None, ge=1, description="Лимит одновременных загрузок (None: без ограничения)."
    )

    @field_validator("index_file")
    @classmethod
    def _index_is_json(cls, v: Path) -> Path:
        if not str(v).endswith("json"):
            raise ValueError(f"{v} does not end with json")
        return v

    @model_validator(mode="after")
    def _check_pages_dir_exists(self) -> CrawlerConfig:
        if not self.pages_dir.is_dir():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.pages_dir))
        return self

    @property
    def seed(self) -> str:
        """Seed URL as the plain string used for the in-scope prefix test."""
        return str(self.seed_url)

    def with_overrides(self, **changes: Any) -> CrawlerConfig:
        """Return a re-validated copy with the non-None *changes* applied."""
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        return CrawlerConfig(**data)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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
    Отсутствующий файл конфига или каталог страниц → FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CONFIG_PATH))
        path_obj = DEFAULT_CONFIG_PATH
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
