# === FILE: site_harvest/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteHarvest.
Используется Pydantic для описания схемы и проверки данных.

Файл конфигурации (YAML или JSON) содержит общие настройки браузера и
вывода; значения из командной строки или HTTP-запроса накладываются поверх.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from site_harvest.errors import InvalidInput
from site_harvest.typed import WebsiteType

__all__ = [
    "BrowserOptions",
    "CrawlConfig",
    "ScrapeConfig",
    "DEFAULT_BROWSER_ARGS",
    "read_config_file",
    "load_config",
    "build_config",
]

WaitCondition = Literal["load", "domcontentloaded", "networkidle", "commit"]

DEFAULT_BROWSER_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
)


def _validate_http_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("URL обязателен")
    value = value.strip()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Ожидается http(s) URL, получено: {value!r}")
    return value


class BrowserOptions(BaseModel):
    """Настройки загрузчика страниц, общие для обхода и типизированного парсинга."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    fetcher: Literal["browser", "http"] = Field(
        "browser", description="browser: playwright/chromium; http: aiohttp без JS."
    )
    headless: bool = Field(True, description="Запуск браузера без окна.")
    browser_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BROWSER_ARGS),
        description="Аргументы командной строки chromium.",
    )
    user_data_dir: Optional[str] = Field(
        None, description="Каталог постоянного профиля браузера."
    )
    user_agent: Optional[str] = Field(
        None, min_length=1, description="Заголовок User-Agent (по умолчанию родной у браузера)."
    )
    output_dir: Path = Field(Path("."), description="Каталог для JSON-файлов результата.")


class CrawlConfig(BrowserOptions):
    """Конфигурация одного обхода сайта."""

    seed_url: str = Field(..., description="Стартовый URL; он же префикс области обхода.")
    time_limit: int = Field(..., gt=0, description="Бюджет всего обхода (секунд).")
    page_timeout: float = Field(60.0, gt=0, description="Таймаут загрузки одной страницы (секунд).")
    wait_until: List[WaitCondition] = Field(
        default_factory=lambda: ["domcontentloaded", "networkidle"],
        min_length=1,
        description="События загрузки, которых ждём после перехода.",
    )
    wait_for_selector: Optional[str] = Field(
        "body", description="Селектор, появления которого ждём после загрузки."
    )
    filter_all: bool = Field(
        False, description="Фильтровать все страницы, а не только первую."
    )

    @field_validator("seed_url", mode="before")
    def _check_seed_url(cls, v: Any) -> str:
        return _validate_http_url(v)


class ScrapeConfig(BrowserOptions):
    """Конфигурация типизированного парсинга (news / ecommerce / weather)."""

    url: str = Field(..., description="Страница-источник ссылок.")
    website_type: WebsiteType = Field(..., description="Тип сайта.")
    time_limit: int = Field(..., gt=0, description="Таймаут загрузки стартовой страницы (секунд).")
    limit: int = Field(100, ge=1, description="Сколько ссылок обработать.")
    offset: int = Field(0, ge=0, description="Сколько ссылок пропустить.")
    item_timeout: float = Field(30.0, gt=0, description="Таймаут загрузки одной записи (секунд).")

    @field_validator("url", mode="before")
    def _check_url(cls, v: Any) -> str:
        return _validate_http_url(v)

    @field_validator("website_type", mode="before")
    def _lower_website_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")

_ModelT = TypeVar("_ModelT", bound=BaseModel)


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


def read_config_file(path: Union[str, Path, None]) -> Dict[str, Any]:
    """
    Читает YAML или JSON и возвращает сырой словарь настроек.
    Без пути читается configs/default.yaml; при его отсутствии FileNotFoundError.
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
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def build_config(model: Type[_ModelT], settings: Dict[str, Any], **overrides: Any) -> _ModelT:
    """
    Собирает модель из настроек файла и явных значений.

    Из файла берутся только поля, известные модели (один файл обслуживает
    и обход, и типизированный парсинг); явные значения ``None`` пропускаются.
    Ошибки валидации превращаются в :class:`InvalidInput`.
    """
    data = {k: v for k, v in settings.items() if k in model.model_fields}
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return model(**data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidInput(details) from exc


def load_config(path: Union[str, Path, None]) -> CrawlConfig:
    """Читает файл и возвращает проверенный :class:`CrawlConfig`."""
    data = read_config_file(path)
    return CrawlConfig(**data)
