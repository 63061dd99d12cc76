# === FILE: rank_spider/config.py ===
"""
Модуль для загрузки и валидации конфигурации паука RankSpider.
Используется Pydantic для описания схемы и проверки данных.
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
    ValidationError,
    field_validator,
)


class SpiderConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: HttpUrl = Field(..., description="Стартовый URL обхода.")
    obey_robots: bool = Field(False, description="Соблюдать robots.txt и META robots.")
    output_dir: Optional[Path] = Field(None, description="Каталог для сохранения проиндексированных страниц.")
    max_count: int = Field(10000, ge=0, description="Максимальное число индексируемых страниц.")
    slow: bool = Field(False, description="Пауза перед загрузкой каждой страницы.")
    pause: float = Field(1.0, gt=0, description="Длительность паузы в медленном режиме (секунд).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("RankSpider/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(2, ge=0, description="Число повторных попыток при 429/5xx.")

    @field_validator("output_dir", mode="before")
    def _expand_output_dir(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser() if v else None
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


def read_config_data(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Читает YAML или JSON и возвращает сырые данные конфига без проверки.
    При отсутствии файла бросает FileNotFoundError.
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


def load_config(path: Union[str, Path, None], **overrides: Any) -> SpiderConfig:
    """
    Читает конфиг и возвращает проверенный объект SpiderConfig.
    Если path не указан и configs/default.yaml отсутствует, используются только overrides.
    Значения overrides, отличные от None, перекрывают значения из файла.
    """
    data = read_config_data(path) if path is not None or _DEFAULT_CFG.exists() else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return SpiderConfig(**data)


__all__ = ["SpiderConfig", "ValidationError", "load_config", "read_config_data"]
