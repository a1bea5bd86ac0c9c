# src/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины: config/config.json.
Секреты и адреса хостов переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json(path: Path | None = None) -> dict[str, Any]:
    """
    Загружает config.json и возвращает словарь.
    Ключи, начинающиеся с _comment_, отбрасываются.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return {k: v for k, v in data.items() if not k.startswith("_comment_")}


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "fastship_matching"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"


class DeploymentSettings(BaseModel):
    """Настройки развертывания сервиса матчинга."""
    MATCHING_SERVICE_HOST: str = "0.0.0.0"
    MATCHING_SERVICE_PORT: int = 8092


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "DEBUG"
    LOG_FORMAT: str = "colored"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/matching.log"
    LOG_MAX_BYTES: int = 10485760

    @field_validator("LOG_FORMAT")
    @classmethod
    def check_format(cls, v: str) -> str:
        """Допустимы только json и colored."""
        if v not in ("json", "colored"):
            raise ValueError(f"Неизвестный формат логов: {v}")
        return v


class DomainSettings(BaseModel):
    """Настройки локализации и часового пояса."""
    DEFAULT_LANGUAGE: str = "ar"
    SUPPORTED_LANGUAGES: list[str] = Field(default_factory=lambda: ["ar", "en", "ru"])
    TIMEZONE: str = "Asia/Riyadh"


class DatabaseSettings(BaseModel):
    """Настройки PostgreSQL."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "fastship"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 2
    DB_MAX_POOL_SIZE: int = 10
    DB_COMMAND_TIMEOUT: int = 30
    DB_CONNECT_ATTEMPTS: int = 3
    DB_CONNECT_RETRY_DELAY: float = 1.0

    @property
    def dsn(self) -> str:
        """Возвращает DSN для подключения к PostgreSQL."""
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


class MatchingSettings(BaseModel):
    """Настройки ранжирования."""
    # Кандидаты с оценкой ниже порога отбрасываются; 0 оставляет всех
    MIN_MATCH_SCORE: float = Field(default=0.0, ge=0.0, le=100.0)


# Переменные окружения, которые перекрывают значения из config.json
ENV_OVERRIDES: tuple[str, ...] = (
    "ENVIRONMENT",
    "MATCHING_SERVICE_HOST",
    "MATCHING_SERVICE_PORT",
    "LOG_LEVEL",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
)

SectionT = TypeVar("SectionT", bound=BaseModel)


def build_section(model: type[SectionT], data: dict[str, Any]) -> SectionT:
    """
    Собирает секцию настроек из плоского словаря config.json.

    Берутся только поля, объявленные в модели; для ключей из
    ENV_OVERRIDES приоритет у переменных окружения.
    """
    values: dict[str, Any] = {}
    for name in model.model_fields:
        env_value = os.getenv(name) if name in ENV_OVERRIDES else None
        if env_value:
            values[name] = env_value
        elif name in data:
            values[name] = data[name]
    return model(**values)


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    system: SystemSettings = Field(default_factory=SystemSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    domain: DomainSettings = Field(default_factory=DomainSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def from_config_json(cls, path: Path | None = None) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Секреты переопределяются из переменных окружения.
        """
        data = load_config_json(path)
        return cls(
            system=build_section(SystemSettings, data),
            deployment=build_section(DeploymentSettings, data),
            logging=build_section(LoggingSettings, data),
            domain=build_section(DomainSettings, data),
            database=build_section(DatabaseSettings, data),
            matching=build_section(MatchingSettings, data),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Перед чтением конфигурации подгружает .env из корня проекта.
    """
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
