# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")

from src.core.matching.models import ContactRequest, Shipment, Trip


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "_comment_system": "тестовая конфигурация",
        "PROJECT_NAME": "fastship_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "MATCHING_SERVICE_PORT": 9000,
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "json",
        "LOG_TO_FILE": False,
        "DEFAULT_LANGUAGE": "en",
        "SUPPORTED_LANGUAGES": ["ar", "en"],
        "TIMEZONE": "Asia/Riyadh",
        "DB_HOST": "db.test",
        "DB_PORT": 5433,
        "DB_NAME": "fastship_test",
        "DB_USER": "tester",
        "DB_COMMAND_TIMEOUT": 5,
        "MIN_MATCH_SCORE": 25.0,
    }


@pytest.fixture
def mock_lang_dict() -> dict[str, dict[str, str]]:
    """Мок словаря локализации для тестов."""
    return {
        "GREETING": {
            "ar": "مرحبا {name}",
            "en": "Hello, {name}!",
        },
        "ONLY_ARABIC": {
            "ar": "نص عربي",
        },
        "ONLY_RUSSIAN": {
            "ru": "Только русский",
        },
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2), encoding="utf-8")
    return config_file


@pytest.fixture
def temp_lang_dict_file(tmp_path: Path, mock_lang_dict: dict[str, dict[str, str]]) -> Path:
    """Создаёт временный файл локализации."""
    lang_file = tmp_path / "lang_dict.json"
    lang_file.write_text(json.dumps(mock_lang_dict, ensure_ascii=False, indent=2), encoding="utf-8")
    return lang_file


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_db() -> AsyncMock:
    """Мок менеджера базы данных."""
    db = AsyncMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="INSERT 0 1")
    db.fetchval = AsyncMock(return_value=None)
    return db


@pytest.fixture
def mock_data_access() -> AsyncMock:
    """Мок границы доступа к данным матчинга."""
    data = AsyncMock()
    data.query_trips = AsyncMock(return_value=[])
    data.get_shipper_id_by_user = AsyncMock(return_value="shipper-1")
    data.get_trip_carrier_id = AsyncMock(return_value="carrier-1")
    data.get_shipment = AsyncMock(return_value=None)

    async def insert(request: ContactRequest) -> ContactRequest:
        return request.model_copy(
            update={"id": "request-1", "created_at": datetime(2024, 6, 1, tzinfo=timezone.utc)}
        )

    data.insert_contact_request = AsyncMock(side_effect=insert)
    return data


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def sample_shipment() -> Shipment:
    """Груз Эр-Рияд → Джидда, 800 кг, грузовик, 2024-06-10."""
    return Shipment(
        id="shipment-1",
        shipper_id="shipper-1",
        pickup_location="الرياض",
        delivery_location="جدة",
        weight=800,
        preferred_date="2024-06-10",
        vehicle_type_preferred="truck",
    )


@pytest.fixture
def make_trip() -> Callable[..., Trip]:
    """Фабрика рейсов: по умолчанию идеально подходит к sample_shipment."""
    def _make(**overrides: Any) -> Trip:
        data: dict[str, Any] = {
            "id": "trip-1",
            "carrier_id": "carrier-1",
            "origin": "الرياض",
            "destination": "جدة",
            "capacity": 1000,
            "travel_date": date(2024, 6, 10),
            "vehicle_type": "truck",
            "status": "active",
        }
        data.update(overrides)
        return Trip(**data)

    return _make
