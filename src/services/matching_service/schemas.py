# src/services/matching_service/schemas.py
"""
Схемы запросов и ответов HTTP API матчинга.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.core.matching.models import MatchResult


class MatchListResponse(BaseModel):
    """Ранжированный список рейсов для груза."""

    shipment_id: str
    total: int
    matches: list[MatchResult]


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    error_code: str
    message: str
    details: dict[str, Any] | None = None


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded
    version: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
