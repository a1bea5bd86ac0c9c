# src/services/matching_service/dependencies.py
"""
Зависимости для Matching Service.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from src.common.constants import TypeMsg
from src.common.logger import log_info
from src.core.matching.contact import ContactService
from src.core.matching.repository import MatchingDataAccess, MatchingRepository
from src.core.matching.service import MatchingService
from src.core.matching.session import StaticSession
from src.infra.database import DatabaseManager, close_db, init_db


_db: Optional[DatabaseManager] = None
_repository: Optional[MatchingRepository] = None


async def init_dependencies() -> None:
    """Подключает PostgreSQL и создаёт репозиторий."""
    global _db, _repository

    _db = DatabaseManager.from_settings()
    await init_db(_db)
    _repository = MatchingRepository(_db)

    await log_info("Matching Service: зависимости инициализированы", type_msg=TypeMsg.INFO)


async def close_dependencies() -> None:
    """Закрывает пул соединений."""
    global _db, _repository

    if _db is not None:
        await close_db(_db)
    _db = None
    _repository = None


def get_db() -> DatabaseManager:
    if _db is None:
        raise RuntimeError("DatabaseManager не инициализирован")
    return _db


def get_data_access() -> MatchingDataAccess:
    if _repository is None:
        raise RuntimeError("MatchingRepository не инициализирован")
    return _repository


def get_matching_service(data_access: MatchingDataAccess = Depends(get_data_access)) -> MatchingService:
    """Сервис матчинга с часовым поясом и порогом из конфигурации."""
    from src.config import settings

    return MatchingService(
        data_access,
        timezone=settings.domain.TIMEZONE,
        min_score=settings.matching.MIN_MATCH_SCORE or None,
    )


def get_session(x_user_id: Optional[str] = Header(default=None)) -> StaticSession:
    """Текущий пользователь из заголовка X-User-Id (проставляет шлюз авторизации)."""
    return StaticSession(x_user_id)


def get_contact_service(
    data_access: MatchingDataAccess = Depends(get_data_access),
    session: StaticSession = Depends(get_session),
) -> ContactService:
    return ContactService(data_access, session)
