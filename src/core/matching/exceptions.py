# src/core/matching/exceptions.py
"""
Исключения домена матчинга.

Каждое конкретное исключение несёт причину отказа (reason).
Базовые классы без причины создавать нельзя.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from src.common.constants import ContactFailureReason


class MatchingError(Exception):
    """Базовая ошибка матчинга."""

    reason: ClassVar[Optional[ContactFailureReason]] = None

    def __init__(self, *args: Any) -> None:
        if type(self).reason is None:
            raise TypeError(f"{type(self).__name__} не задаёт причину отказа, используйте подкласс")
        super().__init__(*args)


class NotAuthenticatedError(MatchingError):
    """Нет текущего пользователя в сессии."""

    reason = ContactFailureReason.NOT_AUTHENTICATED


class NotFoundError(MatchingError):
    """Запись не найдена. Причину задают подклассы."""


class ShipperNotFoundError(NotFoundError):
    """У пользователя нет профиля грузоотправителя."""

    reason = ContactFailureReason.SHIPPER_NOT_FOUND


class TripNotFoundError(NotFoundError):
    """Рейс не существует."""

    reason = ContactFailureReason.TRIP_NOT_FOUND


class DataAccessError(MatchingError):
    """Хранилище недоступно или отклонило запрос."""

    reason = ContactFailureReason.DATA_ACCESS_ERROR


class InvalidInputError(MatchingError):
    """Некорректные входные данные."""

    reason = ContactFailureReason.INVALID_INPUT
