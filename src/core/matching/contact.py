# src/core/matching/contact.py
"""
Отправка запроса на контакт грузоотправителя с перевозчиком.
"""

from __future__ import annotations

from typing import Optional

from src.common.constants import ContactFailureReason, TypeMsg
from src.common.localization import get_text
from src.common.logger import log_info, log_warning
from src.core.matching.exceptions import (
    InvalidInputError,
    MatchingError,
    NotAuthenticatedError,
    ShipperNotFoundError,
    TripNotFoundError,
)
from src.core.matching.models import ContactRequest, ContactRequestResult
from src.core.matching.repository import MatchingDataAccess
from src.core.matching.session import SessionProvider

# Тексты ошибок для ответа пользователю
FAILURE_TEXT_KEYS: dict[ContactFailureReason, str] = {
    ContactFailureReason.NOT_AUTHENTICATED: "CONTACT_ERROR_NOT_AUTHENTICATED",
    ContactFailureReason.SHIPPER_NOT_FOUND: "CONTACT_ERROR_SHIPPER_NOT_FOUND",
    ContactFailureReason.TRIP_NOT_FOUND: "CONTACT_ERROR_TRIP_NOT_FOUND",
    ContactFailureReason.DATA_ACCESS_ERROR: "CONTACT_ERROR_DATA_ACCESS",
    ContactFailureReason.INVALID_INPUT: "CONTACT_ERROR_INVALID_INPUT",
}


class ContactService:
    """
    Создаёт запросы на контакт.

    Каждый вызов вставляет не больше одной записи; повторные вызовы
    создают новые записи, повторов при ошибках нет.
    """

    def __init__(self, data_access: MatchingDataAccess, session: SessionProvider) -> None:
        """
        Args:
            data_access: Граница доступа к данным
            session: Источник текущего пользователя
        """
        self._data = data_access
        self._session = session

    async def send_contact_request(
        self,
        shipment_id: str,
        trip_id: str,
        message: str = "",
        lang: Optional[str] = None,
    ) -> ContactRequestResult:
        """
        Отправляет запрос на контакт перевозчику рейса.

        Args:
            shipment_id: ID груза
            trip_id: ID рейса
            message: Сообщение перевозчику
            lang: Язык текста ошибки

        Returns:
            Результат с созданной записью или причиной отказа
        """
        try:
            request = await self._create(shipment_id, trip_id, message)
        except MatchingError as e:
            await log_warning(f"Запрос на контакт по рейсу {trip_id} не отправлен: {e.reason.value} ({e})")
            return ContactRequestResult.fail(e.reason, get_text(FAILURE_TEXT_KEYS[e.reason], lang))

        await log_info(
            f"Запрос на контакт {request.id} создан: грузоотправитель {request.shipper_id} → перевозчик {request.carrier_id}",
            type_msg=TypeMsg.INFO,
        )
        return ContactRequestResult.ok(request)

    async def _create(self, shipment_id: str, trip_id: str, message: str) -> ContactRequest:
        """
        Проверки по порядку: пользователь, входные данные,
        грузоотправитель, рейс; затем вставка.

        Raises:
            MatchingError: Любая из причин отказа
        """
        user_id = self._session.get_current_user()
        if not user_id:
            raise NotAuthenticatedError("Пользователь не авторизован")

        shipment_id = (shipment_id or "").strip()
        trip_id = (trip_id or "").strip()
        if not shipment_id or not trip_id:
            raise InvalidInputError("Не указан ID груза или рейса")

        shipper_id = await self._data.get_shipper_id_by_user(user_id)
        if shipper_id is None:
            raise ShipperNotFoundError(f"Грузоотправитель для пользователя {user_id} не найден")

        carrier_id = await self._data.get_trip_carrier_id(trip_id)
        if carrier_id is None:
            raise TripNotFoundError(f"Рейс {trip_id} не найден")

        return await self._data.insert_contact_request(
            ContactRequest(
                shipper_id=shipper_id,
                carrier_id=carrier_id,
                shipment_id=shipment_id,
                trip_id=trip_id,
                message=message or "",
            )
        )
