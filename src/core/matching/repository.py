# src/core/matching/repository.py
"""
Репозиторий матчинга: доступ к рейсам, грузоотправителям и запросам на контакт.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Optional, Protocol
from uuid import UUID

import asyncpg
from pydantic import ValidationError

from src.common.constants import TripStatus, TypeMsg, VehicleType
from src.common.logger import log_error, log_info, log_warning
from src.core.matching.exceptions import DataAccessError, InvalidInputError
from src.core.matching.models import CarrierInfo, ContactRequest, Shipment, Trip
from src.infra.database import DatabaseManager

# Ошибки хранилища, которые превращаются в DataAccessError
STORAGE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)


class MatchingDataAccess(Protocol):
    """Граница доступа к данным, которую использует движок матчинга."""

    async def query_trips(self, status: TripStatus, from_date: date) -> list[Trip]: ...

    async def get_shipper_id_by_user(self, user_id: str) -> Optional[str]: ...

    async def get_trip_carrier_id(self, trip_id: str) -> Optional[str]: ...

    async def insert_contact_request(self, request: ContactRequest) -> ContactRequest: ...

    async def get_shipment(self, shipment_id: str) -> Optional[Shipment]: ...


def _as_uuid(value: Any) -> Optional[UUID]:
    """UUID из строки или None, если строка не похожа на UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def _str_or_none(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


class MatchingRepository:
    """PostgreSQL-реализация MatchingDataAccess."""

    def __init__(self, db: DatabaseManager) -> None:
        """
        Args:
            db: Менеджер базы данных (Dependency Injection)
        """
        self._db = db

    async def query_trips(self, status: TripStatus, from_date: date) -> list[Trip]:
        """
        Рейсы с заданным статусом и датой не раньше from_date.

        Строки, которые не проходят валидацию модели, пропускаются
        с предупреждением.

        Raises:
            DataAccessError: База недоступна или отклонила запрос
        """
        try:
            rows = await self._db.fetch(
                """
                SELECT t.id, t.carrier_id, t.origin, t.destination, t.capacity,
                       t.travel_date, t.vehicle_type, t.status,
                       c.user_id AS carrier_user_id,
                       c.vehicle_type AS carrier_vehicle_type,
                       c.rating AS carrier_rating
                FROM trips t
                LEFT JOIN carriers c ON c.id = t.carrier_id
                WHERE t.status = $1
                  AND t.travel_date >= $2
                ORDER BY t.travel_date, t.created_at
                """,
                status.value,
                from_date,
            )
        except STORAGE_ERRORS as e:
            await log_error(f"Ошибка получения рейсов: {e}")
            raise DataAccessError(f"Не удалось получить рейсы: {e}") from e

        trips: list[Trip] = []
        for row in rows:
            try:
                trips.append(self._row_to_trip(row))
            except ValidationError as e:
                await log_warning(f"Рейс {row['id']} пропущен, некорректные данные: {e}")

        await log_info(f"Получено рейсов-кандидатов: {len(trips)}", type_msg=TypeMsg.DEBUG)
        return trips

    async def get_shipper_id_by_user(self, user_id: str) -> Optional[str]:
        """
        ID грузоотправителя по ID пользователя.

        Raises:
            DataAccessError: База недоступна или отклонила запрос
        """
        try:
            shipper_id = await self._db.fetchval(
                "SELECT id FROM shippers WHERE user_id = $1",
                user_id,
            )
        except STORAGE_ERRORS as e:
            await log_error(f"Ошибка поиска грузоотправителя для пользователя {user_id}: {e}")
            raise DataAccessError(f"Не удалось получить грузоотправителя: {e}") from e

        return _str_or_none(shipper_id)

    async def get_trip_carrier_id(self, trip_id: str) -> Optional[str]:
        """
        ID перевозчика, которому принадлежит рейс.

        Returns:
            ID перевозчика или None, если рейса нет

        Raises:
            DataAccessError: База недоступна или отклонила запрос
        """
        trip_uuid = _as_uuid(trip_id)
        if trip_uuid is None:
            return None

        try:
            carrier_id = await self._db.fetchval(
                "SELECT carrier_id FROM trips WHERE id = $1",
                trip_uuid,
            )
        except STORAGE_ERRORS as e:
            await log_error(f"Ошибка получения перевозчика рейса {trip_id}: {e}")
            raise DataAccessError(f"Не удалось получить рейс: {e}") from e

        return _str_or_none(carrier_id)

    async def insert_contact_request(self, request: ContactRequest) -> ContactRequest:
        """
        Сохраняет запрос на контакт. ID и время создания назначает база.

        Raises:
            InvalidInputError: Один из ID не в формате UUID; база не запрашивается
            DataAccessError: База недоступна или отклонила запрос
        """
        ids = {
            "shipper_id": _as_uuid(request.shipper_id),
            "carrier_id": _as_uuid(request.carrier_id),
            "shipment_id": _as_uuid(request.shipment_id),
            "trip_id": _as_uuid(request.trip_id),
        }
        invalid = [name for name, value in ids.items() if value is None]
        if invalid:
            raise InvalidInputError(f"Некорректный формат ID: {', '.join(invalid)}")

        try:
            row = await self._db.fetchrow(
                """
                INSERT INTO contact_requests (
                    shipper_id, carrier_id, shipment_id, trip_id, message, status
                )
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING id, created_at
                """,
                ids["shipper_id"],
                ids["carrier_id"],
                ids["shipment_id"],
                ids["trip_id"],
                request.message,
                request.status.value,
            )
        except STORAGE_ERRORS as e:
            await log_error(f"Ошибка сохранения запроса на контакт по рейсу {request.trip_id}: {e}")
            raise DataAccessError(f"Не удалось сохранить запрос на контакт: {e}") from e

        if row is None:
            raise DataAccessError("База не вернула созданный запрос на контакт")

        return request.model_copy(update={"id": str(row["id"]), "created_at": row["created_at"]})

    async def get_shipment(self, shipment_id: str) -> Optional[Shipment]:
        """
        Груз по ID или None.

        Raises:
            InvalidInputError: Сохранённый груз не проходит валидацию модели
            DataAccessError: База недоступна или отклонила запрос
        """
        shipment_uuid = _as_uuid(shipment_id)
        if shipment_uuid is None:
            return None

        try:
            row = await self._db.fetchrow(
                """
                SELECT id, shipper_id, pickup_location, delivery_location,
                       weight, preferred_date, vehicle_type_preferred
                FROM shipments
                WHERE id = $1
                """,
                shipment_uuid,
            )
        except STORAGE_ERRORS as e:
            await log_error(f"Ошибка получения груза {shipment_id}: {e}")
            raise DataAccessError(f"Не удалось получить груз: {e}") from e

        if row is None:
            return None

        try:
            return Shipment(
                id=str(row["id"]),
                shipper_id=_str_or_none(row["shipper_id"]),
                pickup_location=row["pickup_location"],
                delivery_location=row["delivery_location"],
                weight=row["weight"],
                preferred_date=row["preferred_date"],
                vehicle_type_preferred=row["vehicle_type_preferred"],
            )
        except ValidationError as e:
            await log_warning(f"Груз {shipment_id} содержит некорректные данные: {e}")
            raise InvalidInputError(f"Груз {shipment_id} содержит некорректные данные") from e

    def _row_to_trip(self, row) -> Trip:
        """Конвертирует строку БД в модель Trip."""
        carrier = None
        if row["carrier_user_id"] is not None:
            carrier = CarrierInfo(
                id=str(row["carrier_id"]),
                user_id=_str_or_none(row["carrier_user_id"]),
                vehicle_type=row["carrier_vehicle_type"] or VehicleType.ANY,
                rating=float(row["carrier_rating"]) if row["carrier_rating"] is not None else None,
            )

        return Trip(
            id=str(row["id"]),
            carrier_id=_str_or_none(row["carrier_id"]),
            origin=row["origin"],
            destination=row["destination"],
            capacity=row["capacity"],
            travel_date=row["travel_date"],
            vehicle_type=row["vehicle_type"],
            status=row["status"],
            carrier=carrier,
        )
