# src/core/matching/models.py
"""
Модели данных матчинга: грузы, рейсы, результаты и запросы на контакт.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.common.constants import ContactFailureReason, ContactRequestStatus, TripStatus, VehicleType
from src.common.logger import get_logger
from src.core.matching.utils import coerce_date, coerce_number, is_clean_number

logger = get_logger("matching")


def _coerce_numeric_field(value: Any, field_name: str) -> float:
    """Приводит вес/вместимость к числу и предупреждает о мусорных данных."""
    if value not in (None, "") and not is_clean_number(value):
        logger.warning(f"Некорректное значение {field_name}={value!r}, используется {coerce_number(value)}")
    return coerce_number(value)


def _coerce_date_field(value: Any, field_name: str) -> Optional[date]:
    result = coerce_date(value)
    if result is None and value not in (None, ""):
        logger.warning(f"Некорректная дата {field_name}={value!r}, поле проигнорировано")
    return result


def _coerce_vehicle(value: Any) -> Any:
    if value is None or value == "":
        return VehicleType.ANY
    if isinstance(value, str):
        return value.strip().lower()
    return value


class CarrierInfo(BaseModel):
    """Краткие данные перевозчика, присоединённые к рейсу."""

    id: str = Field(..., description="ID перевозчика")
    user_id: Optional[str] = Field(None, description="ID пользователя перевозчика")
    vehicle_type: VehicleType = Field(VehicleType.ANY, description="Тип транспорта")
    rating: Optional[float] = Field(None, ge=0.0, le=5.0, description="Рейтинг")


class Shipment(BaseModel):
    """Груз, который грузоотправитель хочет перевезти."""

    id: Optional[str] = Field(None, description="ID груза")
    shipper_id: Optional[str] = Field(None, description="ID грузоотправителя")

    pickup_location: Optional[str] = Field(None, description="Место погрузки")
    delivery_location: Optional[str] = Field(None, description="Место доставки")

    weight: float = Field(0.0, description="Вес, кг")
    preferred_date: Optional[date] = Field(None, description="Желаемая дата")
    vehicle_type_preferred: VehicleType = Field(VehicleType.ANY, description="Желаемый тип транспорта")

    class Config:
        from_attributes = True

    @field_validator("weight", mode="before")
    @classmethod
    def parse_weight(cls, v: Any) -> float:
        return _coerce_numeric_field(v, "weight")

    @field_validator("preferred_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Optional[date]:
        return _coerce_date_field(v, "preferred_date")

    @field_validator("vehicle_type_preferred", mode="before")
    @classmethod
    def parse_vehicle(cls, v: Any) -> Any:
        return _coerce_vehicle(v)


class Trip(BaseModel):
    """Рейс перевозчика со свободной вместимостью."""

    id: str = Field(..., description="ID рейса")
    carrier_id: Optional[str] = Field(None, description="ID перевозчика")

    origin: Optional[str] = Field(None, description="Пункт отправления")
    destination: Optional[str] = Field(None, description="Пункт назначения")

    capacity: float = Field(0.0, description="Свободная вместимость, кг")
    travel_date: Optional[date] = Field(None, description="Дата рейса")
    vehicle_type: VehicleType = Field(VehicleType.ANY, description="Тип транспорта")
    status: TripStatus = Field(TripStatus.ACTIVE, description="Статус рейса")

    carrier: Optional[CarrierInfo] = Field(None, description="Данные перевозчика")

    class Config:
        from_attributes = True

    @field_validator("capacity", mode="before")
    @classmethod
    def parse_capacity(cls, v: Any) -> float:
        return _coerce_numeric_field(v, "capacity")

    @field_validator("travel_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Optional[date]:
        return _coerce_date_field(v, "travel_date")

    @field_validator("vehicle_type", mode="before")
    @classmethod
    def parse_vehicle(cls, v: Any) -> Any:
        return _coerce_vehicle(v)

    def is_candidate(self, today: date) -> bool:
        """Активен и не в прошлом относительно today."""
        return (
            self.status == TripStatus.ACTIVE
            and self.travel_date is not None
            and self.travel_date >= today
        )


class ScoreBreakdown(BaseModel):
    """Частные оценки совпадения, каждая в [0, 1]."""

    location: float = Field(..., ge=0.0, le=1.0)
    capacity: float = Field(..., ge=0.0, le=1.0)
    date: float = Field(..., ge=0.0, le=1.0)
    vehicle: float = Field(..., ge=0.0, le=1.0)


class MatchResult(BaseModel):
    """Рейс-кандидат с итоговой оценкой и причинами. Не сохраняется в БД."""

    trip: Trip
    score: float = Field(..., ge=0.0, le=100.0, description="Итоговая оценка 0-100")
    reasons: list[str] = Field(default_factory=list, description="Причины для отображения")
    breakdown: ScoreBreakdown


class ContactRequest(BaseModel):
    """Запрос грузоотправителя на связь с перевозчиком."""

    id: Optional[str] = Field(None, description="ID запроса (назначает БД)")
    shipper_id: str
    carrier_id: str
    shipment_id: str
    trip_id: str
    message: str = ""
    status: ContactRequestStatus = ContactRequestStatus.PENDING
    created_at: Optional[datetime] = Field(None, description="Время создания (назначает БД)")


class ContactRequestCreateDTO(BaseModel):
    """DTO для отправки запроса на контакт."""

    shipment_id: str
    trip_id: str
    message: str = ""


class ContactRequestResult(BaseModel):
    """Результат отправки запроса на контакт."""

    success: bool
    request: Optional[ContactRequest] = None
    error: Optional[ContactFailureReason] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, request: ContactRequest) -> "ContactRequestResult":
        return cls(success=True, request=request)

    @classmethod
    def fail(cls, reason: ContactFailureReason, detail: str | None = None) -> "ContactRequestResult":
        return cls(success=False, error=reason, detail=detail)
