# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class VehicleType(str, Enum):
    """Типы транспортных средств."""
    VAN = "van"
    PICKUP = "pickup"
    TRUCK = "truck"
    ANY = "any"

    def __str__(self) -> str:
        return self.value


class TripStatus(str, Enum):
    """Статусы рейса перевозчика."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


class ContactRequestStatus(str, Enum):
    """Статусы запроса на контакт."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def __str__(self) -> str:
        return self.value


class ContactFailureReason(str, Enum):
    """Причины неудачной отправки запроса на контакт."""
    NOT_AUTHENTICATED = "not_authenticated"
    SHIPPER_NOT_FOUND = "shipper_not_found"
    TRIP_NOT_FOUND = "trip_not_found"
    DATA_ACCESS_ERROR = "data_access_error"
    INVALID_INPUT = "invalid_input"

    def __str__(self) -> str:
        return self.value
