# src/core/matching/scoring.py
"""
Оценка совпадения груза и рейса.

Итоговая оценка = 40*L + 30*C + 20*D + 10*V, где L, C, D, V в [0, 1]:
совпадение мест, вместимости, даты и типа транспорта.
Все функции чистые и детерминированные: часы не читаются.
"""

from __future__ import annotations

from typing import Optional

from src.common.constants import VehicleType
from src.core.matching.models import ScoreBreakdown, Shipment, Trip
from src.core.matching.utils import coerce_date, coerce_number, normalize_location


# =============================================================================
# ВЕСА И СПРАВОЧНИКИ
# =============================================================================

LOCATION_WEIGHT = 40
CAPACITY_WEIGHT = 30
DATE_WEIGHT = 20
VEHICLE_WEIGHT = 10

MAX_SCORE = 100.0

# Порядок важен: для строки берётся первый найденный город
KNOWN_CITIES: tuple[str, ...] = (
    "الرياض",
    "جدة",
    "مكة",
    "المدينة",
    "الدمام",
    "الخبر",
    "أبها",
    "تبوك",
    "حائل",
    "القصيم",
)

# Хаиль входит и в центр, и в север
REGIONS: dict[str, tuple[str, ...]] = {
    "وسط": ("الرياض", "القصيم", "حائل"),
    "غرب": ("مكة", "جدة", "المدينة"),
    "شرق": ("الدمام", "الخبر", "الأحساء"),
    "جنوب": ("أبها", "جازان", "نجران"),
    "شمال": ("تبوك", "الجوف", "حائل"),
}

COMPATIBLE_VEHICLES: dict[VehicleType, frozenset[VehicleType]] = {
    VehicleType.PICKUP: frozenset({VehicleType.VAN, VehicleType.TRUCK}),
    VehicleType.VAN: frozenset({VehicleType.PICKUP, VehicleType.TRUCK}),
    VehicleType.TRUCK: frozenset({VehicleType.VAN, VehicleType.PICKUP}),
}

# (нижняя граница, верхняя граница, оценка); проверяются по порядку,
# диапазоны пересекаются намеренно
CAPACITY_BANDS: tuple[tuple[float, float, float], ...] = (
    (0.7, 0.9, 1.0),
    (0.5, 1.0, 0.8),
    (0.3, 1.2, 0.6),
)
OVERLOAD_THRESHOLD = 1.2
SMALL_LOAD_SCORE = 0.4

# (максимальная разница в днях, оценка)
DATE_BANDS: tuple[tuple[int, float], ...] = (
    (0, 1.0),
    (1, 0.9),
    (3, 0.7),
    (7, 0.5),
    (14, 0.3),
)


# =============================================================================
# МЕСТОПОЛОЖЕНИЕ
# =============================================================================

def find_city(location: str) -> Optional[str]:
    """Первый город справочника, упомянутый в строке."""
    return next((city for city in KNOWN_CITIES if city in location), None)


def share_region(first: str, second: str) -> bool:
    """Упоминают ли обе строки города одного региона."""
    for cities in REGIONS.values():
        if any(city in first for city in cities) and any(city in second for city in cities):
            return True
    return False


def location_similarity(first: Optional[str], second: Optional[str]) -> float:
    """
    Эвристическое сходство двух адресов (без геокодирования).

    Правила проверяются по порядку, срабатывает первое:
    пусто 0.0, точное совпадение 1.0, одна строка содержит другую 0.8,
    один и тот же город 0.9, один регион 0.6, иначе 0.2.
    Функция симметрична.
    """
    a = normalize_location(first)
    b = normalize_location(second)

    if not a or not b:
        return 0.0

    if a == b:
        return 1.0

    if a in b or b in a:
        return 0.8

    city_a = find_city(a)
    if city_a is not None and city_a == find_city(b):
        return 0.9

    if share_region(a, b):
        return 0.6

    return 0.2


def pickup_similarity(shipment: Shipment, trip: Trip) -> float:
    return location_similarity(shipment.pickup_location, trip.origin)


def delivery_similarity(shipment: Shipment, trip: Trip) -> float:
    return location_similarity(shipment.delivery_location, trip.destination)


def location_score(shipment: Shipment, trip: Trip) -> float:
    """Среднее сходство пар погрузка/отправление и доставка/назначение."""
    return (pickup_similarity(shipment, trip) + delivery_similarity(shipment, trip)) / 2


# =============================================================================
# ВМЕСТИМОСТЬ
# =============================================================================

def capacity_utilization(shipment: Shipment, trip: Trip) -> Optional[float]:
    """
    Доля вместимости рейса, которую займёт груз.

    Returns:
        weight / capacity или None, если вместимость не положительна
    """
    capacity = coerce_number(trip.capacity)
    if capacity <= 0:
        return None
    return coerce_number(shipment.weight) / capacity


def capacity_score(shipment: Shipment, trip: Trip) -> float:
    """
    Оценка заполнения: идеал, когда груз занимает 70-90% вместимости.
    Перегруз больше 120% даёт 0.
    """
    utilization = capacity_utilization(shipment, trip)
    if utilization is None:
        return 0.0

    for low, high, score in CAPACITY_BANDS:
        if low <= utilization <= high:
            return score

    if utilization > OVERLOAD_THRESHOLD:
        return 0.0

    return SMALL_LOAD_SCORE


# =============================================================================
# ДАТА
# =============================================================================

def date_difference_days(shipment: Shipment, trip: Trip) -> Optional[int]:
    """Модуль разницы в календарных днях или None, если даты нет."""
    preferred = coerce_date(shipment.preferred_date)
    travel = coerce_date(trip.travel_date)
    if preferred is None or travel is None:
        return None
    return abs((preferred - travel).days)


def date_score(shipment: Shipment, trip: Trip) -> float:
    """Чем ближе дата рейса к желаемой, тем выше оценка; больше 14 дней дают 0."""
    diff = date_difference_days(shipment, trip)
    if diff is None:
        return 0.0

    for max_days, score in DATE_BANDS:
        if diff <= max_days:
            return score

    return 0.0


# =============================================================================
# ТИП ТРАНСПОРТА
# =============================================================================

def _vehicle(value: Optional[VehicleType | str]) -> VehicleType | str:
    """
    Приводит тип транспорта к VehicleType.
    Неизвестное значение возвращается строкой: такое возможно только
    у объектов, собранных через model_construct без валидации.
    """
    if not value:
        return VehicleType.ANY
    try:
        return VehicleType(str(value).strip().lower())
    except ValueError:
        return str(value).strip().lower()


def vehicle_score(shipment: Shipment, trip: Trip) -> float:
    """any или совпадение 1.0, совместимые типы 0.7, иначе 0.3."""
    wanted = _vehicle(shipment.vehicle_type_preferred)
    offered = _vehicle(trip.vehicle_type)

    if VehicleType.ANY in (wanted, offered) or wanted == offered:
        return 1.0

    if offered in COMPATIBLE_VEHICLES.get(wanted, frozenset()):
        return 0.7

    return 0.3


# =============================================================================
# ИТОГОВАЯ ОЦЕНКА
# =============================================================================

def score_breakdown(shipment: Shipment, trip: Trip) -> ScoreBreakdown:
    """Четыре частные оценки для пары груз/рейс."""
    return ScoreBreakdown(
        location=location_score(shipment, trip),
        capacity=capacity_score(shipment, trip),
        date=date_score(shipment, trip),
        vehicle=vehicle_score(shipment, trip),
    )


def composite_score(breakdown: ScoreBreakdown) -> float:
    """Взвешенная сумма частных оценок, ограниченная диапазоном [0, 100]."""
    total = (
        breakdown.location * LOCATION_WEIGHT
        + breakdown.capacity * CAPACITY_WEIGHT
        + breakdown.date * DATE_WEIGHT
        + breakdown.vehicle * VEHICLE_WEIGHT
    )
    return min(MAX_SCORE, max(0.0, total))


def calculate_match_score(shipment: Shipment, trip: Trip) -> float:
    """
    Итоговая оценка совпадения груза и рейса.

    Args:
        shipment: Груз
        trip: Рейс

    Returns:
        Оценка в диапазоне [0, 100]
    """
    return composite_score(score_breakdown(shipment, trip))
