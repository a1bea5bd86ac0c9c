# src/core/matching/reasons.py
"""
Причины совпадения для отображения пользователю.

Считаются заново из исходных величин (сходство мест, заполнение,
разница дат, типы транспорта), а не из итоговой оценки.
"""

from __future__ import annotations

from typing import Optional

from src.common.constants import VehicleType
from src.common.localization import get_text
from src.core.matching.models import Shipment, Trip
from src.core.matching.scoring import (
    capacity_utilization,
    date_difference_days,
    delivery_similarity,
    pickup_similarity,
)

LOCATION_REASON_THRESHOLD = 0.8
CLOSE_DATE_MAX_DAYS = 3


def get_match_reasons(shipment: Shipment, trip: Trip, lang: Optional[str] = None) -> list[str]:
    """
    Формирует список причин в фиксированном порядке:
    погрузка, доставка, вместимость, дата, тип транспорта.

    Args:
        shipment: Груз
        trip: Рейс
        lang: Язык текстов (None: язык по умолчанию)

    Returns:
        Список строк; может быть пустым
    """
    reasons: list[str] = []

    if pickup_similarity(shipment, trip) >= LOCATION_REASON_THRESHOLD:
        reasons.append(get_text("MATCH_REASON_PICKUP", lang))
    if delivery_similarity(shipment, trip) >= LOCATION_REASON_THRESHOLD:
        reasons.append(get_text("MATCH_REASON_DELIVERY", lang))

    utilization = capacity_utilization(shipment, trip)
    if utilization is not None:
        if 0.7 <= utilization <= 0.9:
            reasons.append(get_text("MATCH_REASON_CAPACITY_PERFECT", lang))
        elif 0.5 <= utilization <= 1.0:
            reasons.append(get_text("MATCH_REASON_CAPACITY_GOOD", lang))

    diff = date_difference_days(shipment, trip)
    if diff == 0:
        reasons.append(get_text("MATCH_REASON_DATE_EXACT", lang))
    elif diff is not None and diff <= CLOSE_DATE_MAX_DAYS:
        reasons.append(get_text("MATCH_REASON_DATE_CLOSE", lang, days=diff))

    wanted = shipment.vehicle_type_preferred or VehicleType.ANY
    offered = trip.vehicle_type or VehicleType.ANY
    if wanted != VehicleType.ANY and wanted == offered:
        reasons.append(get_text("MATCH_REASON_VEHICLE", lang))

    return reasons
