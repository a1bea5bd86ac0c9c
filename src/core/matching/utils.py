# src/core/matching/utils.py
"""
Утилиты нормализации входных данных для матчинга.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any


# Ведущее число в строке, как у JavaScript parseFloat: "800kg" -> 800
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_number(value: Any) -> float:
    """
    Приводит значение веса/вместимости к float.

    Нечисловые, пустые и бесконечные значения дают 0.0, исключение
    не выбрасывается.

    Args:
        value: Число, строка или что угодно

    Returns:
        Конечное число или 0.0
    """
    if isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float, Decimal)):
        result = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return 0.0
        result = float(match.group())
    else:
        return 0.0

    return result if math.isfinite(result) else 0.0


def is_clean_number(value: Any) -> bool:
    """True, если значение однозначно число и coerce_number ничего не теряет."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return math.isfinite(float(value))
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def coerce_date(value: Any) -> date | None:
    """
    Приводит значение к календарной дате.

    Принимает date, datetime и ISO-строки ("2024-06-10",
    "2024-06-10T08:00:00"). Всё остальное даёт None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def normalize_location(value: Any) -> str:
    """Нижний регистр, без крайних пробелов, внутренние пробелы схлопнуты."""
    if value is None:
        return ""
    return " ".join(str(value).split()).lower()
