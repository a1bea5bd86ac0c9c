# src/core/matching/service.py
"""
Сервис поиска рейсов под груз.
Получает рейсы-кандидаты, оценивает каждый и ранжирует по убыванию оценки.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from src.common.constants import TripStatus, TypeMsg
from src.common.logger import log_info
from src.core.matching.models import MatchResult, Shipment, Trip
from src.core.matching.reasons import get_match_reasons
from src.core.matching.repository import MatchingDataAccess
from src.core.matching.scoring import composite_score, score_breakdown


def build_match(shipment: Shipment, trip: Trip, lang: Optional[str] = None) -> MatchResult:
    """Оценка, частные оценки и причины для одной пары груз/рейс."""
    breakdown = score_breakdown(shipment, trip)
    return MatchResult(
        trip=trip,
        score=composite_score(breakdown),
        reasons=get_match_reasons(shipment, trip, lang),
        breakdown=breakdown,
    )


def rank_matches(
    shipment: Shipment,
    trips: Iterable[Trip],
    min_score: Optional[float] = None,
    lang: Optional[str] = None,
) -> list[MatchResult]:
    """
    Оценивает и сортирует рейсы по убыванию оценки.

    Сортировка устойчивая: при равных оценках сохраняется порядок trips.

    Args:
        shipment: Груз
        trips: Рейсы-кандидаты
        min_score: Отбросить рейсы с оценкой ниже порога (None: оставить все)
        lang: Язык причин

    Returns:
        Отсортированный список результатов
    """
    matches = [build_match(shipment, trip, lang) for trip in trips]

    if min_score is not None:
        matches = [match for match in matches if match.score >= min_score]

    return sorted(matches, key=lambda match: match.score, reverse=True)


class MatchingService:
    """
    Сервис матчинга грузов с рейсами.

    Хранилище передаётся через конструктор; глобальное состояние не читается.
    """

    def __init__(
        self,
        data_access: MatchingDataAccess,
        timezone: str = "UTC",
        min_score: Optional[float] = None,
    ) -> None:
        """
        Args:
            data_access: Граница доступа к данным
            timezone: Часовой пояс, в котором определяется "сегодня"
            min_score: Порог оценки по умолчанию (None: без отсечения)
        """
        self._data = data_access
        self._tz = ZoneInfo(timezone)
        self._min_score = min_score

    def today(self) -> date:
        """Текущая календарная дата в часовом поясе сервиса."""
        return datetime.now(self._tz).date()

    async def fetch_candidate_trips(self, today: Optional[date] = None) -> list[Trip]:
        """
        Активные рейсы с датой не раньше сегодняшней.

        Args:
            today: Дата отсечения (по умолчанию сегодня)

        Raises:
            DataAccessError: Хранилище недоступно; повторов нет
        """
        cutoff = today or self.today()
        trips = await self._data.query_trips(TripStatus.ACTIVE, cutoff)

        # Хранилище может вернуть лишнее: фильтр повторяется в памяти
        return [trip for trip in trips if trip.is_candidate(cutoff)]

    async def find_matching_trips(
        self,
        shipment: Shipment,
        min_score: Optional[float] = None,
        lang: Optional[str] = None,
        today: Optional[date] = None,
    ) -> list[MatchResult]:
        """
        Полный цикл: кандидаты, оценка, ранжирование.

        Args:
            shipment: Груз
            min_score: Порог оценки (None: порог сервиса)
            lang: Язык причин
            today: Дата отсечения кандидатов

        Returns:
            Рейсы по убыванию оценки
        """
        trips = await self.fetch_candidate_trips(today)
        threshold = min_score if min_score is not None else self._min_score
        matches = rank_matches(shipment, trips, min_score=threshold, lang=lang)

        await log_info(
            f"Груз {shipment.id or '-'}: {len(trips)} кандидатов, {len(matches)} в выдаче",
            type_msg=TypeMsg.DEBUG,
        )

        return matches
