# tests/core/test_matching_scoring.py
"""
Тесты для оценки совпадения груза и рейса.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.core.matching.models import Shipment, Trip
from src.core.matching.scoring import (
    calculate_match_score,
    capacity_score,
    date_score,
    location_score,
    location_similarity,
    score_breakdown,
    vehicle_score,
)


class TestLocationSimilarity:
    """Тесты для location_similarity."""

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            ("الرياض", "الرياض", 1.0),
            ("  Riyadh ", "riyadh", 1.0),
            ("Riyadh   Olaya", "riyadh olaya", 1.0),
            ("الرياض", "حي العليا الرياض", 0.8),
            ("الرياض - العليا", "حي الملز، الرياض", 0.9),
            ("حائل الشمالية", "تبوك", 0.6),
            ("الدمام", "الأحساء", 0.6),
            ("الرياض", "جدة", 0.2),
            ("Berlin", "Hamburg", 0.2),
        ],
    )
    def test_rule_cascade(self, first: str, second: str, expected: float) -> None:
        """Проверяет каждое правило каскада."""
        assert location_similarity(first, second) == expected

    @pytest.mark.parametrize("first, second", [("", "الرياض"), ("جدة", None), (None, None), ("   ", "جدة")])
    def test_missing_input(self, first, second) -> None:
        """Пустой адрес даёт 0."""
        assert location_similarity(first, second) == 0.0

    @pytest.mark.parametrize(
        "first, second",
        [
            ("الرياض", "حي العليا الرياض"),
            ("مكة المكرمة", "جدة"),
            ("حائل", "تبوك الجديدة"),
            ("Dammam", "Jeddah"),
            ("", "جدة"),
        ],
    )
    def test_symmetric(self, first: str, second: str) -> None:
        """Сходство симметрично."""
        assert location_similarity(first, second) == location_similarity(second, first)

    def test_location_score_is_average(self, sample_shipment: Shipment, make_trip) -> None:
        """L: среднее сходства погрузки и доставки."""
        trip = make_trip(destination="الدمام")

        assert location_score(sample_shipment, trip) == pytest.approx((1.0 + 0.2) / 2)


class TestCapacityScore:
    """Тесты для capacity_score."""

    @pytest.mark.parametrize(
        "weight, capacity, expected",
        [
            (800, 1000, 1.0),
            (700, 1000, 1.0),
            (900, 1000, 1.0),
            (950, 1000, 0.8),
            (1000, 1000, 0.8),
            (500, 1000, 0.8),
            (400, 1000, 0.6),
            (1100, 1000, 0.6),
            (1200, 1000, 0.6),
            (1300, 1000, 0.0),
            (800, 100, 0.0),
            (100, 1000, 0.4),
            (0, 1000, 0.4),
        ],
    )
    def test_bands(self, sample_shipment: Shipment, make_trip, weight, capacity, expected) -> None:
        """Пересекающиеся диапазоны проверяются по порядку."""
        shipment = sample_shipment.model_copy(update={"weight": weight})
        trip = make_trip(capacity=capacity)

        assert capacity_score(shipment, trip) == expected

    @pytest.mark.parametrize("capacity", [0, -50, "n/a", None])
    @pytest.mark.parametrize("weight", [0, 10, 800, 5000])
    def test_non_positive_capacity(self, sample_shipment: Shipment, make_trip, capacity, weight) -> None:
        """Вместимость <= 0 (в том числе мусорная) всегда даёт 0."""
        shipment = sample_shipment.model_copy(update={"weight": weight})
        trip = make_trip(capacity=capacity)

        assert capacity_score(shipment, trip) == 0.0

    def test_garbled_weight_scores_as_small_load(self, make_trip) -> None:
        """Нечисловой вес приводится к 0, а не вызывает ошибку."""
        shipment = Shipment(pickup_location="جدة", delivery_location="مكة", weight="heavy")

        assert shipment.weight == 0.0
        assert capacity_score(shipment, make_trip()) == 0.4


class TestDateScore:
    """Тесты для date_score."""

    @pytest.mark.parametrize(
        "days, expected",
        [(0, 1.0), (1, 0.9), (2, 0.7), (3, 0.7), (4, 0.5), (7, 0.5), (8, 0.3), (14, 0.3), (15, 0.0), (90, 0.0)],
    )
    def test_breakpoints(self, sample_shipment: Shipment, make_trip, days: int, expected: float) -> None:
        """Оценка по разнице в днях в обе стороны."""
        later = make_trip(travel_date=date(2024, 6, 10) + timedelta(days=days))
        earlier = make_trip(travel_date=date(2024, 6, 10) - timedelta(days=days))

        assert date_score(sample_shipment, later) == expected
        assert date_score(sample_shipment, earlier) == expected

    def test_monotonic_non_increasing(self, sample_shipment: Shipment, make_trip) -> None:
        """Оценка не растёт с ростом разницы."""
        scores = [
            date_score(sample_shipment, make_trip(travel_date=date(2024, 6, 10) + timedelta(days=d)))
            for d in range(0, 30)
        ]

        assert all(a >= b for a, b in zip(scores, scores[1:]))
        assert scores.count(1.0) == 1

    def test_missing_date(self, sample_shipment: Shipment, make_trip) -> None:
        """Нет даты: оценка 0."""
        shipment = sample_shipment.model_copy(update={"preferred_date": None})

        assert date_score(shipment, make_trip()) == 0.0


class TestVehicleScore:
    """Тесты для vehicle_score."""

    @pytest.mark.parametrize(
        "wanted, offered, expected",
        [
            ("truck", "truck", 1.0),
            ("any", "van", 1.0),
            ("pickup", "any", 1.0),
            ("pickup", "van", 0.7),
            ("van", "truck", 0.7),
            ("truck", "pickup", 0.7),
        ],
    )
    def test_compatibility(self, sample_shipment: Shipment, make_trip, wanted, offered, expected) -> None:
        """Совпадение, совместимость и any."""
        shipment = sample_shipment.model_copy(update={"vehicle_type_preferred": wanted})

        assert vehicle_score(shipment, make_trip(vehicle_type=offered)) == expected

    def test_missing_type_is_any(self, make_trip) -> None:
        """Не указанный тип считается any."""
        shipment = Shipment(pickup_location="جدة", delivery_location="مكة", vehicle_type_preferred=None)

        assert vehicle_score(shipment, make_trip(vehicle_type="van")) == 1.0


class TestCompositeScore:
    """Тесты для итоговой оценки."""

    def test_perfect_match_scores_100(self, sample_shipment: Shipment, make_trip) -> None:
        """Все частные оценки 1.0 дают 100."""
        trip = make_trip()
        breakdown = score_breakdown(sample_shipment, trip)

        assert breakdown.location == 1.0
        assert breakdown.capacity == 1.0
        assert breakdown.date == 1.0
        assert breakdown.vehicle == 1.0
        assert calculate_match_score(sample_shipment, trip) == 100.0

    def test_overloaded_trip_loses_capacity_weight(self, sample_shipment: Shipment, make_trip) -> None:
        """Загрузка 8.0 обнуляет вместимость: не больше 70."""
        score = calculate_match_score(sample_shipment, make_trip(capacity=100))

        assert score <= 70
        assert score == pytest.approx(70.0)

    def test_weighted_sum(self, sample_shipment: Shipment, make_trip) -> None:
        """40*L + 30*C + 20*D + 10*V."""
        trip = make_trip(
            destination="الدمام",
            capacity=2000,
            travel_date=date(2024, 6, 12),
            vehicle_type="van",
        )
        # L=(1.0+0.2)/2, C=0.6 (0.4), D=0.7, V=0.7
        expected = 40 * 0.6 + 30 * 0.6 + 20 * 0.7 + 10 * 0.7

        assert calculate_match_score(sample_shipment, trip) == pytest.approx(expected)

    def test_deterministic(self, sample_shipment: Shipment, make_trip) -> None:
        """Одинаковый вход, одинаковый результат."""
        trip = make_trip(origin="حي العليا الرياض", capacity=1300)

        results = {calculate_match_score(sample_shipment, trip) for _ in range(20)}

        assert len(results) == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"origin": "", "destination": None, "capacity": 0, "travel_date": None},
            {"capacity": "abc", "vehicle_type": "pickup"},
            {"capacity": 1, "travel_date": date(2030, 1, 1)},
        ],
    )
    def test_score_in_bounds(self, sample_shipment: Shipment, make_trip, overrides) -> None:
        """Оценка всегда в [0, 100]."""
        score = calculate_match_score(sample_shipment, make_trip(**overrides))

        assert 0.0 <= score <= 100.0

    def test_raw_unvalidated_values_do_not_raise(self, sample_shipment: Shipment) -> None:
        """Оценка не падает даже на объектах, собранных в обход валидации."""
        trip = Trip.model_construct(
            id="raw",
            origin="الرياض",
            destination="جدة",
            capacity="1000kg",
            travel_date="2024-06-10",
            vehicle_type=None,
        )

        assert calculate_match_score(sample_shipment, trip) == 100.0

    def test_unknown_raw_vehicle_type_scores_as_mismatch(self, sample_shipment: Shipment) -> None:
        """Неизвестный тип транспорта в обход валидации: 0.3, без исключения."""
        trip = Trip.model_construct(vehicle_type="Bicycle")

        assert vehicle_score(sample_shipment, trip) == 0.3
