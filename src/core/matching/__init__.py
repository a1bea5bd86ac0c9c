# src/core/matching/__init__.py
"""
Домен матчинга грузов и рейсов.
Оценка, ранжирование и запросы на контакт.
"""

from src.core.matching.contact import ContactService
from src.core.matching.models import ContactRequest, ContactRequestResult, MatchResult, Shipment, Trip
from src.core.matching.repository import MatchingDataAccess, MatchingRepository
from src.core.matching.scoring import calculate_match_score
from src.core.matching.service import MatchingService, rank_matches

__all__ = [
    "ContactService",
    "ContactRequest",
    "ContactRequestResult",
    "MatchResult",
    "Shipment",
    "Trip",
    "MatchingDataAccess",
    "MatchingRepository",
    "calculate_match_score",
    "MatchingService",
    "rank_matches",
]
