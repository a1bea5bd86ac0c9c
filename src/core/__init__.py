# src/core/__init__.py
"""
Доменный слой (Core Domain).
Чистая бизнес-логика, независимая от инфраструктуры.
"""

from src.core.matching import ContactService, MatchingService

__all__ = [
    "ContactService",
    "MatchingService",
]
