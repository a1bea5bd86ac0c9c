# src/core/matching/session.py
"""
Граница сессии: кто текущий пользователь.
"""

from __future__ import annotations

from typing import Optional, Protocol


class SessionProvider(Protocol):
    """Источник текущего пользователя."""

    def get_current_user(self) -> Optional[str]:
        """ID текущего пользователя или None, если вход не выполнен."""
        ...


class StaticSession:
    """Сессия с заранее известным пользователем (HTTP-заголовок, CLI, тесты)."""

    def __init__(self, user_id: Optional[str]) -> None:
        self._user_id = user_id.strip() if user_id else None

    def get_current_user(self) -> Optional[str]:
        return self._user_id or None
