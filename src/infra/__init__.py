# src/infra/__init__.py
"""
Инфраструктурный слой.
Работа с PostgreSQL.
"""

from src.infra.database import DatabaseManager, close_db, init_db

__all__ = [
    "DatabaseManager",
    "init_db",
    "close_db",
]
