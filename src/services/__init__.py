# src/services/__init__.py
"""
Сервисы приложения.

- matching_service: подбор рейсов под груз и запросы на контакт (FastAPI)
"""

__all__: list[str] = []
