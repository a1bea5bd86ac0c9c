# src/services/matching_service/app.py
"""
FastAPI приложение для Matching Service.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.common.constants import TypeMsg
from src.common.logger import log_info, setup_logging
from src.config import settings
from src.services.matching_service.routes import router
from src.services.matching_service.schemas import HealthStatus


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Жизненный цикл приложения."""
    setup_logging()
    await log_info("Matching Service запускается...", type_msg=TypeMsg.INFO)

    from src.services.matching_service.dependencies import close_dependencies, init_dependencies
    await init_dependencies()

    yield

    await close_dependencies()
    await log_info("Matching Service остановлен", type_msg=TypeMsg.INFO)


# =============================================================================
# ПРИЛОЖЕНИЕ
# =============================================================================

app = FastAPI(
    title="Matching Service",
    description="Подбор рейсов перевозчиков под грузы и запросы на контакт",
    version=settings.system.VERSION,
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса."""
    from src.services.matching_service.dependencies import get_db

    deps = {}
    try:
        db = get_db()
        deps["postgres"] = "healthy" if await db.health_check() else "unhealthy"
    except RuntimeError:
        deps["postgres"] = "unhealthy"

    overall = "healthy" if all(v == "healthy" for v in deps.values()) else "degraded"

    return HealthStatus(
        service="matching_service",
        status=overall,
        version=settings.system.VERSION,
        dependencies=deps,
    )
