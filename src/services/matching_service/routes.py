# src/services/matching_service/routes.py
"""
HTTP API матчинга: подбор рейсов и запросы на контакт.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.common.constants import ContactFailureReason
from src.core.matching.contact import ContactService
from src.core.matching.exceptions import DataAccessError, InvalidInputError
from src.core.matching.models import ContactRequest, ContactRequestCreateDTO
from src.core.matching.repository import MatchingDataAccess
from src.core.matching.service import MatchingService
from src.services.matching_service.dependencies import (
    get_contact_service,
    get_data_access,
    get_matching_service,
)
from src.services.matching_service.schemas import ErrorResponse, MatchListResponse

router = APIRouter(prefix="/api/v1", tags=["Matching"])

FAILURE_STATUS: dict[ContactFailureReason, int] = {
    ContactFailureReason.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ContactFailureReason.SHIPPER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ContactFailureReason.TRIP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ContactFailureReason.INVALID_INPUT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ContactFailureReason.DATA_ACCESS_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error(status_code: int, error_code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message).model_dump(),
    )


@router.get(
    "/matches",
    response_model=MatchListResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Груз не найден"},
        422: {"model": ErrorResponse, "description": "Некорректные данные груза"},
        503: {"model": ErrorResponse, "description": "Хранилище недоступно"},
    },
)
async def get_matches(
    shipment_id: str = Query(..., min_length=1),
    lang: Optional[str] = Query(None),
    min_score: Optional[float] = Query(None, ge=0.0, le=100.0),
    data_access: MatchingDataAccess = Depends(get_data_access),
    service: MatchingService = Depends(get_matching_service),
) -> MatchListResponse:
    """Рейсы для груза по убыванию оценки."""
    try:
        shipment = await data_access.get_shipment(shipment_id)
        if shipment is None:
            raise _error(status.HTTP_404_NOT_FOUND, "shipment_not_found", f"Груз {shipment_id} не найден")

        matches = await service.find_matching_trips(shipment, min_score=min_score, lang=lang)
    except InvalidInputError as e:
        raise _error(status.HTTP_422_UNPROCESSABLE_ENTITY, e.reason.value, str(e))
    except DataAccessError as e:
        raise _error(status.HTTP_503_SERVICE_UNAVAILABLE, "data_access_error", str(e))

    return MatchListResponse(shipment_id=shipment_id, total=len(matches), matches=matches)


@router.post(
    "/contact-requests",
    response_model=ContactRequest,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Пользователь не авторизован"},
        404: {"model": ErrorResponse, "description": "Грузоотправитель или рейс не найден"},
        422: {"model": ErrorResponse, "description": "Некорректные данные"},
        503: {"model": ErrorResponse, "description": "Хранилище недоступно"},
    },
)
async def create_contact_request(
    request: ContactRequestCreateDTO,
    lang: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
) -> ContactRequest:
    """Отправка запроса на контакт перевозчику выбранного рейса."""
    result = await service.send_contact_request(
        request.shipment_id,
        request.trip_id,
        request.message,
        lang=lang,
    )

    if not result.success:
        raise _error(FAILURE_STATUS[result.error], result.error.value, result.detail or "")

    return result.request
