# tests/core/test_contact_service.py
"""
Тесты для сервиса запросов на контакт.
"""

from __future__ import annotations

from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from src.common.constants import ContactFailureReason, ContactRequestStatus
from src.core.matching.contact import ContactService
from src.core.matching.exceptions import DataAccessError
from src.core.matching.models import ContactRequest
from src.core.matching.repository import MatchingRepository
from src.core.matching.session import StaticSession


@pytest.fixture
def contact_service(mock_data_access: AsyncMock) -> ContactService:
    """Сервис с авторизованным пользователем."""
    return ContactService(data_access=mock_data_access, session=StaticSession("user-1"))


class TestStaticSession:
    """Тесты для StaticSession."""

    @pytest.mark.parametrize("user_id, expected", [("user-1", "user-1"), (" user-1 ", "user-1"), ("", None), ("  ", None), (None, None)])
    def test_current_user(self, user_id, expected) -> None:
        assert StaticSession(user_id).get_current_user() == expected


class TestSendContactRequest:
    """Тесты для ContactService.send_contact_request."""

    @pytest.mark.asyncio
    async def test_success(self, contact_service: ContactService, mock_data_access: AsyncMock) -> None:
        """Создаётся одна запись pending с данными из хранилища."""
        result = await contact_service.send_contact_request("shipment-1", "trip-1", "Hello")

        assert result.success is True
        assert result.error is None
        assert result.request.id == "request-1"
        assert result.request.created_at is not None
        assert result.request.status == ContactRequestStatus.PENDING

        mock_data_access.get_shipper_id_by_user.assert_awaited_once_with("user-1")
        mock_data_access.get_trip_carrier_id.assert_awaited_once_with("trip-1")
        mock_data_access.insert_contact_request.assert_awaited_once()

        inserted: ContactRequest = mock_data_access.insert_contact_request.await_args.args[0]
        assert inserted.shipper_id == "shipper-1"
        assert inserted.carrier_id == "carrier-1"
        assert inserted.shipment_id == "shipment-1"
        assert inserted.trip_id == "trip-1"
        assert inserted.message == "Hello"

    @pytest.mark.asyncio
    async def test_empty_message_allowed(self, contact_service: ContactService, mock_data_access: AsyncMock) -> None:
        result = await contact_service.send_contact_request("shipment-1", "trip-1")

        assert result.success is True
        assert mock_data_access.insert_contact_request.await_args.args[0].message == ""

    @pytest.mark.asyncio
    async def test_each_call_creates_new_record(self, contact_service: ContactService, mock_data_access: AsyncMock) -> None:
        """Дедупликации нет."""
        await contact_service.send_contact_request("shipment-1", "trip-1", "Hi")
        await contact_service.send_contact_request("shipment-1", "trip-1", "Hi")

        assert mock_data_access.insert_contact_request.await_count == 2

    @pytest.mark.asyncio
    async def test_not_authenticated(self, mock_data_access: AsyncMock) -> None:
        """Без пользователя хранилище не трогается."""
        service = ContactService(data_access=mock_data_access, session=StaticSession(None))

        result = await service.send_contact_request("shipment-1", "trip-1", "Hi", lang="en")

        assert result.success is False
        assert result.error == ContactFailureReason.NOT_AUTHENTICATED
        assert result.detail == "User is not logged in"
        mock_data_access.get_shipper_id_by_user.assert_not_awaited()
        mock_data_access.insert_contact_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_shipper_not_found(self, contact_service: ContactService, mock_data_access: AsyncMock) -> None:
        mock_data_access.get_shipper_id_by_user.return_value = None

        result = await contact_service.send_contact_request("shipment-1", "trip-1")

        assert result.success is False
        assert result.error == ContactFailureReason.SHIPPER_NOT_FOUND
        mock_data_access.get_trip_carrier_id.assert_not_awaited()
        mock_data_access.insert_contact_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_trip_not_found(self, contact_service: ContactService, mock_data_access: AsyncMock) -> None:
        """Несуществующий рейс: ошибка trip_not_found, запись не создаётся."""
        mock_data_access.get_trip_carrier_id.return_value = None

        result = await contact_service.send_contact_request("shipment-1", "missing", "Hi", lang="en")

        assert result.success is False
        assert result.error == ContactFailureReason.TRIP_NOT_FOUND
        assert result.detail == "Trip not found"
        mock_data_access.insert_contact_request.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("shipment_id, trip_id", [("", "trip-1"), ("shipment-1", "  "), (None, "trip-1")])
    async def test_invalid_input(
        self,
        contact_service: ContactService,
        mock_data_access: AsyncMock,
        shipment_id,
        trip_id,
    ) -> None:
        result = await contact_service.send_contact_request(shipment_id, trip_id)

        assert result.error == ContactFailureReason.INVALID_INPUT
        mock_data_access.get_shipper_id_by_user.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get_shipper_id_by_user", "get_trip_carrier_id", "insert_contact_request"])
    async def test_data_access_error(
        self,
        contact_service: ContactService,
        mock_data_access: AsyncMock,
        method: str,
    ) -> None:
        """Сбой хранилища на любом шаге: data_access_error, без повторов."""
        failing = getattr(mock_data_access, method)
        failing.side_effect = DataAccessError("connection reset")

        result = await contact_service.send_contact_request("shipment-1", "trip-1", "Hi")

        assert result.success is False
        assert result.error == ContactFailureReason.DATA_ACCESS_ERROR
        assert failing.await_count == 1

    @pytest.mark.asyncio
    async def test_ids_are_stripped(self, contact_service: ContactService, mock_data_access: AsyncMock) -> None:
        await contact_service.send_contact_request(" shipment-1 ", " trip-1 ")

        mock_data_access.get_trip_carrier_id.assert_awaited_once_with("trip-1")


class TestContactRequestWithRepository:
    """ContactService поверх MatchingRepository с моком базы."""

    SHIPPER_ID = UUID("9a1b2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c04")
    CARRIER_ID = UUID("7e2f9a10-3c44-4b1a-a1a2-2f7c0e4d5b02")
    TRIP_ID = UUID("5b0c3c2e-8a55-4f36-9d8b-0b1d6c8f0a01")

    @pytest.mark.asyncio
    async def test_malformed_shipment_id_is_invalid_input(self, mock_db: AsyncMock) -> None:
        """ID груза не в формате UUID: invalid_input, а не сбой хранилища; вставки нет."""
        mock_db.fetchval.side_effect = [self.SHIPPER_ID, self.CARRIER_ID]
        service = ContactService(MatchingRepository(mock_db), StaticSession("user-1"))

        result = await service.send_contact_request("not-a-uuid", str(self.TRIP_ID), "Hi", lang="en")

        assert result.success is False
        assert result.error == ContactFailureReason.INVALID_INPUT
        mock_db.fetchrow.assert_not_awaited()
