from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.domain.entities import Attachment, DirectDestination, GroupDestination
from messenger.gateways.message_gateway import MessageGateway
from messenger.infrastructure import models
from messenger.infrastructure.uow import UnitOfWork, UoWModel


@pytest.fixture
def mock_session():
    session = Mock(spec=AsyncSession)
    session.execute = AsyncMock()
    return session


@pytest.fixture
def mock_uow():
    uow = Mock(spec=UnitOfWork)
    uow.mappers = {}
    uow.commit = AsyncMock()
    uow.register_new = Mock(side_effect=lambda model: UoWModel(model, uow))
    uow.register_dirty = Mock()
    uow.register_deleted = Mock()
    uow.new = {}
    return uow


@pytest.fixture
def message_gateway(mock_session, mock_uow):
    return MessageGateway(mock_session, mock_uow)


@pytest.fixture
def mock_message():
    message = Mock(spec=models.Message)
    message.id = 1
    message.sender_id = 1
    message.recipient_id = 2
    message.group_id = None
    message.content = "Test message"
    message.is_deleted = False
    message.timestamp = datetime.now(UTC)
    return message


class TestMessageGateway:
    async def test_registers_mapper(self, message_gateway, mock_uow):
        assert models.Message in mock_uow.mappers

    async def test_get_message_found(self, message_gateway, mock_session, mock_message):
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = mock_message
        mock_session.execute.return_value = mock_result

        result = await message_gateway.get_message(1)

        assert isinstance(result, UoWModel)
        assert result._model == mock_message

    async def test_get_message_not_found(self, message_gateway, mock_session):
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = mock_result

        assert await message_gateway.get_message(1) is None

    async def test_get_between(self, message_gateway, mock_session, mock_message):
        mock_result = Mock()
        mock_result.scalars.return_value.all.return_value = [mock_message]
        mock_session.execute.return_value = mock_result

        result = await message_gateway.get_between(1, 2)

        assert [m._model for m in result] == [mock_message]
        mock_session.execute.assert_awaited_once()

    async def test_create_direct_message(self, message_gateway, mock_uow):
        result = await message_gateway.create_message(
            1, DirectDestination(peer_id=2), "hello"
        )

        created = mock_uow.register_new.call_args.args[0]
        assert isinstance(created, models.Message)
        assert created.sender_id == 1
        assert created.recipient_id == 2
        assert created.group_id is None
        assert created.is_deleted is False
        assert created.file_url is None
        assert created.timestamp is not None
        assert result._model is created
        mock_uow.commit.assert_awaited_once()

    async def test_create_group_message_with_attachment(self, message_gateway, mock_uow):
        await message_gateway.create_message(
            1,
            GroupDestination(group_id=7),
            "cat.png",
            Attachment("/uploads/1.png", "cat.png", "image/png"),
        )

        created = mock_uow.register_new.call_args.args[0]
        assert created.recipient_id is None
        assert created.group_id == 7
        assert created.file_url == "/uploads/1.png"
        assert created.file_name == "cat.png"
        assert created.file_type == "image/png"

    async def test_mark_deleted(self, message_gateway, mock_uow, mock_message):
        message = UoWModel(mock_message, mock_uow)

        result = await message_gateway.mark_deleted(message)

        assert result.is_deleted is True
        mock_uow.register_dirty.assert_called_once_with(mock_message)
        mock_uow.commit.assert_awaited_once()

    async def test_destination_exists(self, message_gateway, mock_session):
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = 7
        mock_session.execute.return_value = mock_result

        assert await message_gateway.destination_exists(GroupDestination(group_id=7))

    async def test_destination_missing(self, message_gateway, mock_session):
        mock_result = Mock()
        mock_result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = mock_result

        assert not await message_gateway.destination_exists(DirectDestination(peer_id=9))
