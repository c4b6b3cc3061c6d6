# messenger/interactors/message_interactor.py
import logging
from typing import List, Optional

from messenger.domain.addressing import resolve_attachment, resolve_destination
from messenger.domain.exceptions import ForbiddenError, NotFoundError
from messenger.gateways.interfaces import IMessageGateway
from messenger.infrastructure import schemas


class MessageInteractor:
    def __init__(
        self,
        message_gateway: IMessageGateway,
        logger: Optional[logging.Logger] = None,
    ):
        self.message_gateway = message_gateway
        self.logger = logger or logging.getLogger("MessengerAPI")

    async def get_message(self, message_id: int) -> Optional[schemas.Message]:
        message = await self.message_gateway.get_message(message_id)
        return schemas.Message.model_validate(message) if message else None

    async def get_messages_between(
        self, user_a: int, user_b: int
    ) -> List[schemas.Message]:
        messages = await self.message_gateway.get_between(user_a, user_b)
        return [schemas.Message.model_validate(message) for message in messages]

    async def get_group_messages(self, group_id: int) -> List[schemas.Message]:
        messages = await self.message_gateway.get_for_group(group_id)
        return [schemas.Message.model_validate(message) for message in messages]

    async def create_message(
        self, message: schemas.MessageCreate, sender_id: int
    ) -> schemas.Message:
        destination = resolve_destination(message.recipient_id, message.group_id)
        attachment = resolve_attachment(
            message.file_url, message.file_name, message.file_type
        )
        if not await self.message_gateway.destination_exists(destination):
            raise NotFoundError("Message recipient or group not found")

        new_message = await self.message_gateway.create_message(
            sender_id, destination, message.content, attachment
        )
        return schemas.Message.model_validate(new_message)

    async def delete_message(
        self, message_id: int, requester_id: int
    ) -> schemas.Message:
        message = await self.message_gateway.get_message(message_id)
        if not message:
            raise NotFoundError(f"Message {message_id} not found")
        if message.sender_id != requester_id:
            self.logger.warning(
                "User %s tried to delete message %s of user %s",
                requester_id,
                message_id,
                message.sender_id,
            )
            raise ForbiddenError("Only the author can delete this message")

        if not message.is_deleted:
            message = await self.message_gateway.mark_deleted(message)
        return schemas.Message.model_validate(message)
