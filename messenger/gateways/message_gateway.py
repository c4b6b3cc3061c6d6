# messenger/gateways/message_gateway.py

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.domain.addressing import destination_columns
from messenger.domain.entities import Attachment, Destination, DirectDestination
from messenger.domain.exceptions import NotFoundError
from messenger.gateways.interfaces import IMessageGateway
from messenger.infrastructure import models
from messenger.infrastructure.data_mappers import MessageMapper
from messenger.infrastructure.uow import UnitOfWork, UoWModel


class MessageGateway(IMessageGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.Message] = MessageMapper(session)

    @staticmethod
    def _timeline(stmt):
        # id follows insertion order and settles equal timestamps
        return stmt.order_by(models.Message.timestamp.asc(), models.Message.id.asc())

    async def get_message(self, message_id: int) -> UoWModel | None:
        stmt = select(models.Message).filter(models.Message.id == message_id)
        result = await self.session.execute(stmt)
        message = result.scalar_one_or_none()
        return UoWModel(message, self.uow) if message else None

    async def get_between(self, user_a: int, user_b: int) -> list[UoWModel]:
        stmt = select(models.Message).filter(
            or_(
                and_(
                    models.Message.sender_id == user_a,
                    models.Message.recipient_id == user_b,
                ),
                and_(
                    models.Message.sender_id == user_b,
                    models.Message.recipient_id == user_a,
                ),
            )
        )
        result = await self.session.execute(self._timeline(stmt))
        messages = result.scalars().all()
        return [UoWModel(message, self.uow) for message in messages]

    async def get_for_group(self, group_id: int) -> list[UoWModel]:
        stmt = select(models.Message).filter(models.Message.group_id == group_id)
        result = await self.session.execute(self._timeline(stmt))
        messages = result.scalars().all()
        return [UoWModel(message, self.uow) for message in messages]

    async def destination_exists(self, destination: Destination) -> bool:
        if isinstance(destination, DirectDestination):
            stmt = select(models.User.id).filter(models.User.id == destination.peer_id)
        else:
            stmt = select(models.Group.id).filter(
                models.Group.id == destination.group_id
            )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def create_message(
        self,
        sender_id: int,
        destination: Destination,
        content: str,
        attachment: Attachment | None = None,
    ) -> UoWModel:
        db_message = models.Message(
            sender_id=sender_id,
            content=content,
            is_deleted=False,
            timestamp=models.utcnow(),
            **destination_columns(destination),
        )
        if attachment:
            db_message.file_url = attachment.file_url
            db_message.file_name = attachment.file_name
            db_message.file_type = attachment.file_type

        uow_message = self.uow.register_new(db_message)
        try:
            await self.uow.commit()
        except IntegrityError as exc:
            # the group went away between the existence check and the insert
            self.uow.rollback()
            await self.session.rollback()
            raise NotFoundError("Message recipient or group not found") from exc
        return uow_message

    async def mark_deleted(self, message: UoWModel) -> UoWModel:
        message.is_deleted = True
        await self.uow.commit()
        return message
