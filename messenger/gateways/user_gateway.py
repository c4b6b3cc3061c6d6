# messenger/gateways/user_gateway.py

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.domain.exceptions import ConflictError
from messenger.gateways.interfaces import IUserGateway
from messenger.infrastructure import models
from messenger.infrastructure.data_mappers import MessageMapper, TokenMapper, UserMapper
from messenger.infrastructure.uow import UnitOfWork, UoWModel


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserGateway(IUserGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.User] = UserMapper(session)
        uow.mappers[models.Message] = MessageMapper(session)
        uow.mappers[models.Token] = TokenMapper(session)

    async def get_user(self, user_id: int) -> UoWModel | None:
        stmt = select(models.User).filter(models.User.id == user_id)
        result = await self.session.execute(stmt)
        user = result.scalar_one_or_none()
        return UoWModel(user, self.uow) if user else None

    async def get_by_username(self, username: str) -> UoWModel | None:
        stmt = select(models.User).filter(models.User.username == username)
        result = await self.session.execute(stmt)
        user = result.scalar_one_or_none()
        return UoWModel(user, self.uow) if user else None

    async def get_all(self, exclude_user_id: int | None = None) -> list[UoWModel]:
        stmt = select(models.User)
        if exclude_user_id is not None:
            stmt = stmt.filter(models.User.id != exclude_user_id)
        stmt = stmt.order_by(models.User.id)
        result = await self.session.execute(stmt)
        users = result.scalars().all()
        return [UoWModel(user, self.uow) for user in users]

    async def create_user(self, username: str, hashed_password: str) -> UoWModel:
        db_user = models.User(
            username=username,
            hashed_password=hashed_password,
            is_online=False,
            last_seen=models.utcnow(),
            created_at=models.utcnow(),
        )
        uow_user = self.uow.register_new(db_user)
        await self._commit_unique(username)
        return uow_user

    async def update_user(self, user: UoWModel, changes: dict) -> UoWModel:
        for key, value in changes.items():
            setattr(user, key, value)
        self.uow.register_dirty(user)
        await self._commit_unique(changes.get("username"))
        return user

    async def set_online_status(self, user: UoWModel, is_online: bool) -> UoWModel:
        user.is_online = is_online
        user.last_seen = models.utcnow()
        await self.uow.commit()
        return user

    async def search_users(
        self, query: str, exclude_user_id: int | None = None
    ) -> list[UoWModel]:
        stmt = select(models.User).filter(
            models.User.username.ilike(f"%{escape_like(query)}%", escape="\\")
        )
        if exclude_user_id is not None:
            stmt = stmt.filter(models.User.id != exclude_user_id)
        stmt = stmt.order_by(models.User.username, models.User.id)
        result = await self.session.execute(stmt)
        users = result.scalars().all()
        return [UoWModel(user, self.uow) for user in users]

    async def delete_user(self, user: UoWModel) -> None:
        token_stmt = select(models.Token).filter(models.Token.user_id == user.id)
        token_result = await self.session.execute(token_stmt)
        for token in token_result.scalars().all():
            self.uow.register_deleted(token)

        # direct messages only, group history stays with the group
        message_stmt = select(models.Message).filter(
            and_(
                models.Message.recipient_id.is_not(None),
                or_(
                    models.Message.sender_id == user.id,
                    models.Message.recipient_id == user.id,
                ),
            )
        )
        message_result = await self.session.execute(message_stmt)
        for message in message_result.scalars().all():
            self.uow.register_deleted(message)

        self.uow.register_deleted(user)
        await self.uow.commit()

    async def _commit_unique(self, username: str | None) -> None:
        try:
            await self.uow.commit()
        except IntegrityError as exc:
            self.uow.rollback()
            await self.session.rollback()
            raise ConflictError(f"Username '{username}' is already taken") from exc
