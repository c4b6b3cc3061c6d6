# messenger/gateways/token_gateway.py
from typing import Optional

from messenger.gateways.interfaces import ITokenGateway
from messenger.infrastructure import models, schemas
from messenger.infrastructure.data_mappers import TokenMapper
from messenger.infrastructure.uow import UnitOfWork, UoWModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


class TokenGateway(ITokenGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.Token] = TokenMapper(session)

    async def _get_one(self, *criteria) -> Optional[UoWModel]:
        stmt = select(models.Token).filter(*criteria)
        result = await self.session.execute(stmt)
        token = result.scalar_one_or_none()
        return UoWModel(token, self.uow) if token else None

    async def create_token(self, token: schemas.TokenCreate) -> UoWModel:
        # one session per user, logging in again replaces it
        existing_token = await self.get_by_user_id(token.user_id)
        if existing_token:
            existing_token.access_token = token.access_token
            existing_token.refresh_token = token.refresh_token
            existing_token.token_type = token.token_type
            existing_token.expires_at = token.expires_at
        else:
            existing_token = self.uow.register_new(models.Token(**token.model_dump()))
        await self.uow.commit()
        return existing_token

    async def get_by_user_id(self, user_id: int) -> Optional[UoWModel]:
        return await self._get_one(models.Token.user_id == user_id)

    async def get_by_access_token(self, access_token: str) -> Optional[UoWModel]:
        return await self._get_one(models.Token.access_token == access_token)

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[UoWModel]:
        return await self._get_one(models.Token.refresh_token == refresh_token)

    async def delete_token_by_access_token(self, access_token: str) -> bool:
        token = await self.get_by_access_token(access_token)
        if not token:
            return False
        self.uow.register_deleted(token)
        await self.uow.commit()
        return True

    async def delete_token_by_refresh_token(self, refresh_token: str) -> bool:
        token = await self.get_by_refresh_token(refresh_token)
        if not token:
            return False
        self.uow.register_deleted(token)
        await self.uow.commit()
        return True
