# messenger/infrastructure/data_mappers.py

from typing import Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from messenger.infrastructure import models

ModelT_contra = TypeVar("ModelT_contra", contravariant=True)


class DataMapper(Protocol[ModelT_contra]):
    async def insert(self, model: ModelT_contra):
        raise NotImplementedError

    async def delete(self, model: ModelT_contra):
        raise NotImplementedError

    async def update(self, model: ModelT_contra):
        raise NotImplementedError


class SessionMapper:
    """Flushes every write so constraint violations surface at the call site
    and deletes reach the database in the order they were registered."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, model):
        self.session.add(model)
        await self.session.flush()

    async def delete(self, model):
        await self.session.delete(model)
        await self.session.flush()

    async def update(self, model):
        # attached models are tracked already, merging them would copy new children
        if model not in self.session:
            await self.session.merge(model)
        await self.session.flush()


class UserMapper(SessionMapper, DataMapper[models.User]):
    pass


class GroupMapper(SessionMapper, DataMapper[models.Group]):
    pass


class MessageMapper(SessionMapper, DataMapper[models.Message]):
    pass


class TokenMapper(SessionMapper, DataMapper[models.Token]):
    pass
