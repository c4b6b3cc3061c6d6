# messenger/gateways/group_gateway.py
from typing import List, Optional

from messenger.domain.exceptions import ConflictError, NotFoundError
from messenger.gateways.interfaces import IGroupGateway
from messenger.infrastructure import models
from messenger.infrastructure.data_mappers import GroupMapper
from messenger.infrastructure.uow import UnitOfWork, UoWModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession


class GroupGateway(IGroupGateway):
    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        uow.mappers[models.Group] = GroupMapper(session)

    async def get_group(
        self, group_id: int, refresh: bool = False
    ) -> Optional[UoWModel]:
        stmt = select(models.Group).filter(models.Group.id == group_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        group = result.scalar_one_or_none()
        return UoWModel(group, self.uow) if group else None

    async def get_user_groups(self, user_id: int) -> List[UoWModel]:
        stmt = (
            select(models.Group)
            .filter(models.Group.members.any(models.GroupMember.user_id == user_id))
            .order_by(models.Group.id)
        )
        result = await self.session.execute(stmt)
        groups = result.scalars().all()
        return [UoWModel(group, self.uow) for group in groups]

    async def create_group(
        self, name: str, admin_id: int, member_ids: List[int]
    ) -> UoWModel:
        unique_ids = dict.fromkeys([admin_id, *member_ids])
        db_group = models.Group(
            name=name,
            admin_id=admin_id,
            created_at=models.utcnow(),
            members=[models.GroupMember(user_id=user_id) for user_id in unique_ids],
        )
        uow_group = self.uow.register_new(db_group)
        await self.uow.commit()
        return uow_group

    async def add_members(self, group: UoWModel, member_ids: List[int]) -> UoWModel:
        group_id = group.id
        for _ in range(2):
            present = set(group.member_ids)
            missing = [i for i in dict.fromkeys(member_ids) if i not in present]
            if not missing:
                return group
            for user_id in missing:
                group._model.members.append(models.GroupMember(user_id=user_id))
            self.uow.register_dirty(group._model)
            try:
                await self.uow.commit()
                return group
            except IntegrityError:
                # a concurrent add of the same id won the primary key, re-read
                self.uow.rollback()
                await self.session.rollback()
                group = await self.get_group(group_id, refresh=True)
                if group is None:
                    raise NotFoundError(f"Group {group_id} not found")
        raise ConflictError(f"Members of group {group_id} changed concurrently")

    async def remove_member(self, group: UoWModel, member_id: int) -> UoWModel:
        group._model.members = [
            m for m in group._model.members if m.user_id != member_id
        ]
        self.uow.register_dirty(group._model)
        await self.uow.commit()
        return group

    async def delete_group(self, group: UoWModel) -> None:
        # purged before the group goes so messages.group_id never dangles
        await self.session.execute(
            delete(models.Message).where(models.Message.group_id == group.id)
        )
        self.uow.register_deleted(group._model)
        await self.uow.commit()
