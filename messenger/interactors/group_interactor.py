# messenger/interactors/group_interactor.py
import logging
from typing import List, Optional

from messenger.domain.exceptions import ForbiddenError, NotFoundError, ValidationError
from messenger.gateways.interfaces import IGroupGateway
from messenger.infrastructure import schemas
from messenger.infrastructure.uow import UoWModel


class GroupInteractor:
    """Group lifecycle and membership.

    Membership changes are open to any caller and do not check that the ids
    belong to existing users; only deletion is reserved to the admin.
    """

    def __init__(
        self,
        group_gateway: IGroupGateway,
        logger: Optional[logging.Logger] = None,
    ):
        self.group_gateway = group_gateway
        self.logger = logger or logging.getLogger("MessengerAPI")

    async def _require_group(self, group_id: int) -> UoWModel:
        group = await self.group_gateway.get_group(group_id)
        if not group:
            raise NotFoundError(f"Group {group_id} not found")
        return group

    async def get_group(self, group_id: int) -> Optional[schemas.Group]:
        group = await self.group_gateway.get_group(group_id)
        return schemas.Group.model_validate(group) if group else None

    async def get_user_groups(self, user_id: int) -> List[schemas.Group]:
        groups = await self.group_gateway.get_user_groups(user_id)
        return [schemas.Group.model_validate(group) for group in groups]

    async def create_group(
        self, group: schemas.GroupCreate, admin_id: int
    ) -> schemas.Group:
        name = group.name.strip()
        if not name:
            raise ValidationError("Group name is required")
        new_group = await self.group_gateway.create_group(
            name, admin_id, group.member_ids
        )
        self.logger.info("User %s created group %s", admin_id, new_group.id)
        return schemas.Group.model_validate(new_group)

    async def add_members(
        self, group_id: int, member_ids: List[int]
    ) -> schemas.Group:
        group = await self._require_group(group_id)
        updated_group = await self.group_gateway.add_members(group, member_ids)
        return schemas.Group.model_validate(updated_group)

    async def remove_member(self, group_id: int, member_id: int) -> schemas.Group:
        group = await self._require_group(group_id)
        updated_group = await self.group_gateway.remove_member(group, member_id)
        return schemas.Group.model_validate(updated_group)

    async def delete_group(self, group_id: int, requester_id: int) -> None:
        group = await self._require_group(group_id)
        if group.admin_id != requester_id:
            self.logger.warning(
                "User %s tried to delete group %s owned by %s",
                requester_id,
                group_id,
                group.admin_id,
            )
            raise ForbiddenError("Only the group admin can delete this group")
        await self.group_gateway.delete_group(group)
        self.logger.info("Group %s deleted with its messages", group_id)
