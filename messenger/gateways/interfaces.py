# messenger/gateways/interfaces.py
from abc import ABC, abstractmethod
from typing import List, Optional

from messenger.domain.entities import Attachment, Destination
from messenger.infrastructure import schemas
from messenger.infrastructure.uow import UoWModel


class IUserGateway(ABC):
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_all(self, exclude_user_id: Optional[int] = None) -> List[UoWModel]:
        pass

    @abstractmethod
    async def create_user(self, username: str, hashed_password: str) -> UoWModel:
        pass

    @abstractmethod
    async def update_user(self, user: UoWModel, changes: dict) -> UoWModel:
        pass

    @abstractmethod
    async def set_online_status(self, user: UoWModel, is_online: bool) -> UoWModel:
        pass

    @abstractmethod
    async def search_users(
        self, query: str, exclude_user_id: Optional[int] = None
    ) -> List[UoWModel]:
        pass

    @abstractmethod
    async def delete_user(self, user: UoWModel) -> None:
        pass


class IMessageGateway(ABC):
    @abstractmethod
    async def get_message(self, message_id: int) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_between(self, user_a: int, user_b: int) -> List[UoWModel]:
        pass

    @abstractmethod
    async def get_for_group(self, group_id: int) -> List[UoWModel]:
        pass

    @abstractmethod
    async def destination_exists(self, destination: Destination) -> bool:
        pass

    @abstractmethod
    async def create_message(
        self,
        sender_id: int,
        destination: Destination,
        content: str,
        attachment: Optional[Attachment] = None,
    ) -> UoWModel:
        pass

    @abstractmethod
    async def mark_deleted(self, message: UoWModel) -> UoWModel:
        pass


class IGroupGateway(ABC):
    @abstractmethod
    async def get_group(
        self, group_id: int, refresh: bool = False
    ) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_user_groups(self, user_id: int) -> List[UoWModel]:
        pass

    @abstractmethod
    async def create_group(
        self, name: str, admin_id: int, member_ids: List[int]
    ) -> UoWModel:
        pass

    @abstractmethod
    async def add_members(self, group: UoWModel, member_ids: List[int]) -> UoWModel:
        pass

    @abstractmethod
    async def remove_member(self, group: UoWModel, member_id: int) -> UoWModel:
        pass

    @abstractmethod
    async def delete_group(self, group: UoWModel) -> None:
        pass


class ITokenGateway(ABC):
    @abstractmethod
    async def create_token(self, token: schemas.TokenCreate) -> UoWModel:
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: int) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_by_access_token(self, access_token: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_by_refresh_token(self, refresh_token: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def delete_token_by_access_token(self, access_token: str) -> bool:
        pass

    @abstractmethod
    async def delete_token_by_refresh_token(self, refresh_token: str) -> bool:
        pass
