# messenger/interactors/user_interactor.py
import logging

from messenger.domain.exceptions import ConflictError, NotFoundError, ValidationError
from messenger.gateways.interfaces import IUserGateway
from messenger.infrastructure import schemas
from messenger.infrastructure.security import SecurityService
from messenger.infrastructure.uow import UoWModel


class UserInteractor:
    def __init__(
        self,
        security_service: SecurityService,
        user_gateway: IUserGateway,
        logger: logging.Logger | None = None,
    ):
        self.security_service = security_service
        self.user_gateway = user_gateway
        self.logger = logger or logging.getLogger("MessengerAPI")

    async def _require_user(self, user_id: int) -> UoWModel:
        user: UoWModel | None = await self.user_gateway.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def get_user(self, user_id: int) -> schemas.User | None:
        user: UoWModel | None = await self.user_gateway.get_user(user_id)
        return schemas.User.model_validate(user._model) if user else None

    async def get_user_by_username(self, username: str) -> schemas.User | None:
        user: UoWModel | None = await self.user_gateway.get_by_username(username)
        return schemas.User.model_validate(user._model) if user else None

    async def get_users(self, exclude_user_id: int | None = None) -> list[schemas.User]:
        users: list[UoWModel] = await self.user_gateway.get_all(exclude_user_id)
        return [schemas.User.model_validate(user._model) for user in users]

    async def create_user(self, user: schemas.UserCreate) -> schemas.User:
        hashed_password = self.security_service.get_password_hash(user.password)
        try:
            new_user = await self.user_gateway.create_user(user.username, hashed_password)
        except ConflictError:
            self.logger.info("Registration rejected, username %r taken", user.username)
            raise
        self.logger.info("Registered user %s (%s)", new_user.id, new_user.username)
        return schemas.User.model_validate(new_user._model)

    async def update_user(
        self, user_id: int, user_update: schemas.UserUpdate
    ) -> schemas.User:
        changes = user_update.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationError("Nothing to update")
        if "password" in changes:
            changes["hashed_password"] = self.security_service.get_password_hash(
                changes.pop("password")
            )
        user = await self._require_user(user_id)
        updated_user = await self.user_gateway.update_user(user, changes)
        return schemas.User.model_validate(updated_user._model)

    async def set_online_status(self, user_id: int, is_online: bool) -> schemas.User:
        user = await self._require_user(user_id)
        updated_user = await self.user_gateway.set_online_status(user, is_online)
        return schemas.User.model_validate(updated_user._model)

    async def delete_user(self, user_id: int) -> None:
        user = await self._require_user(user_id)
        await self.user_gateway.delete_user(user)
        self.logger.info("Deleted user %s with their direct messages", user_id)

    async def search_users(
        self, query: str, exclude_user_id: int | None = None
    ) -> list[schemas.User]:
        if not query or not query.strip():
            return []
        users: list[UoWModel] = await self.user_gateway.search_users(
            query, exclude_user_id
        )
        return [schemas.User.model_validate(user._model) for user in users]

    async def verify_user_password(
        self, username: str, password: str
    ) -> schemas.User | None:
        user: UoWModel | None = await self.user_gateway.get_by_username(username)
        if not user:
            return None
        if self.security_service.verify_password(password, user._model.hashed_password):
            return schemas.User.model_validate(user._model)
        return None
