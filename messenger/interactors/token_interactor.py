# messenger/interactors/token_interactor.py

from messenger.gateways.interfaces import ITokenGateway
from messenger.infrastructure import schemas


class TokenInteractor:
    def __init__(self, token_gateway: ITokenGateway):
        self.token_gateway = token_gateway

    async def get_token_by_access_token(
        self, access_token: str
    ) -> schemas.Token | None:
        token = await self.token_gateway.get_by_access_token(access_token)
        return schemas.Token.model_validate(token._model) if token else None

    async def get_token_by_refresh_token(
        self, refresh_token: str
    ) -> schemas.Token | None:
        token = await self.token_gateway.get_by_refresh_token(refresh_token)
        return schemas.Token.model_validate(token._model) if token else None

    async def delete_token_by_access_token(self, access_token: str) -> bool:
        return await self.token_gateway.delete_token_by_access_token(access_token)

    async def delete_token_by_refresh_token(self, refresh_token: str) -> bool:
        return await self.token_gateway.delete_token_by_refresh_token(refresh_token)

    async def create_token(
        self, token_create: schemas.TokenCreate
    ) -> schemas.TokenResponse:
        token = await self.token_gateway.create_token(token_create)
        return schemas.TokenResponse.model_validate(token._model)
