# messenger/api/dependencies.py
import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.config import AppConfig
from messenger.gateways.group_gateway import GroupGateway
from messenger.gateways.message_gateway import MessageGateway
from messenger.gateways.token_gateway import TokenGateway
from messenger.gateways.user_gateway import UserGateway
from messenger.infrastructure import schemas
from messenger.infrastructure.security import SecurityService
from messenger.infrastructure.uow import UnitOfWork
from messenger.interactors.group_interactor import GroupInteractor
from messenger.interactors.message_interactor import MessageInteractor
from messenger.interactors.token_interactor import TokenInteractor
from messenger.interactors.user_interactor import UserInteractor

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_security_service(request: Request) -> SecurityService:
    return request.app.state.security_service


def get_logger(request: Request) -> logging.Logger:
    return request.app.state.logger


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_uow() -> UnitOfWork:
    return UnitOfWork()


async def get_user_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return UserGateway(session, uow)


async def get_group_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return GroupGateway(session, uow)


async def get_message_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return MessageGateway(session, uow)


async def get_token_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return TokenGateway(session, uow)


async def get_user_interactor(
    security_service: SecurityService = Depends(get_security_service),
    user_gateway: UserGateway = Depends(get_user_gateway),
    logger: logging.Logger = Depends(get_logger),
):
    return UserInteractor(security_service, user_gateway, logger)


async def get_group_interactor(
    group_gateway: GroupGateway = Depends(get_group_gateway),
    logger: logging.Logger = Depends(get_logger),
):
    return GroupInteractor(group_gateway, logger)


async def get_message_interactor(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    logger: logging.Logger = Depends(get_logger),
):
    return MessageInteractor(message_gateway, logger)


async def get_token_interactor(
    token_gateway: TokenGateway = Depends(get_token_gateway),
):
    return TokenInteractor(token_gateway)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    security_service: SecurityService = Depends(get_security_service),
    user_interactor: UserInteractor = Depends(get_user_interactor),
    token_interactor: TokenInteractor = Depends(get_token_interactor),
) -> schemas.User:
    credentials_error = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    subject = security_service.decode_access_token(token)
    if subject is None or not subject.isdigit():
        raise credentials_error

    stored_token = await token_interactor.get_token_by_access_token(token)
    if stored_token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await user_interactor.get_user(int(subject))
    if user is None:
        raise credentials_error
    return user
