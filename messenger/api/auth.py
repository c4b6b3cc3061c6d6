# messenger/api/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from messenger.api.dependencies import (
    get_security_service,
    get_token_interactor,
    get_user_interactor,
    oauth2_scheme,
)
from messenger.infrastructure import schemas
from messenger.infrastructure.security import SecurityService
from messenger.interactors.token_interactor import TokenInteractor
from messenger.interactors.user_interactor import UserInteractor

router = APIRouter()


async def issue_tokens(
    user: schemas.User,
    security_service: SecurityService,
    token_interactor: TokenInteractor,
) -> schemas.TokenResponse:
    access_token, access_expire = security_service.create_access_token(str(user.id))
    refresh_token, _ = security_service.create_refresh_token(str(user.id))
    token_create = schemas.TokenCreate(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_at=access_expire,
        user_id=user.id,
    )
    return await token_interactor.create_token(token_create)


@router.post("/register", response_model=schemas.User)
async def register_user(
    user: schemas.UserCreate,
    user_interactor: UserInteractor = Depends(get_user_interactor),
):
    return await user_interactor.create_user(user)


@router.post("/login", response_model=schemas.TokenResponse)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    user_interactor: UserInteractor = Depends(get_user_interactor),
    token_interactor: TokenInteractor = Depends(get_token_interactor),
    security_service: SecurityService = Depends(get_security_service),
):
    user = await user_interactor.verify_user_password(
        form_data.username, form_data.password
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await issue_tokens(user, security_service, token_interactor)


@router.post("/refresh", response_model=schemas.TokenResponse)
async def refresh_token(
    refresh_token_request: schemas.RefreshTokenRequest,
    token_interactor: TokenInteractor = Depends(get_token_interactor),
    user_interactor: UserInteractor = Depends(get_user_interactor),
    security_service: SecurityService = Depends(get_security_service),
):
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid refresh token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token = await token_interactor.get_token_by_refresh_token(
        refresh_token_request.refresh_token
    )
    if not token:
        raise invalid

    subject = security_service.decode_refresh_token(token.refresh_token)
    if not subject or not subject.isdigit():
        raise invalid

    user = await user_interactor.get_user(int(subject))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await issue_tokens(user, security_service, token_interactor)


@router.post("/logout", status_code=204)
async def logout(
    token: str = Depends(oauth2_scheme),
    token_interactor: TokenInteractor = Depends(get_token_interactor),
):
    deleted = await token_interactor.delete_token_by_access_token(token)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )
