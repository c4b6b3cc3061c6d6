# messenger/api/users.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from messenger.api.dependencies import get_current_user, get_user_interactor
from messenger.infrastructure import schemas
from messenger.interactors.user_interactor import UserInteractor

router = APIRouter()


@router.get("/", response_model=List[schemas.User])
async def read_users(
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await user_interactor.get_users(exclude_user_id=current_user.id)


@router.get("/search", response_model=List[schemas.UserBasic])
async def search_users(
    query: str = "",
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await user_interactor.search_users(query, exclude_user_id=current_user.id)


@router.get("/me", response_model=schemas.User)
async def read_users_me(current_user: schemas.User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=schemas.User)
async def update_user(
    user_update: schemas.UserUpdate,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await user_interactor.update_user(current_user.id, user_update)


@router.delete("/me", status_code=204)
async def delete_user(
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    await user_interactor.delete_user(current_user.id)


@router.post("/me/online", response_model=schemas.User)
async def go_online(
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await user_interactor.set_online_status(current_user.id, True)


@router.post("/me/offline", response_model=schemas.User)
async def go_offline(
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await user_interactor.set_online_status(current_user.id, False)


@router.get("/{user_id}", response_model=schemas.User)
async def read_user(
    user_id: int,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    user = await user_interactor.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
