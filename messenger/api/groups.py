# messenger/api/groups.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from messenger.api.dependencies import (
    get_current_user,
    get_group_interactor,
    get_message_interactor,
)
from messenger.domain.exceptions import ForbiddenError, NotFoundError
from messenger.infrastructure import schemas
from messenger.interactors.group_interactor import GroupInteractor
from messenger.interactors.message_interactor import MessageInteractor

router = APIRouter()


@router.post("/", response_model=schemas.Group)
async def create_group(
    group: schemas.GroupCreate,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await group_interactor.create_group(group, current_user.id)


@router.get("/", response_model=List[schemas.Group])
async def read_groups(
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await group_interactor.get_user_groups(current_user.id)


@router.get("/{group_id}", response_model=schemas.Group)
async def read_group(
    group_id: int,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    group = await group_interactor.get_group(group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


@router.get("/{group_id}/messages", response_model=List[schemas.Message])
async def read_group_messages(
    group_id: int,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    if await group_interactor.get_group(group_id) is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return await message_interactor.get_group_messages(group_id)


@router.post("/{group_id}/members", response_model=schemas.Group)
async def add_group_members(
    group_id: int,
    members: schemas.GroupMembersAdd,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await group_interactor.add_members(group_id, members.member_ids)


@router.delete("/{group_id}/members/{user_id}", response_model=schemas.Group)
async def remove_group_member(
    group_id: int,
    user_id: int,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await group_interactor.remove_member(group_id, user_id)


@router.delete("/{group_id}", status_code=204)
async def delete_group(
    group_id: int,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    try:
        await group_interactor.delete_group(group_id, current_user.id)
    except (NotFoundError, ForbiddenError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not permitted to delete this group",
        )
