# messenger/api/messages.py
import secrets
import time
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from messenger.api.dependencies import (
    get_config,
    get_current_user,
    get_message_interactor,
)
from messenger.config import AppConfig
from messenger.domain.exceptions import ForbiddenError, NotFoundError
from messenger.infrastructure import schemas
from messenger.interactors.message_interactor import MessageInteractor

router = APIRouter()


@router.post("/", response_model=schemas.Message)
async def create_message(
    message: schemas.MessageCreate,
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await message_interactor.create_message(message, current_user.id)


@router.get("/direct/{user_id}", response_model=List[schemas.Message])
async def read_direct_messages(
    user_id: int,
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    return await message_interactor.get_messages_between(current_user.id, user_id)


@router.delete("/{message_id}", response_model=schemas.Message)
async def delete_message(
    message_id: int,
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: schemas.User = Depends(get_current_user),
):
    try:
        return await message_interactor.delete_message(message_id, current_user.id)
    except (NotFoundError, ForbiddenError):
        # same answer whether the message is missing or someone else's
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not permitted to delete this message",
        )


@router.post("/upload", response_model=schemas.FileUpload)
async def upload_attachment(
    file: UploadFile = File(...),
    config: AppConfig = Depends(get_config),
    current_user: schemas.User = Depends(get_current_user),
):
    # never buffer more than one byte past the limit
    data = await file.read(config.MAX_UPLOAD_SIZE + 1)
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(data) > config.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large (max {config.MAX_UPLOAD_SIZE} bytes)",
        )

    original_name = file.filename or "upload"
    stored_name = (
        f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{Path(original_name).suffix}"
    )
    upload_dir = Path(config.UPLOAD_DIR)
    await run_in_threadpool(upload_dir.mkdir, parents=True, exist_ok=True)
    await run_in_threadpool((upload_dir / stored_name).write_bytes, data)

    return schemas.FileUpload(
        file_url=f"/uploads/{stored_name}",
        file_name=original_name,
        file_type=file.content_type or "application/octet-stream",
    )
