# messenger/infrastructure/schemas.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from messenger.domain.entities import DELETED_MESSAGE_PLACEHOLDER


class UserBase(BaseModel):
    username: str = Field(..., min_length=1)


class UserBasic(BaseModel):
    id: int
    username: str
    is_online: bool

    model_config = ConfigDict(from_attributes=True)


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class UserUpdate(BaseModel):
    username: str | None = Field(None, min_length=1)
    password: str | None = Field(None, min_length=8)


class User(UserBase):
    id: int
    is_online: bool
    last_seen: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupBase(BaseModel):
    name: str


class GroupCreate(GroupBase):
    member_ids: list[int] = Field(default_factory=list)


class GroupMembersAdd(BaseModel):
    member_ids: list[int]


class Group(GroupBase):
    id: int
    admin_id: int
    member_ids: list[int] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageBase(BaseModel):
    content: str
    file_url: str | None = None
    file_name: str | None = None
    file_type: str | None = None


class MessageCreate(MessageBase):
    content: str = Field(..., min_length=1)
    recipient_id: int | None = None
    group_id: int | None = None


class Message(MessageBase):
    id: int
    sender_id: int
    recipient_id: int | None = None
    group_id: int | None = None
    timestamp: datetime
    is_deleted: bool

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def redact_deleted(self) -> "Message":
        # every read path goes through this model, tombstones keep their slot only
        if self.is_deleted:
            self.content = DELETED_MESSAGE_PLACEHOLDER
            self.file_url = None
            self.file_name = None
            self.file_type = None
        return self


class FileUpload(BaseModel):
    file_url: str
    file_name: str
    file_type: str


class TokenBase(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str


class TokenCreate(TokenBase):
    expires_at: datetime
    user_id: int


class Token(TokenBase):
    id: int
    expires_at: datetime
    user_id: int

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    expires_at: datetime
    user_id: int

    model_config = ConfigDict(from_attributes=True)


class RefreshTokenRequest(BaseModel):
    refresh_token: str
