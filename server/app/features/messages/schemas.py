from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Literal, Optional

from ...core.pagination import PaginationParams

MessageContainer = Literal["Inbox", "Outbox", "Unread"]


class MessageCreate(BaseModel):
    recipient_id: int = Field(..., gt=0)
    content: str = Field(..., min_length=1, max_length=4000)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if v.strip() == '':
            raise ValueError('Сообщение не может быть пустым')
        return v


class MessageParticipant(BaseModel):
    id: int
    known_as: Optional[str]
    photo_url: Optional[str]

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    recipient_id: int
    content: str
    is_read: bool
    date_read: Optional[datetime]
    message_sent: datetime
    sender: MessageParticipant
    recipient: MessageParticipant

    model_config = {"from_attributes": True}


class MessageParams(PaginationParams):
    """Параметры выборки сообщений пользователя"""
    user_id: int
    message_container: MessageContainer = "Unread"
