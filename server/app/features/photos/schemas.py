"""
Схемы фото пользователей
"""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class PhotoCreate(BaseModel):
    url: str
    public_id: Optional[str] = None
    description: Optional[str] = None


class PhotoResponse(BaseModel):
    id: int
    user_id: int
    url: str
    public_id: Optional[str]
    description: Optional[str]
    date_added: datetime
    is_main: bool

    model_config = {"from_attributes": True}
