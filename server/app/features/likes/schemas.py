"""
Схемы ответа для лайков
"""
from pydantic import BaseModel
from datetime import datetime


class LikeResponse(BaseModel):
    id: int
    liker_id: int
    likee_id: int
    created_at: datetime

    model_config = {"from_attributes": True}
