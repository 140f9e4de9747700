"""
API endpoints для лайков
"""
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from .crud import LikeCRUD
from .schemas import LikeResponse
from ..user.activity import log_user_activity
from ..user.crud import UserCRUD
from ...core.database import get_db
from ...core.security import get_current_user_id, ensure_same_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/{user_id}/like",
    tags=["likes"],
    dependencies=[Depends(log_user_activity)],
)


@router.post("/{recipient_id}", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
async def like_user(
    user_id: int,
    recipient_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Лайкнуть пользователя"""
    ensure_same_user(user_id, current_user_id)

    if user_id == recipient_id:
        raise HTTPException(status_code=400, detail="Нельзя лайкнуть самого себя")

    like_crud = LikeCRUD(db)
    if like_crud.get_like(user_id, recipient_id):
        raise HTTPException(status_code=400, detail="Вы уже лайкнули этого пользователя")

    if not UserCRUD(db).get_user(recipient_id):
        raise HTTPException(status_code=404, detail=f"Пользователь с id {recipient_id} не найден")

    try:
        return like_crud.add_like(user_id, recipient_id)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Вы уже лайкнули этого пользователя")
