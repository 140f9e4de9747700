from sqlalchemy.orm import Session, selectinload
from typing import Optional, Set
import logging

from .models import Like
from ..user.models import User

logger = logging.getLogger(__name__)


class LikeCRUD:
    def __init__(self, db: Session):
        self.db = db

    def get_like(self, user_id: int, recipient_id: int) -> Optional[Like]:
        """Лайк user_id -> recipient_id, если он есть"""
        return self.db.query(Like).filter(
            Like.liker_id == user_id,
            Like.likee_id == recipient_id
        ).first()

    def add_like(self, user_id: int, recipient_id: int) -> Like:
        """Поставить лайк"""
        try:
            like = Like(liker_id=user_id, likee_id=recipient_id)
            self.db.add(like)
            self.db.commit()
            self.db.refresh(like)
            logger.info(f"Пользователь {user_id} лайкнул {recipient_id}")
            return like
        except Exception as e:
            self.db.rollback()
            logger.error(f"Ошибка сохранения лайка {user_id} -> {recipient_id}: {e}")
            raise

    def get_user_likes(self, user_id: int, likers: bool) -> Set[int]:
        """
        Множество id пользователей, связанных лайками с user_id.

        likers=True  - кто лайкнул пользователя
        likers=False - кого лайкнул пользователь
        """
        user = self.db.query(User).options(
            selectinload(User.likers),
            selectinload(User.likees)
        ).filter(User.id == user_id).first()

        if not user:
            return set()

        if likers:
            return {like.liker_id for like in user.likers if like.likee_id == user_id}
        return {like.likee_id for like in user.likees if like.liker_id == user_id}
