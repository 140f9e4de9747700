from sqlalchemy.orm import Session, Query, selectinload
from typing import Optional
import logging

from .models import User
from .schemas import UserCreate, UserUpdate, UserParams
from ..likes.crud import LikeCRUD
from ...core.pagination import PagedList
from ...utils.timezone import TimezoneUtils

logger = logging.getLogger(__name__)


class UserCRUD:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[User]:
        """Получить пользователя вместе с фото"""
        return self.db.query(User).options(
            selectinload(User.photos)
        ).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def create_user(self, user_data: UserCreate) -> User:
        """Создать новый профиль"""
        try:
            user = User(**user_data.model_dump())
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            logger.info(f"Создан пользователь: {user.id} ({user.username})")
            return user
        except Exception as e:
            self.db.rollback()
            logger.error(f"Ошибка создания пользователя {user_data.username}: {e}")
            raise

    def update_user(self, user_id: int, update_data: UserUpdate) -> Optional[User]:
        """Обновить профиль, только переданные поля"""
        user = self.get_user(user_id)
        if not user:
            return None

        for field, value in update_data.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Обновлен пользователь: {user_id}")
        return user

    def touch_last_active(self, user_id: int) -> bool:
        """Отметить активность пользователя. False, если его нет"""
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            return False

        user.last_active = TimezoneUtils.now_utc()
        self.db.commit()
        return True

    def get_users(self, params: UserParams) -> PagedList[User]:
        """Список пользователей с фильтрами, сортировкой и пагинацией"""
        query = self.db.query(User).options(selectinload(User.photos))
        query = self._apply_filters(query, params)
        query = self._apply_ordering(query, params)
        return PagedList.create(query, params.page_number, params.page_size)

    def _apply_filters(self, query: Query, params: UserParams) -> Query:
        # Себя в выдаче не показываем
        query = query.filter(User.id != params.user_id)

        if params.gender:
            query = query.filter(User.gender == params.gender)

        if params.likers or params.likees:
            like_crud = LikeCRUD(self.db)

            if params.likers:
                liker_ids = like_crud.get_user_likes(params.user_id, likers=True)
                query = query.filter(User.id.in_(list(liker_ids)))

            if params.likees:
                likee_ids = like_crud.get_user_likes(params.user_id, likers=False)
                query = query.filter(User.id.in_(list(likee_ids)))

        if params.has_age_filter:
            min_dob = TimezoneUtils.years_ago(params.max_age + 1)
            max_dob = TimezoneUtils.years_ago(params.min_age)
            query = query.filter(
                User.date_of_birth >= min_dob,
                User.date_of_birth <= max_dob
            )

        return query

    @staticmethod
    def _apply_ordering(query: Query, params: UserParams) -> Query:
        if params.order_by == "created":
            return query.order_by(User.created.desc(), User.id.desc())
        return query.order_by(User.last_active.desc(), User.id.desc())
