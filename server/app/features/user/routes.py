from fastapi import APIRouter, Depends, HTTPException, Query, status, Response
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from typing import Literal, Optional
import logging

from ...core.database import get_db
from ...core.config import settings
from ...core.pagination import PagedResponse
from ...core.security import get_current_user_id, ensure_same_user
from .activity import log_user_activity
from .schemas import (
    UserCreate, UserUpdate, UserParams, UserForList, UserForDetailed,
    DEFAULT_MIN_AGE, DEFAULT_MAX_AGE,
)
from .crud import UserCRUD

logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/users", tags=["users"])


def opposite_gender(gender: str) -> str:
    return "female" if gender == "male" else "male"


# === ПОЛЬЗОВАТЕЛИ ===

@user_router.post(
    "/",
    response_model=UserForDetailed,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Зарегистрировать новый профиль.
    """
    user_crud = UserCRUD(db)
    if user_crud.get_user_by_username(user_data.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Пользователь {user_data.username} уже существует"
        )

    try:
        user = user_crud.create_user(user_data)
        logger.info(f"API: Зарегистрирован пользователь id={user.id}")
        return user
    except IntegrityError as e:
        logger.error(f"API: Ошибка целостности данных для {user_data.username}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Конфликт данных: возможно, пользователь уже существует"
        )
    except SQLAlchemyError as e:
        logger.error(f"API: Ошибка базы данных: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Ошибка базы данных"
        )


@user_router.get(
    "/",
    response_model=PagedResponse[UserForList],
    dependencies=[Depends(log_user_activity)],
)
async def get_users(
    gender: Optional[Literal["male", "female"]] = Query(None, description="Пол (по умолчанию противоположный)"),
    likers: bool = Query(False, description="Только те, кто лайкнул меня"),
    likees: bool = Query(False, description="Только те, кого лайкнул я"),
    min_age: int = Query(DEFAULT_MIN_AGE, ge=DEFAULT_MIN_AGE, le=DEFAULT_MAX_AGE),
    max_age: int = Query(DEFAULT_MAX_AGE, ge=DEFAULT_MIN_AGE, le=DEFAULT_MAX_AGE),
    order_by: Optional[Literal["created", "lastActive"]] = Query(None, description="Сортировка"),
    page_number: int = Query(1, description="Номер страницы"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, description="Размер страницы"),
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Список пользователей с фильтрами и пагинацией.
    """
    user_crud = UserCRUD(db)

    if gender is None:
        current_user = user_crud.get_user(current_user_id)
        if current_user:
            gender = opposite_gender(current_user.gender)

    params = UserParams(
        user_id=current_user_id,
        gender=gender,
        likers=likers,
        likees=likees,
        min_age=min_age,
        max_age=max_age,
        order_by=order_by,
        page_number=page_number,
        page_size=page_size,
    )

    try:
        users = user_crud.get_users(params)
    except SQLAlchemyError as e:
        logger.error(f"API: Ошибка базы данных при получении списка: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Ошибка базы данных"
        )

    logger.info(
        f"API: Список пользователей для {current_user_id}: "
        f"страница {users.current_page}/{users.total_pages}, всего {users.total_count}"
    )
    return users


@user_router.get(
    "/{user_id}",
    response_model=UserForDetailed,
    dependencies=[Depends(log_user_activity)],
)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db)
):
    """
    Получить профиль пользователя с фото.
    """
    user = UserCRUD(db).get_user(user_id)
    if not user:
        logger.warning(f"API: Пользователь не найден: id={user_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Пользователь с id {user_id} не найден"
        )
    return user


@user_router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(log_user_activity)],
)
async def update_user(
    user_id: int,
    update_data: UserUpdate,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Обновить свой профиль.
    """
    ensure_same_user(user_id, current_user_id)

    try:
        user = UserCRUD(db).update_user(user_id, update_data)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"API: Ошибка обновления пользователя {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Не удалось обновить пользователя {user_id}"
        )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Пользователь с id {user_id} не найден"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
