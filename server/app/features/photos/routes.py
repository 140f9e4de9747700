"""
API endpoints для работы с фото пользователей
"""
from fastapi import APIRouter, HTTPException, Depends, File, Form, UploadFile, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
import logging

from .crud import PhotoCRUD
from .models import Photo
from .schemas import PhotoCreate, PhotoResponse
from ..user.activity import log_user_activity
from ..user.crud import UserCRUD
from ...core.database import get_db
from ...core.security import get_current_user_id, ensure_same_user
from ...services.media_storage import MediaStorage, MediaStorageError, get_media_storage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/{user_id}/photos",
    tags=["photos"],
    dependencies=[Depends(log_user_activity)],
)


def get_user_photo(photo_crud: PhotoCRUD, user_id: int, photo_id: int) -> Photo:
    """Фото из БД, принадлежащее user_id"""
    photo = photo_crud.get_photo(photo_id)
    if not photo:
        raise HTTPException(status_code=404, detail="Photo not found")
    if photo.user_id != user_id:
        raise HTTPException(status_code=401, detail="Фото принадлежит другому пользователю")
    return photo


@router.get("/{photo_id}", response_model=PhotoResponse, name="get_photo")
async def get_photo(user_id: int, photo_id: int, db: Session = Depends(get_db)):
    """Получить фото пользователя"""
    return get_user_photo(PhotoCRUD(db), user_id, photo_id)


@router.post("/", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def add_photo_for_user(
    user_id: int,
    response: Response,
    file: UploadFile = File(...),
    description: Optional[str] = Form(None),
    current_user_id: int = Depends(get_current_user_id),
    storage: MediaStorage = Depends(get_media_storage),
    db: Session = Depends(get_db)
):
    """Загрузить фото в хранилище и привязать к профилю"""
    ensure_same_user(user_id, current_user_id)

    if not UserCRUD(db).get_user(user_id):
        raise HTTPException(status_code=404, detail=f"Пользователь с id {user_id} не найден")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Пустой файл")

    try:
        uploaded = storage.upload_photo(user_id, content, file.filename, file.content_type)
    except MediaStorageError as e:
        logger.error(f"Ошибка загрузки фото пользователя {user_id} в хранилище: {e}")
        raise HTTPException(status_code=502, detail="Не удалось загрузить фото")

    try:
        photo = PhotoCRUD(db).add_photo(
            user_id,
            PhotoCreate(url=uploaded.url, public_id=uploaded.public_id, description=description)
        )
    except SQLAlchemyError as e:
        logger.error(f"Фото {uploaded.public_id} не сохранено в БД, удаляем из хранилища: {e}")
        try:
            storage.delete_photo(uploaded.public_id)
        except MediaStorageError as cleanup_error:
            logger.error(f"Не удалось удалить {uploaded.public_id} из хранилища: {cleanup_error}")
        raise HTTPException(status_code=500, detail="Не удалось сохранить фото")

    response.headers["Location"] = router.url_path_for("get_photo", user_id=str(user_id), photo_id=str(photo.id))
    return photo


@router.post("/{photo_id}/setMain", status_code=status.HTTP_204_NO_CONTENT)
async def set_main_photo(
    user_id: int,
    photo_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Сделать фото главным"""
    ensure_same_user(user_id, current_user_id)

    photo_crud = PhotoCRUD(db)
    photo = get_user_photo(photo_crud, user_id, photo_id)
    if photo.is_main:
        raise HTTPException(status_code=400, detail="Это фото уже главное")

    photo_crud.set_main_photo(photo)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{photo_id}")
async def delete_photo(
    user_id: int,
    photo_id: int,
    current_user_id: int = Depends(get_current_user_id),
    storage: MediaStorage = Depends(get_media_storage),
    db: Session = Depends(get_db)
):
    """Удалить фото из хранилища и из профиля"""
    ensure_same_user(user_id, current_user_id)

    photo_crud = PhotoCRUD(db)
    photo = get_user_photo(photo_crud, user_id, photo_id)
    if photo.is_main:
        raise HTTPException(status_code=400, detail="Нельзя удалить главное фото")

    if photo.public_id:
        try:
            storage.delete_photo(photo.public_id)
        except MediaStorageError as e:
            logger.error(f"Ошибка удаления фото {photo_id} из хранилища: {e}")
            raise HTTPException(status_code=502, detail="Не удалось удалить фото")

    photo_crud.delete_photo(photo)
    return {"status": "ok", "message": "Photo deleted"}
