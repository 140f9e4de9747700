from sqlalchemy.orm import Session
from typing import Optional
import logging

from .models import Photo
from .schemas import PhotoCreate

logger = logging.getLogger(__name__)


class PhotoCRUD:
    def __init__(self, db: Session):
        self.db = db

    def get_photo(self, photo_id: int) -> Optional[Photo]:
        return self.db.query(Photo).filter(Photo.id == photo_id).first()

    def get_main_photo_for_user(self, user_id: int) -> Optional[Photo]:
        return self.db.query(Photo).filter(
            Photo.user_id == user_id,
            Photo.is_main == True
        ).first()

    def add_photo(self, user_id: int, photo_data: PhotoCreate) -> Photo:
        """
        Сохранить фото. Первое фото пользователя становится главным.
        """
        try:
            photo = Photo(user_id=user_id, **photo_data.model_dump())
            photo.is_main = self.get_main_photo_for_user(user_id) is None
            self.db.add(photo)
            self.db.commit()
            self.db.refresh(photo)
            logger.info(f"Добавлено фото {photo.id} пользователю {user_id} (main={photo.is_main})")
            return photo
        except Exception as e:
            self.db.rollback()
            logger.error(f"Ошибка сохранения фото пользователя {user_id}: {e}")
            raise

    def set_main_photo(self, photo: Photo) -> Photo:
        """Сделать фото главным, предыдущее главное снимается"""
        current_main = self.get_main_photo_for_user(photo.user_id)
        if current_main and current_main.id != photo.id:
            current_main.is_main = False

        photo.is_main = True
        self.db.commit()
        self.db.refresh(photo)
        logger.info(f"Фото {photo.id} стало главным у пользователя {photo.user_id}")
        return photo

    def delete_photo(self, photo: Photo):
        self.db.delete(photo)
        self.db.commit()
        logger.info(f"Удалено фото {photo.id} пользователя {photo.user_id}")
