"""
Сервис хранения фото во внешнем хранилище (MinIO / S3-совместимое).

Хранилище выдает публичный URL и идентификатор объекта (public_id),
по которому фото потом удаляется.
"""
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from typing import Optional
from uuid import uuid4
import logging
import os

from minio import Minio
from minio.error import S3Error

from ..core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"


class MediaStorageError(Exception):
    """Ошибка внешнего хранилища фото"""


@dataclass
class UploadResult:
    url: str
    public_id: str


class MediaStorage:
    """Загрузка и удаление фото пользователей"""

    def __init__(self, client: Minio, bucket_name: str, public_url: str):
        self.client = client
        self.bucket_name = bucket_name
        self.public_url = public_url.rstrip("/")
        self._bucket_checked = False

    def _ensure_bucket(self):
        if self._bucket_checked:
            return
        if not self.client.bucket_exists(self.bucket_name):
            self.client.make_bucket(self.bucket_name)
            logger.info(f"Создан bucket {self.bucket_name}")
        self._bucket_checked = True

    def build_public_id(self, user_id: int, filename: Optional[str]) -> str:
        extension = os.path.splitext(filename or "")[1].lower() or ".jpg"
        return f"user_photos/{user_id}/{uuid4().hex}{extension}"

    def build_url(self, public_id: str) -> str:
        return f"{self.public_url}/{self.bucket_name}/{public_id}"

    def upload_photo(
        self,
        user_id: int,
        content: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None
    ) -> UploadResult:
        """Загрузить фото и вернуть URL и public_id"""
        public_id = self.build_public_id(user_id, filename)
        try:
            self._ensure_bucket()
            self.client.put_object(
                self.bucket_name,
                public_id,
                data=BytesIO(content),
                length=len(content),
                content_type=content_type or DEFAULT_CONTENT_TYPE
            )
        except S3Error as e:
            raise MediaStorageError(f"Не удалось загрузить {public_id}: {e}") from e
        logger.info(f"Фото пользователя {user_id} загружено: {public_id} ({len(content)} байт)")
        return UploadResult(url=self.build_url(public_id), public_id=public_id)

    def delete_photo(self, public_id: str):
        """Удалить фото из хранилища"""
        try:
            self.client.remove_object(self.bucket_name, public_id)
        except S3Error as e:
            raise MediaStorageError(f"Не удалось удалить {public_id}: {e}") from e
        logger.info(f"Фото удалено из хранилища: {public_id}")


@lru_cache
def get_media_storage() -> MediaStorage:
    client = Minio(**settings.get_minio_config())
    return MediaStorage(client, settings.MINIO_BUCKET_NAME, settings.MINIO_PUBLIC_URL)
