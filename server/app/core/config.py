import os
from typing import List
import logging


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default: str = "*") -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Settings:
    """
    Настройки сервиса знакомств из переменных окружения (.env подхватывает main.py)
    """

    APP_NAME: str = "Dating App Backend API"
    APP_DESCRIPTION: str = "API для профилей, фото, лайков и сообщений"
    APP_VERSION: str = "1.0.0"

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = _env_bool("DEBUG", "False")

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./dating.db")

    # Доступ к API: общий ключ шлюза, id пользователя приходит в X-User-Id
    API_SECRET_KEY: str = os.getenv("API_SECRET_KEY")
    CORS_ORIGINS: List[str] = _env_list("CORS_ORIGINS")
    CORS_ALLOW_CREDENTIALS: bool = _env_bool("CORS_ALLOW_CREDENTIALS", "True")
    TRUSTED_HOSTS: List[str] = _env_list("TRUSTED_HOSTS")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Страницы списков пользователей и сообщений
    MAX_PAGE_SIZE: int = max(int(os.getenv("MAX_PAGE_SIZE", "50")), 1)
    DEFAULT_PAGE_SIZE: int = min(max(int(os.getenv("DEFAULT_PAGE_SIZE", "10")), 1), MAX_PAGE_SIZE)

    # Хранилище фото профилей
    MINIO_ENDPOINT: str = os.getenv("MINIO_ENDPOINT", "minio:9000")
    MINIO_ACCESS_KEY: str = os.getenv("MINIO_ACCESS_KEY", "minioadmin")
    MINIO_SECRET_KEY: str = os.getenv("MINIO_SECRET_KEY", "minioadmin")
    MINIO_BUCKET_NAME: str = os.getenv("MINIO_BUCKET_NAME", "profile-photos")
    MINIO_PUBLIC_URL: str = os.getenv("MINIO_PUBLIC_URL", "http://localhost:9000")
    MINIO_SECURE: bool = _env_bool("MINIO_SECURE", "False")

    def setup_logging(self):
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL.upper()),
            format=self.LOG_FORMAT
        )

        if self.DEBUG:
            # В отладке видны SQL запросы фильтров и пагинации
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
            logging.getLogger("uvicorn.access").setLevel(logging.DEBUG)

        if not self.API_SECRET_KEY:
            logging.getLogger(__name__).warning("API_SECRET_KEY не задан, все закрытые запросы получат 403")

    def get_cors_config(self) -> dict:
        return {
            "allow_origins": self.CORS_ORIGINS,
            "allow_credentials": self.CORS_ALLOW_CREDENTIALS,
            "allow_methods": ["GET", "POST", "PUT", "DELETE"],
            "allow_headers": ["*"],
        }

    def get_trusted_hosts_config(self) -> dict:
        return {"allowed_hosts": self.TRUSTED_HOSTS}

    def get_app_config(self) -> dict:
        """
        Параметры FastAPI приложения
        """
        return {
            "title": self.APP_NAME,
            "description": self.APP_DESCRIPTION,
            "version": self.APP_VERSION,
            "debug": self.DEBUG
        }

    def get_minio_config(self) -> dict:
        """
        Параметры клиента MinIO
        """
        return {
            "endpoint": self.MINIO_ENDPOINT,
            "access_key": self.MINIO_ACCESS_KEY,
            "secret_key": self.MINIO_SECRET_KEY,
            "secure": self.MINIO_SECURE,
        }


settings = Settings()

settings.setup_logging()
