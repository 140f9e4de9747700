"""
Ядро приложения - настройки и инфраструктура.

Этот модуль содержит основные компоненты приложения:
- config: настройки приложения и переменные окружения
- database: подключение к базе данных
- middleware: промежуточное ПО (CORS, логирование, API ключ)
- pagination: постраничная выдача результатов запросов
- security: определение текущего пользователя
"""

from .config import settings
from .database import get_db, init_db
from .middleware import setup_middleware, setup_exception_handlers
from .pagination import PagedList
from .security import get_current_user_id

__all__ = [
    "settings",
    "get_db",
    "init_db",
    "setup_middleware",
    "setup_exception_handlers",
    "PagedList",
    "get_current_user_id",
]
