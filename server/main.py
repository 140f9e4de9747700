from fastapi import FastAPI
from dotenv import load_dotenv
import os

# Загружаем переменные окружения из корневого .env файла
# В Docker переменные окружения уже установлены через docker-compose.yml
env_file = os.path.join(os.path.dirname(__file__), '..', '.env')
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    load_dotenv(override=False)

from app.core.config import settings
from app.core.middleware import setup_middleware, setup_exception_handlers
from app.core.database import init_db
from app.features.system.routes import system_router
from app.features.user.routes import user_router
from app.features.likes.routes import router as likes_router
from app.features.photos.routes import router as photos_router
from app.features.messages.routes import router as messages_router

# Импортируем модели для создания таблиц
from app.features.user.models import User
from app.features.photos.models import Photo
from app.features.likes.models import Like
from app.features.messages.models import Message

# Создаем FastAPI приложение с настройками из config
app = FastAPI(**settings.get_app_config())

# Инициализируем базу данных ПОСЛЕ импорта всех моделей
init_db()

# Настраиваем middleware
setup_middleware(app)

# Настраиваем обработчики исключений
setup_exception_handlers(app)

# Подключаем роутеры
app.include_router(system_router)
app.include_router(user_router)
app.include_router(likes_router)
app.include_router(photos_router)
app.include_router(messages_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
