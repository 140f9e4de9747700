import pytest
import os
from datetime import date, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from unittest.mock import Mock

# Окружение для тестов задается до импорта приложения
os.environ.setdefault("API_SECRET_KEY", "test-secret-key-for-development")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

# Импорты из приложения
from app.core.database import Base, get_db
from app.features.user.models import User
from app.features.photos.models import Photo
from app.features.likes.models import Like
from app.features.messages.models import Message
from app.services.media_storage import MediaStorage, UploadResult, get_media_storage
from app.utils.timezone import TimezoneUtils
from main import app

# Настройка тестовой базы данных
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Переопределяем зависимость get_db для тестов"""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


# Подменяем зависимость
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def db_session():
    """Фикстура для создания тестовой сессии БД"""
    # Очищаем и создаем таблицы заново
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


class TestClientWithAuth:
    """Обертка над TestClient: API ключ и X-User-Id в каждом запросе"""

    def __init__(self, client):
        self.client = client
        self.headers = {
            "X-API-SECRET-KEY": os.getenv("API_SECRET_KEY")
        }

    def _request(self, method, url, user_id=None, **kwargs):
        headers = {**self.headers, **kwargs.pop("headers", {})}
        if user_id is not None:
            headers["X-User-Id"] = str(user_id)
        return self.client.request(method, url, headers=headers, **kwargs)

    def get(self, url, user_id=None, **kwargs):
        return self._request("GET", url, user_id, **kwargs)

    def post(self, url, user_id=None, **kwargs):
        return self._request("POST", url, user_id, **kwargs)

    def put(self, url, user_id=None, **kwargs):
        return self._request("PUT", url, user_id, **kwargs)

    def delete(self, url, user_id=None, **kwargs):
        return self._request("DELETE", url, user_id, **kwargs)


@pytest.fixture(scope="function")
def client(db_session):
    """Фикстура для тестового клиента FastAPI"""
    with TestClient(app) as test_client:
        yield TestClientWithAuth(test_client)


@pytest.fixture
def raw_client(db_session):
    """Клиент без заголовков авторизации"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_storage():
    """Фикстура с моком внешнего хранилища фото"""
    storage = Mock(spec=MediaStorage)
    storage.upload_photo.side_effect = lambda user_id, content, filename=None, content_type=None: UploadResult(
        url=f"http://media.test/profile-photos/{user_id}/{filename}",
        public_id=f"user_photos/{user_id}/{filename}"
    )
    app.dependency_overrides[get_media_storage] = lambda: storage
    yield storage
    app.dependency_overrides.pop(get_media_storage, None)


@pytest.fixture
def make_user(db_session):
    """Фабрика пользователей в БД"""
    counter = {"value": 0}

    def _make_user(gender="female", age=25, date_of_birth=None, **kwargs):
        counter["value"] += 1
        data = {
            "username": f"user{counter['value']}",
            "known_as": f"User {counter['value']}",
            "gender": gender,
            "date_of_birth": date_of_birth or TimezoneUtils.years_ago(age) - timedelta(days=10),
        }
        data.update(kwargs)
        user = User(**data)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def sample_user_data():
    """Фикстура с тестовыми данными для регистрации"""
    return {
        "username": "anna_k",
        "known_as": "Анна",
        "gender": "female",
        "date_of_birth": (date.today() - timedelta(days=365 * 27)).isoformat(),
        "city": "Москва",
        "country": "Россия"
    }


@pytest.fixture
def couple(make_user):
    """Двое пользователей разного пола"""
    return make_user(gender="male", username="ivan"), make_user(gender="female", username="maria")


@pytest.fixture
def make_message(db_session):
    """Фабрика сообщений в БД"""

    def _make_message(sender, recipient, content="Привет!", **kwargs):
        message = Message(sender_id=sender.id, recipient_id=recipient.id, content=content, **kwargs)
        db_session.add(message)
        db_session.commit()
        db_session.refresh(message)
        return message

    return _make_message


@pytest.fixture
def make_like(db_session):
    def _make_like(liker, likee):
        like = Like(liker_id=liker.id, likee_id=likee.id)
        db_session.add(like)
        db_session.commit()
        return like

    return _make_like


@pytest.fixture
def make_photo(db_session):
    def _make_photo(user, is_main=False, **kwargs):
        photo = Photo(
            user_id=user.id,
            url=kwargs.pop("url", f"http://media.test/{user.id}/photo.jpg"),
            is_main=is_main,
            **kwargs
        )
        db_session.add(photo)
        db_session.commit()
        db_session.refresh(photo)
        return photo

    return _make_photo
