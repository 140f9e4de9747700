from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Literal, Optional

from ...core.pagination import PaginationParams
from ...utils.timezone import TimezoneUtils

DEFAULT_MIN_AGE = 18
DEFAULT_MAX_AGE = 99


# Схема регистрации профиля
class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=32, description="Логин пользователя")
    known_as: str = Field(..., min_length=1, max_length=64, description="Отображаемое имя")
    gender: Literal["male", "female"]
    date_of_birth: date
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        v = v.strip().lower()
        if not v.replace('_', '').replace('-', '').isalnum():
            raise ValueError(
                'Username может содержать только буквы, цифры, '
                'подчеркивания и дефисы'
            )
        return v

    @field_validator('known_as')
    @classmethod
    def validate_known_as(cls, v):
        if v.strip() == '':
            raise ValueError('Имя не может быть пустым')
        return v.strip()

    @field_validator('date_of_birth')
    @classmethod
    def validate_date_of_birth(cls, v):
        if TimezoneUtils.calculate_age(v) < DEFAULT_MIN_AGE:
            raise ValueError(f'Пользователь должен быть старше {DEFAULT_MIN_AGE} лет')
        return v


class UserUpdate(BaseModel):
    introduction: Optional[str] = None
    looking_for: Optional[str] = None
    interests: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)


class PhotoForDetailed(BaseModel):
    id: int
    url: str
    description: Optional[str]
    date_added: datetime
    is_main: bool

    model_config = {"from_attributes": True}


class UserForList(BaseModel):
    id: int
    username: str
    known_as: Optional[str]
    gender: str
    age: int
    created: datetime
    last_active: datetime
    city: Optional[str]
    country: Optional[str]
    photo_url: Optional[str]

    model_config = {"from_attributes": True}


class UserForDetailed(UserForList):
    introduction: Optional[str]
    looking_for: Optional[str]
    interests: Optional[str]
    photos: List[PhotoForDetailed]


class UserParams(PaginationParams):
    """Параметры фильтрации и сортировки списка пользователей"""
    user_id: int
    gender: Optional[str] = None
    likers: bool = False
    likees: bool = False
    min_age: int = DEFAULT_MIN_AGE
    max_age: int = DEFAULT_MAX_AGE
    order_by: Optional[str] = None

    @property
    def has_age_filter(self) -> bool:
        return self.min_age != DEFAULT_MIN_AGE or self.max_age != DEFAULT_MAX_AGE
