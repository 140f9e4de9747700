"""
Постраничная выдача результатов.

PagedList оборачивает одну страницу упорядоченного набора записей и
метаданные: номер страницы, размер страницы, общее количество и число
страниц. Работает с любым запросом SQLAlchemy (count + offset/limit) и с
обычными последовательностями (len + срез).
"""
import math
from typing import Generic, List, Sequence, TypeVar, Union

from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Query

from .config import settings

T = TypeVar("T")


class PagedList(Generic[T]):
    """Одна страница результата с метаданными пагинации"""

    def __init__(self, items: List[T], total_count: int, page_number: int, page_size: int):
        self.items = items
        self.total_count = total_count
        self.current_page = page_number
        self.page_size = page_size
        self.total_pages = math.ceil(total_count / page_size)

    @classmethod
    def create(
        cls,
        source: Union[Query, Sequence[T]],
        page_number: int,
        page_size: int
    ) -> "PagedList[T]":
        """
        Посчитать весь набор один раз и вырезать нужную страницу.

        Корректность номера и размера страницы проверяет вызывающий код.
        """
        offset = (page_number - 1) * page_size

        if isinstance(source, Query):
            total_count = source.count()
            items = source.offset(offset).limit(page_size).all()
        else:
            total_count = len(source)
            items = list(source[offset:offset + page_size])

        return cls(items, total_count, page_number, page_size)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self):
        return (
            f"<PagedList page={self.current_page}/{self.total_pages} "
            f"size={self.page_size} total={self.total_count}>"
        )


class PagedResponse(BaseModel, Generic[T]):
    """Схема ответа API для PagedList"""
    items: List[T]
    current_page: int
    page_size: int
    total_count: int
    total_pages: int

    model_config = {"from_attributes": True}


class PaginationParams(BaseModel):
    """
    Номер и размер страницы из запроса.
    Значения вне диапазона не отклоняются, а приводятся к допустимым.
    """
    page_number: int = 1
    page_size: int = settings.DEFAULT_PAGE_SIZE

    @field_validator('page_number')
    @classmethod
    def clamp_page_number(cls, v):
        return max(v, 1)

    @field_validator('page_size')
    @classmethod
    def clamp_page_size(cls, v):
        if v < 1:
            return settings.DEFAULT_PAGE_SIZE
        return min(v, settings.MAX_PAGE_SIZE)
