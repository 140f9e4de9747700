"""
Модель фото пользователей
"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from ...core.database import Base
from ...utils.timezone import TimezoneUtils


class Photo(Base):
    """Фото профиля, сам файл лежит во внешнем хранилище"""
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    url = Column(String(500), nullable=False)
    public_id = Column(String(255), nullable=True)  # id объекта в хранилище
    description = Column(String(500), nullable=True)
    date_added = Column(DateTime, default=TimezoneUtils.now_utc, nullable=False)
    is_main = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="photos")

    def __repr__(self):
        return f"<Photo {self.id} - User {self.user_id}{' (main)' if self.is_main else ''}>"
