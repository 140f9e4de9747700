from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from ...core.database import Base
from ...utils.timezone import TimezoneUtils


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    known_as = Column(String(100), nullable=True)
    gender = Column(String(20), index=True, nullable=False)
    date_of_birth = Column(Date, index=True, nullable=False)
    introduction = Column(Text, nullable=True)
    looking_for = Column(Text, nullable=True)
    interests = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    created = Column(DateTime, default=TimezoneUtils.now_utc, nullable=False)
    last_active = Column(DateTime, default=TimezoneUtils.now_utc, index=True, nullable=False)

    # Связи
    photos = relationship(
        "Photo",
        back_populates="user",
        order_by="Photo.id",
        cascade="all, delete-orphan"
    )
    # Лайки, полученные пользователем (он - likee)
    likers = relationship(
        "Like",
        foreign_keys="Like.likee_id",
        back_populates="likee",
        cascade="all, delete-orphan"
    )
    # Лайки, поставленные пользователем (он - liker)
    likees = relationship(
        "Like",
        foreign_keys="Like.liker_id",
        back_populates="liker",
        cascade="all, delete-orphan"
    )

    @property
    def age(self) -> int:
        return TimezoneUtils.calculate_age(self.date_of_birth)

    @property
    def main_photo(self):
        return next((photo for photo in self.photos if photo.is_main), None)

    @property
    def photo_url(self):
        photo = self.main_photo
        return photo.url if photo else None

    def __repr__(self):
        return f"<User {self.id} - {self.username}>"
