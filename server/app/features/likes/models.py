"""
Модель лайков между пользователями
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ...core.database import Base
from ...utils.timezone import TimezoneUtils


class Like(Base):
    """Направленная связь liker -> likee"""
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, index=True)
    liker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    likee_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at = Column(DateTime, default=TimezoneUtils.now_utc, nullable=False)

    liker = relationship("User", foreign_keys=[liker_id], back_populates="likees")
    likee = relationship("User", foreign_keys=[likee_id], back_populates="likers")

    # Один пользователь не может лайкнуть другого дважды
    __table_args__ = (
        UniqueConstraint('liker_id', 'likee_id', name='uix_liker_likee'),
    )

    def __repr__(self):
        return f"<Like {self.liker_id} -> {self.likee_id}>"
