from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ...core.database import Base
from ...utils.timezone import TimezoneUtils


class Message(Base):
    """Сообщение между двумя пользователями"""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    date_read = Column(DateTime, nullable=True)
    message_sent = Column(DateTime, default=TimezoneUtils.now_utc, index=True, nullable=False)
    # Мягкое удаление: каждая сторона скрывает сообщение только у себя
    sender_deleted = Column(Boolean, default=False, nullable=False)
    recipient_deleted = Column(Boolean, default=False, nullable=False)

    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    def __repr__(self):
        return f"<Message {self.id}: {self.sender_id} -> {self.recipient_id}>"
