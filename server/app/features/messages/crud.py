from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, Query, selectinload
from typing import List, Optional
import logging

from .models import Message
from .schemas import MessageCreate, MessageParams
from ..user.models import User
from ...core.pagination import PagedList
from ...utils.timezone import TimezoneUtils

logger = logging.getLogger(__name__)


class MessageCRUD:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        # Отправитель и получатель подгружаются вместе с фото для ответа API
        return self.db.query(Message).options(
            selectinload(Message.sender).selectinload(User.photos),
            selectinload(Message.recipient).selectinload(User.photos),
        )

    def get_message(self, message_id: int) -> Optional[Message]:
        return self._base_query().filter(Message.id == message_id).first()

    def create_message(self, sender_id: int, message_data: MessageCreate) -> Message:
        """Отправить сообщение"""
        try:
            message = Message(
                sender_id=sender_id,
                recipient_id=message_data.recipient_id,
                content=message_data.content
            )
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
            logger.info(f"Сообщение {message.id}: {sender_id} -> {message_data.recipient_id}")
            return message
        except Exception as e:
            self.db.rollback()
            logger.error(f"Ошибка отправки сообщения от {sender_id}: {e}")
            raise

    def get_messages_for_user(self, params: MessageParams) -> PagedList[Message]:
        """
        Сообщения пользователя по папке:
        Inbox - входящие, Outbox - исходящие, иначе - непрочитанные входящие.
        """
        query = self._base_query()

        if params.message_container == "Inbox":
            query = query.filter(
                Message.recipient_id == params.user_id,
                Message.recipient_deleted == False
            )
        elif params.message_container == "Outbox":
            query = query.filter(
                Message.sender_id == params.user_id,
                Message.sender_deleted == False
            )
        else:
            query = query.filter(
                Message.recipient_id == params.user_id,
                Message.is_read == False,
                Message.recipient_deleted == False
            )

        query = query.order_by(Message.message_sent.desc(), Message.id.desc())
        return PagedList.create(query, params.page_number, params.page_size)

    def get_message_thread(self, user_id: int, recipient_id: int) -> List[Message]:
        """
        Переписка двух пользователей с точки зрения user_id.
        Сообщения, удаленные пользователем со своей стороны, не попадают.
        """
        return self._base_query().filter(
            or_(
                and_(
                    Message.recipient_id == user_id,
                    Message.sender_id == recipient_id,
                    Message.recipient_deleted == False
                ),
                and_(
                    Message.recipient_id == recipient_id,
                    Message.sender_id == user_id,
                    Message.sender_deleted == False
                )
            )
        ).order_by(Message.message_sent.desc(), Message.id.desc()).all()

    def delete_message(self, message: Message, user_id: int) -> bool:
        """
        Скрыть сообщение со стороны user_id.
        Запись удаляется, когда его скрыли обе стороны. Возвращает True,
        если запись удалена из БД.
        """
        if message.sender_id == user_id:
            message.sender_deleted = True
        if message.recipient_id == user_id:
            message.recipient_deleted = True

        removed = message.sender_deleted and message.recipient_deleted
        if removed:
            self.db.delete(message)

        self.db.commit()
        logger.info(f"Сообщение {message.id} удалено пользователем {user_id} (из БД: {removed})")
        return removed

    def mark_as_read(self, message: Message) -> Message:
        if not message.is_read:
            message.is_read = True
            message.date_read = TimezoneUtils.now_utc()
            self.db.commit()
            self.db.refresh(message)
        return message
