"""
API endpoints для сообщений
"""
from fastapi import APIRouter, HTTPException, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List
import logging

from .crud import MessageCRUD
from .schemas import MessageContainer, MessageCreate, MessageResponse, MessageParams
from ..user.activity import log_user_activity
from ..user.crud import UserCRUD
from ...core.config import settings
from ...core.database import get_db
from ...core.pagination import PagedResponse
from ...core.security import get_current_user_id, ensure_same_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/{user_id}/messages",
    tags=["messages"],
    dependencies=[Depends(log_user_activity)],
)


@router.get("/thread/{recipient_id}", response_model=List[MessageResponse])
async def get_message_thread(
    user_id: int,
    recipient_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Переписка с другим пользователем, новые сверху"""
    ensure_same_user(user_id, current_user_id)
    return MessageCRUD(db).get_message_thread(user_id, recipient_id)


@router.get("/", response_model=PagedResponse[MessageResponse])
async def get_messages_for_user(
    user_id: int,
    message_container: MessageContainer = Query("Unread", description="Папка"),
    page_number: int = Query(1, description="Номер страницы"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, description="Размер страницы"),
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Сообщения пользователя из папки с пагинацией"""
    ensure_same_user(user_id, current_user_id)

    params = MessageParams(
        user_id=user_id,
        message_container=message_container,
        page_number=page_number,
        page_size=page_size,
    )
    messages = MessageCRUD(db).get_messages_for_user(params)
    logger.info(
        f"API: {message_container} пользователя {user_id}: "
        f"страница {messages.current_page}/{messages.total_pages}, всего {messages.total_count}"
    )
    return messages


@router.get("/{message_id}", response_model=MessageResponse, name="get_message")
async def get_message(
    user_id: int,
    message_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Получить сообщение"""
    ensure_same_user(user_id, current_user_id)

    message = MessageCRUD(db).get_message(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    if user_id not in (message.sender_id, message.recipient_id):
        raise HTTPException(status_code=401, detail="Нет доступа к сообщению")
    return message


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    user_id: int,
    message_data: MessageCreate,
    response: Response,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Отправить сообщение"""
    ensure_same_user(user_id, current_user_id)

    if not UserCRUD(db).get_user(message_data.recipient_id):
        raise HTTPException(status_code=400, detail="Получатель не найден")

    message_crud = MessageCRUD(db)
    message = message_crud.create_message(user_id, message_data)
    response.headers["Location"] = router.url_path_for(
        "get_message", user_id=str(user_id), message_id=str(message.id)
    )
    return message_crud.get_message(message.id)


@router.post("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    user_id: int,
    message_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Удалить сообщение со своей стороны"""
    ensure_same_user(user_id, current_user_id)

    message_crud = MessageCRUD(db)
    message = message_crud.get_message(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    if user_id not in (message.sender_id, message.recipient_id):
        raise HTTPException(status_code=401, detail="Нет доступа к сообщению")

    message_crud.delete_message(message, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_message_as_read(
    user_id: int,
    message_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Отметить входящее сообщение прочитанным"""
    ensure_same_user(user_id, current_user_id)

    message_crud = MessageCRUD(db)
    message = message_crud.get_message(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    if message.recipient_id != user_id:
        raise HTTPException(status_code=401, detail="Прочитать можно только входящее сообщение")

    message_crud.mark_as_read(message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
