"""
Отметка активности пользователя после запроса.

Подключается к роутерам через dependencies=[Depends(log_user_activity)]:
код после yield выполняется, когда обработчик завершился без ошибки.
"""
from fastapi import Depends
from sqlalchemy.orm import Session
import logging

from ...core.database import get_db
from ...core.security import get_current_user_id
from .crud import UserCRUD

logger = logging.getLogger(__name__)


async def log_user_activity(
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    yield

    if not UserCRUD(db).touch_last_active(current_user_id):
        logger.debug(f"Активность не отмечена: пользователь {current_user_id} не найден")
