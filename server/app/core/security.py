"""
Определение текущего пользователя запроса.

Выдача и проверка токенов не входит в этот сервис: шлюз перед API
аутентифицирует клиента и передает его id в заголовке X-User-Id.
"""
from fastapi import Header, HTTPException, status


async def get_current_user_id(
    x_user_id: int = Header(..., alias="X-User-Id", description="ID текущего пользователя")
) -> int:
    if x_user_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Некорректный X-User-Id"
        )
    return x_user_id


def ensure_same_user(user_id: int, current_user_id: int) -> None:
    """Запрет на действия от имени другого пользователя"""
    if user_id != current_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Нет доступа к данным другого пользователя"
        )
