from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
import logging
import time
import os

logger = logging.getLogger(__name__)

# Пути, доступные без X-API-SECRET-KEY
PUBLIC_PATHS = ['/system/', '/system/health', '/docs', '/openapi.json', '/redoc']


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith('/docs')


def _reject(detail: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": detail})


def _log_response(caller: str, method: str, path: str, status_code: int, elapsed: float):
    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger.log(level, f"[user {caller}] {method} {path} -> {status_code} за {elapsed * 1000:.1f} мс")


def setup_middleware(app: FastAPI):
    """
    Подключает middleware сервиса знакомств.

    Каждый запрос логируется с id пользователя из X-User-Id (его выставляет
    шлюз). Все пути, кроме health-check и документации, требуют общий
    секрет X-API-SECRET-KEY; без него или с неверным ключом ответ 403.
    """
    from .config import settings

    @app.middleware("http")
    async def dating_api_middleware(request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path
        caller = request.headers.get("X-User-Id", "-")

        if not is_public_path(path):
            secret_header = request.headers.get("X-API-SECRET-KEY")
            expected_key = os.getenv('API_SECRET_KEY') or settings.API_SECRET_KEY

            if not secret_header:
                logger.warning(f"[user {caller}] {request.method} {path}: нет X-API-SECRET-KEY")
                return _reject("Missing API Secret Key")

            if secret_header != expected_key:
                logger.warning(f"[user {caller}] {request.method} {path}: неверный X-API-SECRET-KEY")
                return _reject("Invalid API Secret Key")

        response = await call_next(request)
        _log_response(caller, request.method, path, response.status_code, time.perf_counter() - started)
        return response

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    app.add_middleware(
        TrustedHostMiddleware,
        **settings.get_trusted_hosts_config()
    )


def setup_exception_handlers(app: FastAPI):
    """Ответ 500 на любое необработанное исключение"""

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"[user {request.headers.get('X-User-Id', '-')}] "
            f"{request.method} {request.url.path}: необработанная ошибка {exc}",
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Внутренняя ошибка сервера"}
        )
