"""
Системные маршруты для проверки здоровья и статуса приложения.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
import logging

from ...core.config import settings
from ...core.database import get_db

logger = logging.getLogger(__name__)

system_router = APIRouter(prefix="/system", tags=["system"])


@system_router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Проверка здоровья приложения и подключения к БД.
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health-check: БД недоступна: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection failed: {str(e)}"
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "message": "Application is running",
            "database": "connected"
        }
    )


@system_router.get("/")
async def root():
    """
    Корневой эндпоинт API.
    """
    return JSONResponse(
        status_code=200,
        content={
            "message": settings.APP_NAME,
            "status": "running",
            "version": settings.APP_VERSION
        }
    )
