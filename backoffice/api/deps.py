"""
FastAPI 의존성 주입 함수들

데이터베이스 세션, 설정, 세션 저장소, 인증 등의 의존성을 제공합니다.
모든 자원은 lifespan에서 생성되어 app.state에 보관된 것을 사용합니다.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from backoffice.core.config import Settings
from backoffice.db.database import get_db
from backoffice.models import Admin
from backoffice.services.auth_service import AuthService
from backoffice.services.image_relay import ImageRelay
from backoffice.services.session_store import SessionStore

__all__ = [
    "get_db",
    "get_settings",
    "get_session_store",
    "get_image_relay",
    "get_session_token",
    "get_current_admin",
    "FORM_CONTENT_TYPES",
]

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_settings(request: Request) -> Settings:
    """애플리케이션 생성 시 주입된 설정"""
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_image_relay(request: Request) -> ImageRelay:
    return request.app.state.image_relay


def get_session_token(
    request: Request, settings: Settings = Depends(get_settings)
) -> str | None:
    """요청 쿠키에서 세션 토큰을 읽습니다."""
    return request.cookies.get(settings.session_cookie_name)


def get_current_admin(
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> Admin:
    """
    세션 쿠키로 현재 인증된 관리자를 조회하는 의존성 함수

    Returns:
        Admin: 인증된 관리자 객체

    Raises:
        InvalidCredentialsException: 세션이 없거나 만료된 경우 (401로 응답)

    Example:
        @router.post("/products")
        def create(current_admin: Admin = Depends(get_current_admin)):
            ...
    """
    return AuthService.get_current_admin(token, db, store)
