"""
인증 관련 API 엔드포인트

관리자 로그인(세션 발급), 로그아웃, 현재 관리자 조회 기능을 제공합니다.
"""

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from backoffice.api.deps import (
    FORM_CONTENT_TYPES,
    get_current_admin,
    get_db,
    get_session_store,
    get_session_token,
    get_settings,
)
from backoffice.core.config import Settings
from backoffice.core.exceptions import ValidationException
from backoffice.models import Admin
from backoffice.schemas.auth import AdminResponse, LoginRequest, LoginResponse
from backoffice.services.auth_service import AuthService
from backoffice.services.session_store import SessionStore


router = APIRouter()


async def read_credentials(request: Request) -> LoginRequest:
    """
    JSON 본문 또는 HTML 폼에서 로그인 정보를 읽습니다.

    Raises:
        ValidationException: 본문 형식이 잘못되었거나 필드가 누락된 경우
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data = {key: form.get(key) for key in ("username", "password")}
    else:
        try:
            data = await request.json()
        except ValueError:
            raise ValidationException("Request body must be JSON or form data")

    try:
        return LoginRequest.model_validate(data)
    except ValidationError:
        raise ValidationException("username and password are required")


@router.post("/login", response_model=LoginResponse)
def login(
    response: Response,
    credentials: LoginRequest = Depends(read_credentials),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    """
    관리자 로그인 및 세션 발급

    세션 토큰은 HttpOnly 쿠키로 전달됩니다. 실패 시 사용자 없음과
    비밀번호 불일치를 구분하지 않고 401을 반환합니다.

    Example:
        Request:
        ```json
        {
            "username": "admin",
            "password": "securePass123"
        }
        ```

        Response (200):
        ```json
        {
            "message": "Logged in",
            "username": "admin"
        }
        ```
    """
    admin, token = AuthService.login(
        username=credentials.username,
        password=credentials.password,
        db=db,
        store=store,
        ttl_seconds=settings.session_ttl_seconds,
    )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )

    return LoginResponse(username=admin.username)


@router.post("/logout")
def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    """세션을 삭제하고 쿠키를 만료시킵니다."""
    AuthService.logout(token, store)
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out"}


@router.get("/me", response_model=AdminResponse)
def get_me(current_admin: Admin = Depends(get_current_admin)):
    """현재 로그인한 관리자 정보를 조회합니다."""
    return current_admin
