"""
인증 관련 Pydantic 스키마

API 요청/응답 모델을 정의합니다.
"""

from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class LoginRequest(BaseModel):
    """
    로그인 요청 스키마

    Example:
        {
            "username": "admin",
            "password": "securePass123"
        }
    """

    username: str = Field(..., min_length=1, description="사용자명", examples=["admin"])
    password: str = Field(..., min_length=1, description="비밀번호", examples=["securePass123"])


class LoginResponse(BaseModel):
    """
    로그인 응답 스키마

    세션 토큰은 본문이 아닌 HttpOnly 쿠키로 전달됩니다.
    """

    message: str = Field(default="Logged in", description="처리 결과 메시지")
    username: str = Field(..., description="로그인한 관리자 사용자명")


class AdminResponse(BaseModel):
    """
    관리자 정보 응답 스키마

    Example:
        {
            "id": 1,
            "username": "admin",
            "created_at": "2025-01-22T10:30:00Z"
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="관리자 ID")
    username: str = Field(..., description="사용자명")
    created_at: datetime = Field(..., description="생성 일시")
