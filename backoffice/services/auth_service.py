"""
인증 서비스

관리자 등록, 로그인(세션 발급), 세션 검증, 로그아웃 기능을 제공합니다.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from backoffice.core.exceptions import (
    AdminAlreadyExistsException,
    InvalidCredentialsException,
)
from backoffice.core.security import (
    DUMMY_PASSWORD_HASH,
    generate_session_token,
    hash_password,
    verify_password,
)
from backoffice.models import Admin
from backoffice.services.session_store import SessionStore


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스 클래스"""

    @staticmethod
    def register_admin(username: str, password: str, db: Session) -> Admin:
        """
        새 관리자를 등록합니다.

        Args:
            username: 사용자명
            password: 평문 비밀번호
            db: 데이터베이스 세션

        Returns:
            Admin: 생성된 관리자 객체

        Raises:
            AdminAlreadyExistsException: 이미 존재하는 사용자명인 경우
        """
        existing = db.query(Admin).filter(Admin.username == username).first()
        if existing:
            raise AdminAlreadyExistsException(username)

        admin = Admin(username=username, hashed_password=hash_password(password))
        db.add(admin)
        db.commit()
        db.refresh(admin)

        return admin

    @staticmethod
    def ensure_admin(username: str, password: str, db: Session) -> Optional[Admin]:
        """설정된 초기 관리자가 없으면 생성합니다. 이미 있으면 None."""
        if db.query(Admin).filter(Admin.username == username).first():
            return None
        admin = AuthService.register_admin(username, password, db)
        logger.info("Seeded admin account '{}'", username)
        return admin

    @staticmethod
    def authenticate(username: str, password: str, db: Session) -> Admin:
        """
        관리자 인증을 수행합니다.

        사용자가 없는 경우에도 더미 해시로 bcrypt 검증을 수행하여
        응답 시간으로 사용자 존재 여부를 알 수 없게 합니다.

        Args:
            username: 사용자명
            password: 평문 비밀번호
            db: 데이터베이스 세션

        Returns:
            Admin: 인증된 관리자

        Raises:
            InvalidCredentialsException: 사용자가 없거나 비밀번호가 틀린 경우 (구분 없음)
        """
        admin: Admin | None = db.query(Admin).filter(Admin.username == username).first()
        hashed = admin.hashed_password if admin else DUMMY_PASSWORD_HASH

        if not verify_password(password, hashed) or admin is None:
            logger.warning("Failed login attempt for '{}'", username)
            raise InvalidCredentialsException()

        return admin

    @staticmethod
    def login(
        username: str,
        password: str,
        db: Session,
        store: SessionStore,
        ttl_seconds: int,
    ) -> tuple[Admin, str]:
        """
        인증 후 서버 측 세션을 발급합니다.

        Returns:
            (Admin, 세션 토큰)

        Raises:
            InvalidCredentialsException: 인증 실패 (세션 미발급)
        """
        admin = AuthService.authenticate(username, password, db)

        token = generate_session_token()
        store.create(token, admin.id, ttl_seconds)
        logger.info("Admin '{}' logged in", admin.username)

        return admin, token

    @staticmethod
    def authorize(token: Optional[str], store: SessionStore) -> bool:
        """세션 토큰이 유효하고 만료되지 않았으면 True"""
        if not token:
            return False
        return store.get(token) is not None

    @staticmethod
    def get_current_admin(token: Optional[str], db: Session, store: SessionStore) -> Admin:
        """
        세션 토큰에서 현재 관리자를 조회합니다.

        Raises:
            InvalidCredentialsException: 세션이 없거나 만료되었거나 관리자가 삭제된 경우
        """
        admin_id = store.get(token) if token else None
        if admin_id is None:
            raise InvalidCredentialsException("Not authenticated")

        admin = db.query(Admin).filter(Admin.id == admin_id).first()
        if admin is None:
            store.destroy(token)
            raise InvalidCredentialsException("Not authenticated")

        return admin

    @staticmethod
    def logout(token: Optional[str], store: SessionStore) -> None:
        """세션을 삭제합니다."""
        if token:
            store.destroy(token)
