"""
Admin 모델

관리자 계정 정보를 저장하는 SQLAlchemy 모델입니다.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from backoffice.db.database import Base


class Admin(Base):
    """
    관리자 모델

    Attributes:
        id: 관리자 고유 ID (Primary Key)
        username: 사용자명 (Unique, Not Null)
        hashed_password: bcrypt 해싱된 비밀번호 (Not Null)
        created_at: 생성 일시 (자동 설정)
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        """Admin 객체의 문자열 표현"""
        return f"<Admin(id={self.id}, username='{self.username}')>"

    def __str__(self) -> str:
        return f"Admin: {self.username}"
