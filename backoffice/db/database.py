"""
SQLAlchemy 데이터베이스 설정

Base 클래스와 엔진/세션 팩토리의 생명주기를 관리하는 Database 핸들을 정의합니다.
Database는 프로세스 시작 시 생성되어 app.state에 보관되고, 종료 시 dispose됩니다.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Database:
    """
    엔진과 세션 팩토리를 소유하는 데이터베이스 핸들

    Attributes:
        url: 데이터베이스 연결 URL
        engine: SQLAlchemy 엔진
        session_factory: Session 생성기
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url

        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            # SQLite 사용 시 check_same_thread 비활성화
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            if parsed.database in (None, "", ":memory:"):
                # in-memory DB는 커넥션마다 별도 DB가 되므로 단일 커넥션 공유
                engine_kwargs.setdefault("poolclass", StaticPool)
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)  # connection 유효성 자동 체크
            engine_kwargs.setdefault("pool_recycle", 3600)

        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def create_all(self) -> None:
        """모든 테이블 생성 (이미 존재하면 건너뜀)"""
        # 모델 모듈을 import해야 Base.metadata에 테이블이 등록됨
        import backoffice.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        """새 Session을 반환합니다. 호출자가 close 책임을 집니다."""
        return self.session_factory()

    def dispose(self) -> None:
        """커넥션 풀을 정리합니다 (애플리케이션 종료 시)."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI 의존성 주입용 데이터베이스 세션 제너레이터

    app.state.database에 보관된 Database 핸들에서 요청마다 세션을 생성합니다.

    사용 예:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
