import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from backoffice.api.routes import auth, orders, products
from backoffice.core.config import Settings, get_settings
from backoffice.core.exceptions import BackofficeException, StoreUnavailableException
from backoffice.core.logging import configure_logging
from backoffice.db.database import Database
from backoffice.services.auth_service import AuthService
from backoffice.services.image_relay import ImageRelay
from backoffice.services.session_store import SessionStore, create_session_store


def _seed_admin(database: Database, settings: Settings) -> None:
    """ADMIN_USERNAME / ADMIN_PASSWORD가 설정된 경우 초기 관리자 생성"""
    if not (settings.admin_username and settings.admin_password):
        return
    db = database.session()
    try:
        AuthService.ensure_admin(settings.admin_username, settings.admin_password, db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    프로세스 자원 생명주기

    create_app에 주입되지 않은 자원만 여기서 생성하고, 생성한 자원만 종료 시 정리합니다.
    """
    settings: Settings = app.state.settings
    owned = []

    if app.state.database is None:
        app.state.database = Database(settings.database_url)
        owned.append(app.state.database.dispose)
    if app.state.session_store is None:
        app.state.session_store = create_session_store(settings)
        owned.append(app.state.session_store.close)
    if app.state.image_relay is None:
        app.state.image_relay = ImageRelay.from_settings(settings)

    app.state.database.create_all()
    _seed_admin(app.state.database, settings)
    logger.info("Backoffice API started (env={})", settings.app_env)

    try:
        yield
    finally:
        for close in owned:
            close()
        logger.info("Backoffice API stopped")


def _error_response(status_code: int, kind: str, detail, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"kind": kind, "detail": detail, **extra},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """도메인 예외를 {"kind", "detail"} 형태의 응답으로 변환"""

    @app.exception_handler(BackofficeException)
    async def handle_backoffice_exception(request: Request, exc: BackofficeException):
        if exc.status_code >= 500:
            logger.opt(exception=exc).error(
                "{} {} failed: {}", request.method, request.url.path, exc.message
            )
        else:
            logger.info(
                "{} {} -> {} {}", request.method, request.url.path, exc.status_code, exc.kind
            )
        return _error_response(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "validation_error",
            "Request validation failed",
            errors=jsonable_encoder(exc.errors(), exclude={"input"}),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError):
        logger.opt(exception=exc).error(
            "{} {} database error", request.method, request.url.path
        )
        error = StoreUnavailableException()
        return _error_response(error.status_code, error.kind, error.message)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    session_store: Optional[SessionStore] = None,
    image_relay: Optional[ImageRelay] = None,
) -> FastAPI:
    """
    FastAPI 애플리케이션 팩토리

    Args:
        settings: 애플리케이션 설정 (없으면 환경 변수에서 로드)
        database: 미리 생성된 Database 핸들 (테스트용)
        session_store: 세션 저장소 (없으면 settings.session_backend로 생성)
        image_relay: 이미지 업로드 클라이언트 (없으면 settings로 생성)
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Backoffice API",
        description="상품 카탈로그와 주문을 관리하는 백오피스 API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.session_store = session_store
    app.state.image_relay = image_relay

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "{} {} {} ({:.1f}ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(auth.router, tags=["authentication"])
    app.include_router(products.router, tags=["products"])
    app.include_router(orders.router, tags=["orders"])

    @app.get("/health")
    async def health_check():
        """헬스체크 엔드포인트 (Docker 헬스체크용)"""
        return {"status": "healthy"}

    return app


app = create_app()
