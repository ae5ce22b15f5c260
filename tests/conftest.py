"""
pytest 픽스처 정의
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backoffice.core.config import Settings
from backoffice.db.database import Database
from backoffice.main import create_app
from backoffice.models import Admin, Product
from backoffice.services.auth_service import AuthService
from backoffice.services.image_relay import ImageRelay
from backoffice.services.product_service import ProductService
from backoffice.services.session_store import InMemorySessionStore

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass-123"
UPLOADED_IMAGE_URL = "https://files.catbox.moe/abc123.png"


@pytest.fixture(scope="function")
def settings(tmp_path) -> Settings:
    """테스트용 설정 객체 픽스처"""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        session_backend="memory",
        session_ttl_seconds=600,
        admin_username="",
        admin_password="",
        image_host_url="https://image-host.test/api.php",
        image_upload_timeout_seconds=5,
        upload_dir=str(tmp_path / "uploads"),
        max_upload_bytes=1024,
        log_level="WARNING",
    )


@pytest.fixture(scope="function")
def database(settings):
    """
    테스트용 SQLite 데이터베이스 픽스처

    각 테스트 함수마다 임시 디렉터리에 새 데이터베이스 파일을 생성합니다.
    """
    db = Database(settings.database_url)
    db.create_all()
    try:
        yield db
    finally:
        db.drop_all()
        db.dispose()


@pytest.fixture(scope="function")
def test_db(database) -> Session:
    """테스트용 데이터베이스 세션 픽스처"""
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def session_store():
    """테스트용 in-memory 세션 저장소"""
    return InMemorySessionStore()


@pytest.fixture(scope="function")
def image_host_requests():
    """가짜 이미지 호스트가 받은 요청 목록"""
    return []


@pytest.fixture(scope="function")
def image_relay(settings, image_host_requests):
    """업로드 요청을 기록하고 고정 URL을 돌려주는 ImageRelay"""

    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        image_host_requests.append(request)
        return httpx.Response(200, text=UPLOADED_IMAGE_URL)

    return ImageRelay(
        settings.image_host_url,
        settings.image_upload_timeout_seconds,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture(scope="function")
def test_client(settings, database, session_store, image_relay):
    """FastAPI TestClient 픽스처 (테스트 DB, 세션 저장소, 가짜 이미지 호스트 주입)"""
    app = create_app(
        settings=settings,
        database=database,
        session_store=session_store,
        image_relay=image_relay,
    )
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin(test_db: Session) -> Admin:
    """테스트용 관리자 계정"""
    return AuthService.register_admin(ADMIN_USERNAME, ADMIN_PASSWORD, test_db)


@pytest.fixture
def admin_client(test_client, admin):
    """로그인하여 세션 쿠키를 가진 TestClient"""
    response = test_client.post(
        "/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return test_client


@pytest.fixture
def sample_product(test_db: Session) -> Product:
    """테스트용 샘플 상품 (가격 10.00)"""
    return ProductService.create_product(
        name="Widget",
        description="A widget",
        price="10.00",
        db=test_db,
    )
