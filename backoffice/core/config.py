"""
애플리케이션 설정 관리

Pydantic Settings를 사용하여 환경 변수를 로드합니다.
.env 파일 또는 시스템 환경 변수에서 설정을 읽어옵니다.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 클래스"""

    # 데이터베이스 설정
    database_url: str = "sqlite:///./backoffice.db"

    # Redis 설정 (세션 저장소)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str = ""
    redis_socket_timeout_seconds: float = 2.0

    # 세션 설정
    session_backend: str = "redis"  # "redis" 또는 "memory"
    session_ttl_seconds: int = 60 * 60 * 8
    session_cookie_name: str = "backoffice_session"
    session_cookie_secure: bool = False

    # 초기 관리자 계정 (둘 다 설정된 경우에만 시딩)
    admin_username: str = ""
    admin_password: str = ""

    # 이미지 호스팅 설정
    image_host_url: str = "https://catbox.moe/user/api.php"
    image_upload_timeout_seconds: float = 30.0
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB

    # 애플리케이션 설정
    app_env: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 정의되지 않은 환경 변수 무시
    )

    @property
    def redis_url(self) -> str:
        """
        Redis 연결 URL 생성

        비밀번호가 있는 경우: redis://:password@host:port/db
        비밀번호가 없는 경우: redis://host:port/db
        """
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def upload_path(self) -> Path:
        """임시 업로드 파일을 저장할 디렉터리"""
        return Path(self.upload_dir)

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def get_settings() -> Settings:
    """
    Settings 인스턴스를 반환하는 팩토리 함수
    """
    return Settings()
