"""
관리자 세션 저장소

불투명 세션 토큰 -> 관리자 ID 매핑을 TTL과 함께 보관합니다.
운영 환경은 Redis, 개발/테스트 환경은 in-memory 구현을 사용합니다.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from backoffice.core.config import Settings
from backoffice.core.exceptions import StoreUnavailableException
from backoffice.db.redis_client import create_redis_client

SESSION_KEY_PREFIX = "session:"


class SessionStore(ABC):
    """세션 저장소 인터페이스"""

    @abstractmethod
    def create(self, token: str, admin_id: int, ttl_seconds: int) -> None:
        """세션을 TTL과 함께 저장합니다."""

    @abstractmethod
    def get(self, token: str) -> Optional[int]:
        """세션의 관리자 ID를 반환합니다. 없거나 만료되면 None."""

    @abstractmethod
    def destroy(self, token: str) -> None:
        """세션을 삭제합니다. 없는 세션이어도 오류가 아닙니다."""

    def close(self) -> None:
        """저장소 자원을 정리합니다 (애플리케이션 종료 시)."""

    @staticmethod
    def key(token: str) -> str:
        return f"{SESSION_KEY_PREFIX}{token}"


class RedisSessionStore(SessionStore):
    """Redis 기반 세션 저장소 (SETEX / GET / DEL)"""

    def __init__(self, redis: Redis):
        self.redis = redis

    def create(self, token: str, admin_id: int, ttl_seconds: int) -> None:
        try:
            self.redis.setex(self.key(token), ttl_seconds, admin_id)
        except RedisError as e:
            raise StoreUnavailableException("Session store unavailable") from e

    def get(self, token: str) -> Optional[int]:
        try:
            value = self.redis.get(self.key(token))
        except RedisError as e:
            raise StoreUnavailableException("Session store unavailable") from e
        return int(value) if value is not None else None

    def destroy(self, token: str) -> None:
        try:
            self.redis.delete(self.key(token))
        except RedisError as e:
            raise StoreUnavailableException("Session store unavailable") from e

    def close(self) -> None:
        self.redis.close()


class InMemorySessionStore(SessionStore):
    """프로세스 메모리 기반 세션 저장소 (단일 프로세스 개발/테스트용)"""

    def __init__(self):
        self._data: dict[str, tuple[int, float]] = {}
        self._lock = threading.Lock()

    def create(self, token: str, admin_id: int, ttl_seconds: int) -> None:
        now = time.monotonic()
        with self._lock:
            # 만료된 세션은 조회되지 않아도 새 세션 생성 시 정리
            expired = [k for k, (_, exp) in self._data.items() if now >= exp]
            for key in expired:
                del self._data[key]
            self._data[self.key(token)] = (admin_id, now + ttl_seconds)

    def get(self, token: str) -> Optional[int]:
        key = self.key(token)
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            admin_id, expires_at = entry
            if time.monotonic() >= expires_at:
                del self._data[key]
                return None
            return admin_id

    def destroy(self, token: str) -> None:
        with self._lock:
            self._data.pop(self.key(token), None)

    def close(self) -> None:
        with self._lock:
            self._data.clear()


def create_session_store(settings: Settings) -> SessionStore:
    """
    설정에 맞는 세션 저장소를 생성합니다.

    Args:
        settings: session_backend가 "memory"이면 in-memory, 그 외에는 Redis

    Returns:
        SessionStore 구현체
    """
    if settings.session_backend == "memory":
        return InMemorySessionStore()
    return RedisSessionStore(create_redis_client(settings))
