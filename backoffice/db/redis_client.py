"""
세션 저장소용 Redis 클라이언트

연결은 첫 명령 시점에 생성되므로 클라이언트 생성만으로는 서버에 접속하지 않습니다.
"""

from redis import Redis

from backoffice.core.config import Settings


def create_redis_client(settings: Settings) -> Redis:
    """
    settings.redis_url로 Redis 클라이언트를 만듭니다.

    세션 조회가 Redis 장애로 오래 블로킹되지 않도록 소켓 타임아웃을 둡니다.
    """
    return Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout_seconds,
        socket_connect_timeout=settings.redis_socket_timeout_seconds,
        health_check_interval=30,
    )
