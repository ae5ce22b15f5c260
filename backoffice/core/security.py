"""
관리자 인증에 쓰이는 보안 유틸리티

- bcrypt 기반 비밀번호 해시/검증 (salt 포함, 상수 시간 비교)
- 서버 측 세션 키로 쓰이는 불투명 토큰 생성
"""

import secrets

import bcrypt

BCRYPT_ROUNDS = 12
SESSION_TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    """
    평문 비밀번호의 bcrypt 해시를 만듭니다.

    Example:
        >>> hash_password("admin-pass").startswith("$2b$")
        True
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    비밀번호가 저장된 해시와 일치하는지 확인합니다.

    해시 형식이 잘못된 경우 예외 대신 False를 반환합니다.
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        return False


# 사용자가 없을 때도 bcrypt 검증 비용을 동일하게 지불하기 위한 해시
DUMMY_PASSWORD_HASH = hash_password(secrets.token_hex(16))


def generate_session_token() -> str:
    """추측 불가능한 URL-safe 세션 토큰 (256비트)"""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
