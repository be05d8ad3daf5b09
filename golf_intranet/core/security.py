"""
security.py

비밀번호 해싱 및 JWT Access Token 생성/검증 유틸리티.

인트라넷 사용자는 전화번호 + 비밀번호로 로그인하며,
발급된 Access Token은 Authorization Header(Bearer)로 전달된다.
관리자/매니저 권한 판정은 golf_intranet.core.deps 에서 수행한다.

관련 파일:
- golf_intranet.core.config      : JWT 시크릿 키 및 만료 설정
- golf_intranet.core.deps        : 토큰을 실제로 검증하는 인증 의존성
- golf_intranet.routers.auth     : 로그인 API

"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from golf_intranet.core.config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
Access Token 생성 함수

- sub : 사용자 식별자(user_id)
- type: access 고정
- exp : 만료 시각 (UTC timestamp)

"""

def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": subject,
        "type": "access",
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> str:
    """유효한 access 토큰이면 sub(user_id 문자열)를 반환, 아니면 JWTError."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    return sub
