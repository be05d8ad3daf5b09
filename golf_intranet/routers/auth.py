"""
auth.py

로그인 API.

인트라넷 사용자는 관리자가 생성하며(회원가입 없음),
전화번호 + 비밀번호로 로그인하여 Access Token 을 발급받는다.
발급된 토큰은 Authorization Header(Bearer)로 전달된다.

관련 파일:
- golf_intranet.core.security      : 비밀번호 해시 / JWT 생성
- golf_intranet.core.deps          : 인증 의존성(get_current_user)
- golf_intranet.services.admin     : 전화번호로 활성 사용자 조회

"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from golf_intranet.core.deps import get_db, get_current_user
from golf_intranet.core.security import verify_password, create_access_token
from golf_intranet.models.user import User
from golf_intranet.schemas.auth import LoginRequest, TokenResponse
from golf_intranet.schemas.user import UserResponse
from golf_intranet.services.admin import get_active_user_by_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


"""
로그인 API

- 삭제(Soft Delete)된 사용자는 로그인 불가
- 전화번호 / 비밀번호 불일치 시 같은 메시지로 401

"""
@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = get_active_user_by_phone(db, data.phone_number)
    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Login failed: phone=%s", data.phone_number)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid phone number or password",
        )

    return TokenResponse(access_token=create_access_token(str(user.id)))


# 로그인한 사용자 본인 정보
@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
