import hmac
import logging
from datetime import datetime, UTC, timedelta
from typing import Annotated

import bcrypt
import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import settings
from schemas.auth import Identity

logger = logging.getLogger(__name__)

# Bearer 토큰 인증 스키마 (토큰이 없어도 요청은 계속 진행)
security = HTTPBearer(auto_error=False)


def _prehash(password: str) -> bytes:
    """
    HMAC-SHA256으로 사전 해싱
    - bcrypt 72바이트 제한 우회
    - PEPPER로 password shucking 공격 방지
    """
    return hmac.new(
        key=settings.password_pepper.encode(),
        msg=password.encode(),
        digestmod="sha256"
    ).hexdigest().encode()


def hash_password(password: str) -> str:
    prehashed = _prehash(password)
    return bcrypt.hashpw(prehashed, bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode()


# 타이밍 공격 방지용 더미 해시
DUMMY_HASH = hash_password("dummy_password_for_timing_attack_prevention")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    prehashed = _prehash(plain_password)
    try:
        return bcrypt.checkpw(prehashed, hashed_password.encode())
    except ValueError:
        logger.warning("Invalid hash format detected")
        return False


class TokenService:
    """
    JWT 발급/검증

    서명 키는 시작 시점에 한 번 주입되며 이후 바뀌지 않는다.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue(self, username: str, is_admin: bool = False,
              expires_delta: timedelta | None = None) -> str:
        expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=self._expire_minutes))
        payload = {"sub": username, "isAdmin": is_admin, "exp": expire}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def resolve(self, token: str | None) -> Identity | None:
        """
        토큰 -> Identity

        토큰이 없거나, 만료/서명 오류/형식 오류인 경우 예외 없이 None 반환.
        권한 판단은 permissions 모듈의 predicate가 담당한다.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected bearer token: %s", e)
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.debug("Bearer token without subject")
            return None
        return Identity(subject=subject, is_privileged=payload.get("isAdmin") is True)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_identity(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(security)
) -> Identity | None:
    """현재 요청의 Identity (없으면 None)"""
    if credentials is None:
        return None
    return get_token_service(request).resolve(credentials.credentials)


Tokens = Annotated[TokenService, Depends(get_token_service)]
