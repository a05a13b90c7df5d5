"""
공통 fixture

실행 방법:
    uv sync --all-extras  # dev 의존성 설치
    pytest -v
"""
import os

# config.settings 로드 전에 설정
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jobly-api-0123456789")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from db.session import get_db
from main import app
from utils.database import get_connection


@pytest.fixture
def client():
    """DB 의존성을 대체한 테스트용 FastAPI 클라이언트"""
    app.dependency_overrides[get_db] = lambda: MagicMock()
    app.dependency_overrides[get_connection] = lambda: MagicMock()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    return app.state.token_service


@pytest.fixture
def user_headers(token_service):
    """일반 사용자(u1) 인증 헤더"""
    token = token_service.issue("u1", is_admin=False)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(token_service):
    """관리자 인증 헤더"""
    token = token_service.issue("admin", is_admin=True)
    return {"Authorization": f"Bearer {token}"}
