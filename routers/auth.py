from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse

from db.repositories import users as user_repo
from db.session import DBSession
from schemas.auth import Identity, TokenRequest, TokenResponse
from schemas.user import UserRegisterRequest
from utils.auth import Tokens
from utils.permissions import LoggedInIdentity

router = APIRouter(
    tags=["AUTH"],
)

WELCOME_PAGE = """
<h1>Welcome to Jobly</h1>
<p>Available resources: <code>/companies</code>, <code>/jobs</code>, <code>/users</code>.</p>
<p>Get a token from <code>POST /auth/token</code> and send it as
<code>Authorization: Bearer &lt;token&gt;</code>. API docs are served at <code>/docs</code>.</p>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> str:
    return WELCOME_PAGE


@router.post("/auth/token", response_model=TokenResponse)
async def get_token(credentials: TokenRequest, db: DBSession, tokens: Tokens) -> TokenResponse:
    """로그인 -> JWT 발급"""
    user = await user_repo.authenticate(db, credentials.username, credentials.password)
    return TokenResponse(token=tokens.issue(user.username, user.is_admin))


@router.post("/auth/register", response_model=TokenResponse,
             status_code=status.HTTP_201_CREATED)
async def register(user: UserRegisterRequest, db: DBSession, tokens: Tokens) -> TokenResponse:
    """회원가입 (일반 사용자) -> JWT 발급"""
    new_user = await user_repo.register(db, user)
    return TokenResponse(token=tokens.issue(new_user.username, new_user.is_admin))


@router.get("/auth/me", response_model=Identity)
async def get_me(identity: LoggedInIdentity) -> Identity:
    """현재 토큰의 사용자 정보"""
    return identity
