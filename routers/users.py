from typing import Annotated

from fastapi import APIRouter, Path, status

from db.repositories import users as user_repo
from db.session import DBSession
from schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserOut,
    UserWithJobs,
    UserResponse,
    UserDetailResponse,
    UserListResponse,
    UserCreateResponse,
    UserDeleteResponse,
    ApplicationResponse,
)
from utils.auth import Tokens
from utils.database import DBConnection
from utils.permissions import AdminIdentity, SelfOrAdminIdentity

router = APIRouter(
    prefix="/users",
    tags=["USERS"],
)


@router.post("", response_model=UserCreateResponse,
             status_code=status.HTTP_201_CREATED)
async def create_user(
        _: AdminIdentity, user: UserCreateRequest, db: DBSession, tokens: Tokens) -> UserCreateResponse:
    """
    관리자용 사용자 추가 (회원가입은 /auth/register)
    - 새 사용자도 관리자로 만들 수 있음
    - 새 사용자의 토큰을 함께 반환
    """
    new_user = await user_repo.register(db, user, is_admin=user.is_admin)
    token = tokens.issue(new_user.username, new_user.is_admin)
    return UserCreateResponse(user=UserOut.model_validate(new_user), token=token)


@router.get("", response_model=UserListResponse)
async def get_users(_: AdminIdentity, db: DBSession) -> UserListResponse:
    """전체 사용자 목록 (지원한 채용공고 ID 포함)"""
    users = await user_repo.find_users(db)
    return UserListResponse(users=[UserWithJobs.model_validate(user) for user in users])


@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(_: SelfOrAdminIdentity, username: str, db: DBSession) -> UserDetailResponse:
    """사용자 조회 (본인 또는 관리자)"""
    user = await user_repo.get_user(db, username)
    return UserDetailResponse(user=UserWithJobs.model_validate(user))


@router.patch("/{username}", response_model=UserResponse)
async def update_user(
        _: SelfOrAdminIdentity, username: str, update_data: UserUpdateRequest,
        conn: DBConnection) -> UserResponse:
    """사용자 정보 부분 수정 (본인 또는 관리자)"""
    update_fields = update_data.model_dump(exclude_unset=True, by_alias=True)
    user = await user_repo.update_user(conn, username, update_fields)
    return UserResponse(user=UserOut.model_validate(user))


@router.delete("/{username}", response_model=UserDeleteResponse)
async def delete_user(_: SelfOrAdminIdentity, username: str, db: DBSession) -> UserDeleteResponse:
    """회원 탈퇴 (본인 또는 관리자)"""
    await user_repo.remove_user(db, username)
    return UserDeleteResponse(deleted=username)


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse)
async def apply_to_job(
        _: SelfOrAdminIdentity, username: str, job_id: Annotated[int, Path(ge=1)],
        db: DBSession) -> ApplicationResponse:
    """채용공고 지원 (본인 또는 관리자)"""
    applied = await user_repo.apply_to_job(db, username, job_id)
    return ApplicationResponse(applied=applied)
