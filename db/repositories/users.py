"""users, applications 테이블 접근"""
from typing import Mapping

import asyncpg
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.models.application import Application
from db.models.job import Job
from db.models.user import User
from schemas.user import UserRegisterRequest
from utils.auth import hash_password, verify_password, DUMMY_HASH
from utils.errors import AuthorizationError, BadRequestError, NotFoundError
from utils.query import build_set_clause, SqlValue

USER_COLUMN_MAP = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


async def authenticate(db: AsyncSession, username: str, password: str) -> User:
    """아이디/비밀번호 확인, 실패 시 401"""
    user = await db.get(User, username)

    # 타이밍 공격 방지: 유저 존재 여부와 관계없이 항상 해시 비교 수행
    hashed_password = user.password if user else DUMMY_HASH
    is_password_correct = verify_password(password, hashed_password)

    if user is None or not is_password_correct:
        raise AuthorizationError("Invalid username/password")
    return user


async def register(db: AsyncSession, data: UserRegisterRequest, is_admin: bool = False) -> User:
    if await db.get(User, data.username) is not None:
        raise BadRequestError(f"Duplicate username: {data.username}")

    user = User(
        username=data.username,
        password=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        is_admin=is_admin,
    )
    db.add(user)
    await db.flush()
    return user


async def find_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.username))
    return list(result.scalars().all())


async def get_user(db: AsyncSession, username: str) -> User:
    user = await db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


async def update_user(
        conn: asyncpg.Connection, username: str, update_fields: Mapping[str, SqlValue]
) -> dict:
    """부분 수정, password가 포함되면 해싱 후 저장"""
    update_fields = dict(update_fields)
    if update_fields.get("password"):
        update_fields["password"] = hash_password(update_fields["password"])

    set_clause, values = build_set_clause(update_fields, USER_COLUMN_MAP)
    username_idx = len(values) + 1

    row = await conn.fetchrow(
        f"""
        UPDATE users
        SET {set_clause}
        WHERE username = ${username_idx}
        RETURNING username, first_name, last_name, email, is_admin
        """,
        *values, username,
    )
    if row is None:
        raise NotFoundError(f"No user: {username}")
    return dict(row)


async def remove_user(db: AsyncSession, username: str) -> None:
    result = await db.execute(delete(User).where(User.username == username))
    if result.rowcount == 0:
        raise NotFoundError(f"No user: {username}")


async def apply_to_job(db: AsyncSession, username: str, job_id: int) -> int:
    if await db.get(Job, job_id) is None:
        raise NotFoundError(f"No job: {job_id}")
    if await db.get(User, username) is None:
        raise NotFoundError(f"No user: {username}")

    db.add(Application(username=username, job_id=job_id))
    try:
        await db.flush()
    except IntegrityError:
        raise BadRequestError(f"Already applied: {job_id}")
    return job_id
