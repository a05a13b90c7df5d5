"""companies 테이블 접근"""
from typing import Mapping

import asyncpg
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload

from db.models.company import Company
from db.models.job import Job  # noqa: F401  (Company.jobs 관계 등록)
from schemas.company import CompanyCreateRequest, CompanySearchQuery
from utils.errors import BadRequestError, NotFoundError
from utils.query import build_set_clause, SqlValue

# 외부(camelCase) 필드 -> 컬럼
COMPANY_COLUMN_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


async def create_company(db: AsyncSession, data: CompanyCreateRequest) -> Company:
    if await db.get(Company, data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {data.handle}")

    company = Company(**data.model_dump())
    db.add(company)
    try:
        await db.flush()
    except IntegrityError:
        raise BadRequestError(f"Duplicate company name: {data.name}")
    return company


async def find_companies(db: AsyncSession, query: CompanySearchQuery) -> list[Company]:
    """이름(부분 일치, 대소문자 무시), 직원 수 범위로 필터링"""
    stmt = select(Company).options(noload(Company.jobs))
    if query.name:
        stmt = stmt.where(Company.name.icontains(query.name, autoescape=True))
    if query.min_employees is not None:
        stmt = stmt.where(Company.num_employees >= query.min_employees)
    if query.max_employees is not None:
        stmt = stmt.where(Company.num_employees <= query.max_employees)

    result = await db.execute(stmt.order_by(Company.name))
    return list(result.scalars().all())


async def get_company(db: AsyncSession, handle: str) -> Company:
    company = await db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    return company


async def update_company(
        conn: asyncpg.Connection, handle: str, update_fields: Mapping[str, SqlValue]
) -> dict:
    """
    부분 수정: 전달된 필드만 변경

    update_fields 키는 외부 필드명 (name, description, numEmployees, logoUrl)
    """
    set_clause, values = build_set_clause(update_fields, COMPANY_COLUMN_MAP)
    handle_idx = len(values) + 1

    try:
        row = await conn.fetchrow(
            f"""
            UPDATE companies
            SET {set_clause}
            WHERE handle = ${handle_idx}
            RETURNING handle, name, description, num_employees, logo_url
            """,
            *values, handle,
        )
    except asyncpg.UniqueViolationError:
        raise BadRequestError(f"Duplicate company name: {update_fields.get('name')}")

    if row is None:
        raise NotFoundError(f"No company: {handle}")
    return dict(row)


async def remove_company(db: AsyncSession, handle: str) -> None:
    result = await db.execute(delete(Company).where(Company.handle == handle))
    if result.rowcount == 0:
        raise NotFoundError(f"No company: {handle}")
