"""jobs 테이블 접근"""
from typing import Mapping

import asyncpg
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db.models.company import Company
from db.models.job import Job
from schemas.job import JobCreateRequest, JobSearchQuery
from utils.errors import NotFoundError
from utils.query import build_set_clause, SqlValue

# title, salary, equity는 컬럼명과 동일
JOB_COLUMN_MAP: dict[str, str] = {}


async def create_job(db: AsyncSession, data: JobCreateRequest) -> Job:
    if await db.get(Company, data.company_handle) is None:
        raise NotFoundError(f"No company: {data.company_handle}")

    job = Job(**data.model_dump())
    db.add(job)
    await db.flush()
    return job


async def find_jobs(db: AsyncSession, query: JobSearchQuery) -> list[Job]:
    """
    - title: 부분 일치 (대소문자 무시)
    - min_salary: 최소 연봉
    - has_equity: True면 equity > 0 인 공고만, False/미지정이면 필터 없음
    """
    stmt = select(Job)
    if query.title:
        stmt = stmt.where(Job.title.icontains(query.title, autoescape=True))
    if query.min_salary is not None:
        stmt = stmt.where(Job.salary >= query.min_salary)
    if query.has_equity:
        stmt = stmt.where(Job.equity > 0)

    result = await db.execute(stmt.order_by(Job.title, Job.id))
    return list(result.scalars().all())


async def get_job(db: AsyncSession, job_id: int) -> Job:
    job = await db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    return job


async def update_job(
        conn: asyncpg.Connection, job_id: int, update_fields: Mapping[str, SqlValue]
) -> dict:
    set_clause, values = build_set_clause(update_fields, JOB_COLUMN_MAP)
    id_idx = len(values) + 1

    row = await conn.fetchrow(
        f"""
        UPDATE jobs
        SET {set_clause}
        WHERE id = ${id_idx}
        RETURNING id, title, salary, equity, company_handle
        """,
        *values, job_id,
    )
    if row is None:
        raise NotFoundError(f"No job: {job_id}")
    return dict(row)


async def remove_job(db: AsyncSession, job_id: int) -> None:
    result = await db.execute(delete(Job).where(Job.id == job_id))
    if result.rowcount == 0:
        raise NotFoundError(f"No job: {job_id}")
