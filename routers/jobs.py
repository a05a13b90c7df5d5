from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from db.repositories import jobs as job_repo
from db.session import DBSession
from schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobSearchQuery,
    JobOut,
    JobListItem,
    JobDetail,
    JobResponse,
    JobDetailResponse,
    JobListResponse,
    JobDeleteResponse,
)
from utils.database import DBConnection
from utils.permissions import AdminIdentity

router = APIRouter(
    prefix="/jobs",
    tags=["JOBS"],
)

JobIdPath = Annotated[int, Path(ge=1)]


@router.post("", response_model=JobResponse,
             status_code=status.HTTP_201_CREATED)
async def create_job(_: AdminIdentity, job: JobCreateRequest, db: DBSession) -> JobResponse:
    """채용공고 등록 (관리자)"""
    new_job = await job_repo.create_job(db, job)
    return JobResponse(job=JobOut.model_validate(new_job))


@router.get("", response_model=JobListResponse)
async def get_jobs(db: DBSession, query: Annotated[JobSearchQuery, Query()]) -> JobListResponse:
    """
    채용공고 목록 조회
    - title: 제목 부분 일치
    - minSalary: 최소 연봉
    - hasEquity: true면 지분 제공 공고만
    """
    jobs = await job_repo.find_jobs(db, query)
    return JobListResponse(jobs=[JobListItem.model_validate(job) for job in jobs])


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(job_id: JobIdPath, db: DBSession) -> JobDetailResponse:
    """채용공고 상세 조회 (회사 정보 포함)"""
    job = await job_repo.get_job(db, job_id)
    return JobDetailResponse(job=JobDetail.model_validate(job))


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
        _: AdminIdentity, job_id: JobIdPath, update_data: JobUpdateRequest,
        conn: DBConnection) -> JobResponse:
    """채용공고 부분 수정 (관리자)"""
    update_fields = update_data.model_dump(exclude_unset=True, by_alias=True)
    job = await job_repo.update_job(conn, job_id, update_fields)
    return JobResponse(job=JobOut.model_validate(job))


@router.delete("/{job_id}", response_model=JobDeleteResponse)
async def delete_job(_: AdminIdentity, job_id: JobIdPath, db: DBSession) -> JobDeleteResponse:
    """채용공고 삭제 (관리자)"""
    await job_repo.remove_job(db, job_id)
    return JobDeleteResponse(deleted=job_id)
