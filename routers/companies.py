from typing import Annotated

from fastapi import APIRouter, Query, status

from db.repositories import companies as company_repo
from db.session import DBSession
from schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanySearchQuery,
    CompanyOut,
    CompanyDetail,
    CompanyResponse,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyDeleteResponse,
)
from utils.database import DBConnection
from utils.permissions import AdminIdentity

router = APIRouter(
    prefix="/companies",
    tags=["COMPANIES"],
)


@router.post("", response_model=CompanyResponse,
             status_code=status.HTTP_201_CREATED)
async def create_company(
        _: AdminIdentity, company: CompanyCreateRequest, db: DBSession) -> CompanyResponse:
    """회사 등록 (관리자)"""
    new_company = await company_repo.create_company(db, company)
    return CompanyResponse(company=CompanyOut.model_validate(new_company))


@router.get("", response_model=CompanyListResponse)
async def get_companies(
        db: DBSession, query: Annotated[CompanySearchQuery, Query()]) -> CompanyListResponse:
    """
    회사 목록 조회
    - name: 이름 부분 일치
    - minEmployees / maxEmployees: 직원 수 범위
    """
    companies = await company_repo.find_companies(db, query)
    return CompanyListResponse(
        companies=[CompanyOut.model_validate(company) for company in companies]
    )


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(handle: str, db: DBSession) -> CompanyDetailResponse:
    """회사 상세 조회 (채용공고 포함)"""
    company = await company_repo.get_company(db, handle)
    return CompanyDetailResponse(company=CompanyDetail.model_validate(company))


@router.patch("/{handle}", response_model=CompanyResponse)
async def update_company(
        _: AdminIdentity, handle: str, update_data: CompanyUpdateRequest,
        conn: DBConnection) -> CompanyResponse:
    """회사 정보 부분 수정 (관리자)"""
    update_fields = update_data.model_dump(exclude_unset=True, by_alias=True)
    company = await company_repo.update_company(conn, handle, update_fields)
    return CompanyResponse(company=CompanyOut.model_validate(company))


@router.delete("/{handle}", response_model=CompanyDeleteResponse)
async def delete_company(_: AdminIdentity, handle: str, db: DBSession) -> CompanyDeleteResponse:
    """회사 삭제 (관리자)"""
    await company_repo.remove_company(db, handle)
    return CompanyDeleteResponse(deleted=handle)
