from decimal import Decimal
from typing import Annotated

from pydantic import Field, ConfigDict, model_validator

from schemas.commons import CamelModel, Handle, Name, Count
from schemas.company import CompanyOut

Equity = Annotated[Decimal, Field(ge=0, le=1)]


class JobOut(CamelModel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company_handle: Handle


class JobListItem(JobOut):
    """채용공고 목록 아이템 (Job.company_name 포함)"""
    company_name: str | None = None


class JobDetail(CamelModel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company: CompanyOut


class JobCreateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    title: Name
    salary: Count | None = None
    equity: Equity | None = None
    company_handle: Handle


class JobUpdateRequest(CamelModel):
    """id, companyHandle은 수정 불가"""
    model_config = ConfigDict(extra='forbid')

    title: Name | None = None
    salary: Count | None = None
    equity: Equity | None = None

    @model_validator(mode='after')
    def check_title_not_null(self):
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("title cannot be null")
        return self


class JobSearchQuery(CamelModel):
    model_config = ConfigDict(extra='forbid')

    title: Annotated[str | None, Field(min_length=1)] = None
    min_salary: Count | None = None
    has_equity: bool | None = None


class JobResponse(CamelModel):
    job: JobOut


class JobDetailResponse(CamelModel):
    job: JobDetail


class JobListResponse(CamelModel):
    jobs: list[JobListItem]


class JobDeleteResponse(CamelModel):
    deleted: int
