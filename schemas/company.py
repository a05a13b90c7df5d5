from decimal import Decimal
from typing import Annotated

from pydantic import Field, ConfigDict, model_validator, AnyHttpUrl, AfterValidator, TypeAdapter, ValidationError

from schemas.commons import CamelModel, Handle, Name, Count

_http_url = TypeAdapter(AnyHttpUrl)


def validate_logo_url(url: str) -> str:
    """URL 형식만 검증하고, 정규화하지 않은 원래 문자열을 저장"""
    try:
        _http_url.validate_python(url)
    except ValidationError:
        raise ValueError("logoUrl must be a valid http(s) URL")
    return url


LogoUrl = Annotated[str, Field(max_length=2048), AfterValidator(validate_logo_url)]


class CompanyJob(CamelModel):
    """회사 상세에 포함되는 채용공고"""
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None


class CompanyOut(CamelModel):
    handle: Handle
    name: str
    description: str
    num_employees: Count | None = None
    logo_url: str | None = None


class CompanyDetail(CompanyOut):
    jobs: list[CompanyJob] = []


class CompanyCreateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    handle: Handle
    name: Name
    description: str = ""
    num_employees: Count | None = None
    logo_url: LogoUrl | None = None


class CompanyUpdateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    name: Name | None = None
    description: str | None = None
    num_employees: Count | None = None
    logo_url: LogoUrl | None = None

    @model_validator(mode='after')
    def check_not_null(self):
        for field_name in ("name", "description"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self


class CompanySearchQuery(CamelModel):
    model_config = ConfigDict(extra='forbid')

    name: Annotated[str | None, Field(min_length=1)] = None
    min_employees: Count | None = None
    max_employees: Count | None = None

    @model_validator(mode='after')
    def check_employee_range(self):
        if (self.min_employees is not None and self.max_employees is not None
                and self.min_employees > self.max_employees):
            raise ValueError("minEmployees cannot be greater than maxEmployees")
        return self


class CompanyResponse(CamelModel):
    company: CompanyOut


class CompanyDetailResponse(CamelModel):
    company: CompanyDetail


class CompanyListResponse(CamelModel):
    companies: list[CompanyOut]


class CompanyDeleteResponse(CamelModel):
    deleted: str
