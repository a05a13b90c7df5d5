from typing import Annotated

from pydantic import EmailStr, ConfigDict, StringConstraints, model_validator

from schemas.commons import CamelModel, Username, Name

Password = Annotated[
    str,
    StringConstraints(
        min_length=5,
        max_length=64,
    ),
]


class UserOut(CamelModel):
    username: Username
    first_name: str
    last_name: str
    email: EmailStr
    is_admin: bool = False


class UserWithJobs(UserOut):
    jobs: list[int] = []


class UserRegisterRequest(CamelModel):
    """회원가입 (일반 사용자)"""
    model_config = ConfigDict(extra='forbid')

    username: Username
    password: Password
    first_name: Name
    last_name: Name
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """관리자가 직접 추가하는 사용자 (관리자 권한 부여 가능)"""
    is_admin: bool = False


class UserUpdateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    first_name: Name | None = None
    last_name: Name | None = None
    password: Password | None = None
    email: EmailStr | None = None

    @model_validator(mode='after')
    def check_not_null(self):
        """
        PATCH 요청에서 "미전송"과 "명시적 null 전송"을 구분하기 위해
        model_fields_set 기준으로 검사 (모든 컬럼이 NOT NULL)
        """
        for field_name in self.model_fields_set:
            if getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self


class UserResponse(CamelModel):
    user: UserOut


class UserDetailResponse(CamelModel):
    user: UserWithJobs


class UserListResponse(CamelModel):
    users: list[UserWithJobs]


class UserCreateResponse(CamelModel):
    user: UserOut
    token: str


class UserDeleteResponse(CamelModel):
    deleted: str


class ApplicationResponse(CamelModel):
    applied: int
