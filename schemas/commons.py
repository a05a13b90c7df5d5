from typing import Annotated

from pydantic import Field, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=25),
    Field(description="사용자 아이디", examples=["testuser"]),
]

Handle = Annotated[
    str,
    StringConstraints(min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$"),
    Field(description="회사 핸들", examples=["bauer-gallagher"]),
]

Name = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
]

Count = Annotated[int, Field(ge=0)]


class CamelModel(BaseModel):
    """외부 JSON은 camelCase, 내부 속성/컬럼은 snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
