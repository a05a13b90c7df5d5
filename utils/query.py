import re
from decimal import Decimal
from typing import Mapping

from utils.errors import EmptyUpdateError, InvalidFieldError

SqlValue = str | int | float | bool | Decimal | None

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def build_set_clause(
    update_fields: Mapping[str, SqlValue],
    column_map: Mapping[str, str]
) -> tuple[str, list[SqlValue]]:
    """
    부분 수정(PATCH)용 UPDATE SET 절 생성.

    Args:
        update_fields: 업데이트할 필드와 값 {"numEmployees": 10, "name": "Acme"}
        column_map: 외부 필드명 -> DB 컬럼 매핑 {"numEmployees": "num_employees"}
            매핑이 없는 필드는 이름 그대로 컬럼명으로 사용

    Returns:
        (set_clause, values) 튜플
        - set_clause: '"num_employees"=$1, "name"=$2'
        - values: [10, "Acme"]

    Raises:
        EmptyUpdateError: update_fields가 비어 있을 때
        InvalidFieldError: 최종 컬럼명이 SQL 식별자 형식이 아닐 때

    Example:
        >>> clause, values = build_set_clause({"firstName": "Aliya", "age": 32},
        ...                                   {"firstName": "first_name"})
        >>> clause
        '"first_name"=$1, "age"=$2'
        >>> values
        ['Aliya', 32]
    """
    if not update_fields:
        raise EmptyUpdateError()

    set_parts = []
    values = []

    for idx, (field_name, value) in enumerate(update_fields.items(), start=1):
        column_name = column_map.get(field_name, field_name)
        # 값은 항상 $n 바인딩, 컬럼명만 문자열에 들어감
        if not _IDENTIFIER.fullmatch(column_name):
            raise InvalidFieldError(f"Invalid field: {field_name}")
        set_parts.append(f'"{column_name}"=${idx}')
        values.append(value)

    return ", ".join(set_parts), values
