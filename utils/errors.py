from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    EMPTY_UPDATE = "empty_update"
    INVALID_FIELD = "invalid_field"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


class AppError(Exception):
    """
    요청 경계(main.py)에서 HTTP 응답으로 변환되는 예외의 기반 클래스
    - kind: 에러 종류 판별 태그
    - status_code: 변환될 HTTP 상태 코드
    """
    kind: ErrorKind = ErrorKind.BAD_REQUEST
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad Request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    pass


class EmptyUpdateError(BadRequestError):
    kind = ErrorKind.EMPTY_UPDATE
    default_message = "No data to update"


class InvalidFieldError(BadRequestError):
    kind = ErrorKind.INVALID_FIELD
    default_message = "Invalid field name"


class AuthorizationError(AppError):
    kind = ErrorKind.UNAUTHORIZED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"
