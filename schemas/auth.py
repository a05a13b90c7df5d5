from pydantic import BaseModel, ConfigDict

from schemas.commons import Username


class Identity(BaseModel):
    """검증된 토큰에서 얻은 요청자 정보 (요청 단위, 불변)"""
    model_config = ConfigDict(frozen=True)

    subject: str
    is_privileged: bool = False


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: Username
    password: str


class TokenResponse(BaseModel):
    token: str
