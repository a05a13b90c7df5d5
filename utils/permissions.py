import logging
from typing import Annotated, Any, Callable, Mapping

from fastapi import Depends, Request

from schemas.auth import Identity
from utils.auth import get_identity
from utils.errors import AuthorizationError

logger = logging.getLogger(__name__)

RouteParams = Mapping[str, Any]
Predicate = Callable[[Identity | None, RouteParams], bool]


def always(identity: Identity | None, params: RouteParams) -> bool:
    return True


def is_authenticated(identity: Identity | None, params: RouteParams) -> bool:
    return identity is not None


def is_privileged(identity: Identity | None, params: RouteParams) -> bool:
    return identity is not None and identity.is_privileged


def is_self_or_privileged(param: str) -> Predicate:
    """관리자이거나, 경로 파라미터 `param` 값이 본인인 경우"""

    def check(identity: Identity | None, params: RouteParams) -> bool:
        if identity is None:
            return False
        return identity.is_privileged or identity.subject == params.get(param)

    return check


def require(predicate: Predicate) -> Callable[..., Identity | None]:
    """predicate를 통과하지 못하면 401을 내는 FastAPI 의존성 생성"""

    def gate(
            request: Request,
            identity: Identity | None = Depends(get_identity),
    ) -> Identity | None:
        if not predicate(identity, request.path_params):
            logger.info(
                "Access denied: %s %s (subject=%s)",
                request.method,
                request.url.path,
                identity.subject if identity else None,
            )
            raise AuthorizationError()
        return identity

    return gate


AdminIdentity = Annotated[Identity, Depends(require(is_privileged))]
LoggedInIdentity = Annotated[Identity, Depends(require(is_authenticated))]
SelfOrAdminIdentity = Annotated[Identity, Depends(require(is_self_or_privileged("username")))]
