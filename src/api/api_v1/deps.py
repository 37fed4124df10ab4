import logging
from typing import Annotated, Generator, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from core import constants
from core.db import engine
from core.exceptions import ForbiddenError, UnauthorizedError
from core.security import decode_access_token
from models.user import User
from services.user_service import suspension_message
from utils.api import parse_uuid

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


def _load_user(session: Session, token: str) -> User:
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError(constants.MSG_TOKEN_EXPIRED)
    except jwt.InvalidTokenError:
        raise UnauthorizedError(constants.MSG_TOKEN_INVALID)

    user_id = parse_uuid(payload.get("userId"))
    user = session.get(User, user_id) if user_id else None
    if not user:
        raise UnauthorizedError(constants.MSG_USER_NOT_FOUND)
    if user.is_suspended:
        raise ForbiddenError(suspension_message(user))
    return user


def get_current_user(session: SessionDep, credentials: TokenDep) -> User:
    if not credentials or not credentials.credentials:
        raise UnauthorizedError(constants.MSG_TOKEN_REQUIRED)
    return _load_user(session, credentials.credentials)


def get_optional_user(session: SessionDep, credentials: TokenDep) -> Optional[User]:
    if not credentials or not credentials.credentials:
        return None
    try:
        return _load_user(session, credentials.credentials)
    except (UnauthorizedError, ForbiddenError):
        # a bad token on a public route is treated as anonymous
        return None


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]


def get_current_admin(user: CurrentUser, request: Request) -> User:
    if not user.is_admin:
        logger.warning(
            f"Admin access denied: {user.email} ({user.id}) "
            f"ip={request.client.host if request.client else None} url={request.url.path}"
        )
        raise ForbiddenError(constants.MSG_ADMIN_ONLY)
    return user


AdminUser = Annotated[User, Depends(get_current_admin)]


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def get_request_deadline(request: Request) -> Optional[float]:
    # set by the request_timeout middleware in main.py
    return getattr(request.state, "deadline", None)


DeadlineDep = Annotated[Optional[float], Depends(get_request_deadline)]
