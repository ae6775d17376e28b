import jwt
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.core import config
from backend.core.errors import AuthenticationError, NotFoundError
from backend.database import get_db
from backend.models.user import User

security = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Unauthorized - Invalid or missing token"


def get_request_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session_cookie: str | None = Cookie(default=None, alias=config.SESSION_COOKIE_NAME),
) -> str:
    """Bearer header wins over the session cookie when both are present."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    if session_cookie:
        return session_cookie
    raise AuthenticationError(UNAUTHORIZED_MESSAGE)


def get_current_user(
    token: str = Depends(get_request_token),
    db: Session = Depends(get_db),
) -> User:
    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE) from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user
