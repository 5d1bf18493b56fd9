from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..db import get_session
from ..models.user import User
from .errors import InsufficientPermissions, TokenInvalidOrExpired
from .security import verify_token

bearer = HTTPBearer(auto_error=False)

def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    session: Session = Depends(get_session),
) -> User:
    if not creds:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = verify_token(creds.credentials)
    if claims is None:
        raise TokenInvalidOrExpired()

    user = session.get(User, claims.user_id)
    if not user:
        raise TokenInvalidOrExpired("User not found")
    return user


def require_roles(user: User, roles: set[str]) -> None:
    if user.role not in roles:
        raise InsufficientPermissions()
