from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import InvalidCredentials
from ..core.security import create_access_token, dummy_verify, verify_password
from ..models.user import User

logger = logging.getLogger(__name__)


def authenticate(
    session: Session,
    nik: str,
    password: str,
    fcm_token: str | None = None,
) -> tuple[User, str]:
    """Check a (nik, password) pair and issue a 24h bearer token.

    A non-empty ``fcm_token`` replaces the device token stored for the user.
    """
    if not nik or not password:
        raise InvalidCredentials()

    user = session.scalar(select(User).where(User.nik == nik))
    if not user:
        dummy_verify()
        logger.info("login rejected: unknown nik")
        raise InvalidCredentials()
    if not verify_password(password, user.password):
        logger.info("login rejected: bad password (user_id=%s)", user.id)
        raise InvalidCredentials()

    if fcm_token:
        user.fcm_token = fcm_token
        session.commit()
        session.refresh(user)

    token = create_access_token(user.id, user.nik, user.role)
    return user, token
