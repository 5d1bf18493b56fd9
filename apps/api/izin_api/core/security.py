from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import hashlib
import hmac
import logging
import re
from passlib.context import CryptContext
import jwt
from .config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_SHA256_HEX = re.compile(r"^[0-9a-f]{64}$")

JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    nik: str
    role: str
    issued_at: datetime
    expires_at: datetime


def hash_password(pw: str) -> str:
    return pwd_context.hash(pw)

def hash_password_sha256_hex(pw: str) -> str:
    # credential format of the legacy system (unsalted sha256, hex)
    return hashlib.sha256(pw.encode("utf-8")).hexdigest()

def verify_password(pw: str, hashed: str) -> bool:
    if not hashed:
        return False
    if hashed.startswith("$2"):
        return pwd_context.verify(pw, hashed)
    if _SHA256_HEX.match(hashed):
        return hmac.compare_digest(hash_password_sha256_hex(pw), hashed)
    return False

def dummy_verify() -> None:
    """Burn one bcrypt verification so a missing user costs as much as a wrong password."""
    pwd_context.dummy_verify()

def create_access_token(user_id: int, nik: str, role: str, *, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "userId": user_id,
        "nik": nik,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.jwt_expires_min)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALGORITHM)

def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[JWT_ALGORITHM],
        options={"require": ["exp", "iat"]},
    )

def verify_token(token: str) -> TokenClaims | None:
    """Return the token's claims, or None when it is malformed, forged or expired."""
    if not token:
        return None
    try:
        payload = decode_token(token)
        return TokenClaims(
            user_id=int(payload["userId"]),
            nik=str(payload["nik"]),
            role=str(payload["role"]),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except jwt.PyJWTError as exc:
        logger.info("token rejected: %s", exc.__class__.__name__)
        return None
    except (KeyError, TypeError, ValueError):
        logger.info("token rejected: malformed claims")
        return None
