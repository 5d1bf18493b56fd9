from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_session
from ..core.current_user import get_current_user
from ..models.user import User
from ..schemas.notification import (
    FcmTokenUpdateIn,
    NotificationSendIn,
    NotificationSendOut,
    SuccessOut,
)
from ..services.push_service import notify, register_device_token

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/send", response_model=NotificationSendOut)
def send_notification(
    payload: NotificationSendIn,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    result = notify(session, payload.user_id, payload.title, payload.body, payload.data)
    return NotificationSendOut(success=result.delivered, message_id=result.message_id)


@router.patch("/token", response_model=SuccessOut)
def update_token(
    payload: FcmTokenUpdateIn,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return SuccessOut(success=register_device_token(session, user.id, payload.fcm_token))
