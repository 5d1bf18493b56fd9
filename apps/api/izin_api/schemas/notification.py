from pydantic import BaseModel, Field


class NotificationSendIn(BaseModel):
    user_id: int
    title: str = Field(min_length=1, max_length=255)
    body: str
    data: dict[str, str] | None = None


class NotificationSendOut(BaseModel):
    success: bool
    message_id: str | None = None


class FcmTokenUpdateIn(BaseModel):
    # empty string is accepted: the user opts out of push notices
    fcm_token: str = Field(max_length=512)


class SuccessOut(BaseModel):
    success: bool
