from datetime import datetime

from pydantic import BaseModel


class UserOut(BaseModel):
    id: int
    nik: str
    name: str
    role: str
    fcm_token: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
