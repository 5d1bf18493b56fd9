from pydantic import BaseModel, Field, field_validator

from .user import UserOut


class LoginIn(BaseModel):
    nik: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=72)
    fcm_token: str | None = Field(default=None, max_length=512)

    @field_validator("password")
    @classmethod
    def login_password_bytes_le_72(cls, v: str) -> str:
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be <= 72 bytes (bcrypt limit).")
        return v


class LoginOut(BaseModel):
    user: UserOut
    token: str
    token_type: str = "bearer"
