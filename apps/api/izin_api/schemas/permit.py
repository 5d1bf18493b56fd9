from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

# HH:MM, 24 jam
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class PermitCreateIn(BaseModel):
    requester_name: str = Field(min_length=1, max_length=100)
    nik: str = Field(min_length=1, max_length=50)
    driver_name: str = Field(min_length=1, max_length=100)
    plate_number: str = Field(min_length=1, max_length=20)
    purpose: str = Field(min_length=1)
    departure_date: date
    departure_time: str = Field(pattern=TIME_PATTERN)
    return_date: date
    return_time: str = Field(pattern=TIME_PATTERN)
    remarks: str | None = None


class PermitDecisionIn(BaseModel):
    status: Literal["Disetujui", "Ditolak"]
    approval_date: date
    approval_time: str = Field(pattern=TIME_PATTERN)


class PermitOut(BaseModel):
    id: int
    requester_name: str
    nik: str
    driver_name: str
    plate_number: str
    purpose: str
    departure_date: date
    departure_time: str
    return_date: date
    return_time: str
    remarks: str | None = None
    status: str
    approval_date: date | None = None
    approval_time: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PermitStatsOut(BaseModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0
