from datetime import date

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Date, DateTime, CheckConstraint, func
from .user import Base

class PermitRequest(Base):
    __tablename__ = "permit_requests"
    __table_args__ = (
        CheckConstraint(
            "(status = 'Pending' AND approval_date IS NULL AND approval_time IS NULL)"
            " OR (status IN ('Disetujui', 'Ditolak') AND approval_date IS NOT NULL AND approval_time IS NOT NULL)",
            name="ck_permit_requests_approval_fields",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    # identitas pemakai kendaraan
    requester_name: Mapped[str] = mapped_column(String(100))
    nik: Mapped[str] = mapped_column(String(50), index=True)
    driver_name: Mapped[str] = mapped_column(String(100))
    plate_number: Mapped[str] = mapped_column(String(20))
    purpose: Mapped[str] = mapped_column(Text)

    departure_date: Mapped[date] = mapped_column(Date, index=True)
    departure_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    return_date: Mapped[date] = mapped_column(Date)
    return_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(String(16), default="Pending", server_default="Pending", index=True)
    approval_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    approval_time: Mapped[str | None] = mapped_column(String(5), nullable=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
