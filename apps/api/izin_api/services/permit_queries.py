from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..core.errors import InvalidDateRange
from ..core.permit_rules import STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED
from ..models.permit import PermitRequest


@dataclass
class PermitStats:
    pending: int = 0
    approved: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.pending + self.approved + self.rejected


def _newest_first(stmt):
    return stmt.order_by(desc(PermitRequest.created_at), desc(PermitRequest.id))


def _check_range(start: date, end: date) -> None:
    if start > end:
        raise InvalidDateRange("start_date must not be after end_date")


def list_all(session: Session) -> list[PermitRequest]:
    return list(session.scalars(_newest_first(select(PermitRequest))).all())


def list_by_filter(
    session: Session,
    status: str | None = None,
    nik: str | None = None,
) -> list[PermitRequest]:
    stmt = select(PermitRequest)
    if status is not None:
        stmt = stmt.where(PermitRequest.status == status)
    if nik is not None:
        stmt = stmt.where(PermitRequest.nik == nik)
    return list(session.scalars(_newest_first(stmt)).all())


def list_by_date_range(session: Session, start: date, end: date) -> list[PermitRequest]:
    """Permits whose departure date falls in [start, end], both ends included."""
    _check_range(start, end)
    stmt = (
        select(PermitRequest)
        .where(PermitRequest.departure_date >= start)
        .where(PermitRequest.departure_date <= end)
    )
    return list(session.scalars(_newest_first(stmt)).all())


def get_by_id(session: Session, permit_id: int) -> PermitRequest | None:
    return session.get(PermitRequest, permit_id)


def count_by_status(
    session: Session,
    start: date | None = None,
    end: date | None = None,
) -> PermitStats:
    if start is not None and end is not None:
        _check_range(start, end)
    stmt = select(PermitRequest.status, func.count(PermitRequest.id)).group_by(PermitRequest.status)
    if start is not None:
        stmt = stmt.where(PermitRequest.departure_date >= start)
    if end is not None:
        stmt = stmt.where(PermitRequest.departure_date <= end)

    counts = {status: total for status, total in session.execute(stmt).all()}
    return PermitStats(
        pending=counts.get(STATUS_PENDING, 0),
        approved=counts.get(STATUS_APPROVED, 0),
        rejected=counts.get(STATUS_REJECTED, 0),
    )
