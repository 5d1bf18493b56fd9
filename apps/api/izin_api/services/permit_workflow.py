"""Permit request lifecycle: submission and the one-shot HR/Admin decision."""
from __future__ import annotations

from datetime import date, datetime, time
import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from ..core.errors import InsufficientPermissions, InvalidDateRange, NotFound, NotPending
from ..core.permit_rules import DECISION_STATUS, STATUS_PENDING, can_decide, can_transition
from ..models.permit import PermitRequest
from ..models.user import User
from ..schemas.permit import PermitCreateIn

logger = logging.getLogger(__name__)


def _at(d: date, hhmm: str) -> datetime:
    return datetime.combine(d, time.fromisoformat(hhmm))


def submit_permit(session: Session, payload: PermitCreateIn) -> PermitRequest:
    departure = _at(payload.departure_date, payload.departure_time)
    returning = _at(payload.return_date, payload.return_time)
    if returning < departure:
        raise InvalidDateRange()

    permit = PermitRequest(
        requester_name=payload.requester_name,
        nik=payload.nik,
        driver_name=payload.driver_name,
        plate_number=payload.plate_number,
        purpose=payload.purpose,
        departure_date=payload.departure_date,
        departure_time=payload.departure_time,
        return_date=payload.return_date,
        return_time=payload.return_time,
        remarks=payload.remarks,
        status=STATUS_PENDING,
    )
    session.add(permit)
    session.commit()
    session.refresh(permit)
    logger.info("permit submitted (permit_id=%s, nik=%s)", permit.id, permit.nik)
    return permit


def decide_permit(
    session: Session,
    permit_id: int,
    outcome: str,
    approval_date: date,
    approval_time: str,
    actor: User,
) -> PermitRequest:
    """Move a Pending permit to Disetujui or Ditolak.

    The pending check and the write are a single conditional UPDATE, so of two
    concurrent decisions on the same permit only one can match a row.
    """
    if not can_decide(actor.role):
        raise InsufficientPermissions("Only HR or Admin users can update permit status")
    if outcome not in DECISION_STATUS or not can_transition(STATUS_PENDING, outcome):
        raise ValueError(f"Invalid outcome: {outcome}")

    stmt = (
        update(PermitRequest)
        .where(PermitRequest.id == permit_id)
        .where(PermitRequest.status == STATUS_PENDING)
        .values(status=outcome, approval_date=approval_date, approval_time=approval_time)
        .execution_options(synchronize_session=False)
    )
    result = session.execute(stmt)
    if result.rowcount != 1:
        session.rollback()
        if session.get(PermitRequest, permit_id) is None:
            raise NotFound("Permit request not found")
        raise NotPending("Cannot update status. Permit request is not in pending status")
    session.commit()

    permit = session.get(PermitRequest, permit_id, populate_existing=True)
    logger.info("permit %s status updated to %s by user %s", permit_id, outcome, actor.id)
    return permit
