from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from ..core.permit_rules import STATUS_APPROVED, STATUS_REJECTED
from ..models.permit import PermitRequest
from ..models.user import User
from .push_service import PushResult, notify

logger = logging.getLogger(__name__)


STATUS_LABELS = {
    STATUS_APPROVED: "disetujui",
    STATUS_REJECTED: "ditolak",
}


def decision_message(permit: PermitRequest) -> tuple[str, str]:
    label = STATUS_LABELS.get(permit.status, permit.status)
    title = f"Izin kendaraan {label}"
    body = (
        f"Permohonan izin kendaraan {permit.plate_number} tujuan {permit.purpose} "
        f"({permit.departure_date.isoformat()} {permit.departure_time}) telah {label}."
    )
    return title, body


def notify_requester_permit_decided(session_factory: sessionmaker, permit_id: int) -> PushResult:
    """Background job run after a decision commits; never raises."""
    try:
        with session_factory() as session:
            permit = session.get(PermitRequest, permit_id)
            if not permit:
                logger.info("decision notice skipped: permit %s not found", permit_id)
                return PushResult(delivered=False)
            requester = session.scalar(select(User).where(User.nik == permit.nik))
            if not requester:
                logger.info("decision notice skipped: no user for nik %s (permit_id=%s)", permit.nik, permit_id)
                return PushResult(delivered=False)
            title, body = decision_message(permit)
            return notify(
                session,
                requester.id,
                title,
                body,
                data={"permit_id": str(permit.id), "status": permit.status},
            )
    except Exception:
        logger.exception("decision notice failed (permit_id=%s)", permit_id)
        return PushResult(delivered=False)
