from datetime import date
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session, sessionmaker

from ..db import get_session, get_session_factory
from ..core.current_user import get_current_user
from ..core.date_ranges import resolve_range
from ..core.errors import InvalidDateRange, NotFound
from ..models.user import User
from ..schemas.permit import PermitCreateIn, PermitDecisionIn, PermitOut, PermitStatsOut
from ..services import permit_queries
from ..services.permit_events import notify_requester_permit_decided
from ..services.permit_workflow import decide_permit, submit_permit

router = APIRouter(prefix="/permits", tags=["permits"])

StatusParam = Literal["Pending", "Disetujui", "Ditolak"]
FilterTypeParam = Literal["today", "this_week", "this_month", "custom"]


@router.post("", response_model=PermitOut)
def create_permit(
    payload: PermitCreateIn,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    # TODO: restrict Karyawan to submitting for their own NIK once HR confirms the rule
    return submit_permit(session, payload)


@router.get("", response_model=list[PermitOut])
def list_permits(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
    status: StatusParam | None = Query(default=None),
    nik: str | None = Query(default=None),
):
    if status is None and nik is None:
        return permit_queries.list_all(session)
    return permit_queries.list_by_filter(session, status=status, nik=nik)


@router.get("/by-date-range", response_model=list[PermitOut])
def list_permits_by_date_range(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    filter_type: FilterTypeParam | None = Query(default=None),
):
    if filter_type is None and (start_date is None or end_date is None):
        raise InvalidDateRange("start_date and end_date are required")
    start, end = resolve_range(filter_type, start_date, end_date)
    return permit_queries.list_by_date_range(session, start, end)


@router.get("/stats", response_model=PermitStatsOut)
def permit_stats(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
):
    stats = permit_queries.count_by_status(session, start_date, end_date)
    return PermitStatsOut(
        pending=stats.pending,
        approved=stats.approved,
        rejected=stats.rejected,
        total=stats.total,
    )


@router.get("/{permit_id}", response_model=PermitOut)
def get_permit(
    permit_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    permit = permit_queries.get_by_id(session, permit_id)
    if not permit:
        raise NotFound("Permit request not found")
    return permit


@router.patch("/{permit_id}/status", response_model=PermitOut)
def update_status(
    permit_id: int,
    payload: PermitDecisionIn,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    session_factory: sessionmaker = Depends(get_session_factory),
    user: User = Depends(get_current_user),
):
    permit = decide_permit(
        session,
        permit_id,
        payload.status,
        payload.approval_date,
        payload.approval_time,
        actor=user,
    )
    background_tasks.add_task(notify_requester_permit_decided, session_factory, permit.id)
    return permit
