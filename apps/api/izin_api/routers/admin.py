from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from ..db import get_session
from ..core.current_user import get_current_user, require_roles
from ..core.permit_rules import EXPORT_ROLES
from ..core.storage import is_object_storage, local_export_path
from ..models.user import User
from ..schemas.export import ExportIn, ExportOut
from ..services.export_service import export_range

router = APIRouter(tags=["admin"])


@router.post("/admin/export", response_model=ExportOut)
def export_permits(
    payload: ExportIn,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    require_roles(user, EXPORT_ROLES)
    result = export_range(session, payload.start_date, payload.end_date, fmt=payload.format)
    return ExportOut(
        file_url=result.file_url,
        file_name=result.file_name,
        total_records=result.total_records,
    )


@router.get("/exports/{file_name}")
def download_export(file_name: str, user: User = Depends(get_current_user)):
    # every row carries a requester NIK
    require_roles(user, EXPORT_ROLES)
    if is_object_storage():
        raise HTTPException(status_code=404, detail="Not found")
    path = local_export_path(file_name)
    if path is None:
        raise HTTPException(status_code=400, detail="Invalid path")
    if not path.exists():
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(str(path), media_type="text/csv", filename=file_name)
