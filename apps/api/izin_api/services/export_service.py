from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date, datetime, timezone
import io
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import ExportFailed
from ..core.storage import StorageError, save_export
from ..models.permit import PermitRequest
from .permit_queries import list_by_date_range

logger = logging.getLogger(__name__)

PLACEHOLDER = "-"

HEADERS = [
    "No",
    "Nama Pemakai",
    "NIK",
    "Nama Sopir",
    "Nomor Polisi",
    "Tujuan",
    "Tanggal Berangkat",
    "Jam Berangkat",
    "Tanggal Kembali",
    "Jam Kembali",
    "Keterangan",
    "Status",
    "Tanggal Persetujuan",
    "Jam Persetujuan",
    "Tanggal Dibuat",
]

# .xlsx files hold CSV text as well; Excel opens them after an extension warning
CONTENT_TYPES = {
    "xlsx": "text/csv; charset=utf-8",
    "csv": "text/csv; charset=utf-8",
}


@dataclass
class ExportResult:
    file_url: str
    file_name: str
    total_records: int


def format_date(value: date | datetime | None) -> str:
    # id-ID style: 15/1/2024
    if value is None:
        return PLACEHOLDER
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.day}/{value.month}/{value.year}"


def _or_placeholder(value: str | None) -> str:
    return value if value else PLACEHOLDER


def export_row(index: int, permit: PermitRequest) -> list[str]:
    return [
        str(index),
        permit.requester_name,
        permit.nik,
        permit.driver_name,
        permit.plate_number,
        permit.purpose,
        format_date(permit.departure_date),
        permit.departure_time,
        format_date(permit.return_date),
        permit.return_time,
        _or_placeholder(permit.remarks),
        permit.status,
        format_date(permit.approval_date),
        _or_placeholder(permit.approval_time),
        format_date(permit.created_at),
    ]


def render_csv(permits: list[PermitRequest]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADERS)
    for index, permit in enumerate(permits, start=1):
        writer.writerow(export_row(index, permit))
    # no trailing newline: an empty export is exactly the header line
    return buf.getvalue().rstrip("\n")


def export_file_name(start: date, end: date, generated_at: datetime, fmt: str) -> str:
    return f"izin_kendaraan_{start.isoformat()}_to_{end.isoformat()}_{generated_at.date().isoformat()}.{fmt}"


def export_range(
    session: Session,
    start: date,
    end: date,
    fmt: str = "xlsx",
    now: datetime | None = None,
) -> ExportResult:
    if fmt not in CONTENT_TYPES:
        raise ValueError(f"Unsupported export format: {fmt}")
    now = now or datetime.now(timezone.utc)

    try:
        permits = list_by_date_range(session, start, end)
    except SQLAlchemyError as exc:
        logger.exception("export query failed (%s..%s)", start, end)
        raise ExportFailed() from exc
    permits.sort(key=lambda p: (p.departure_date, p.departure_time, p.id))

    content = render_csv(permits).encode("utf-8")
    file_name = export_file_name(start, end, now, fmt)
    try:
        file_url = save_export(file_name=file_name, content=content, content_type=CONTENT_TYPES[fmt])
    except StorageError as exc:
        raise ExportFailed() from exc

    logger.info("export written: %s (%d records)", file_name, len(permits))
    return ExportResult(file_url=file_url, file_name=file_name, total_records=len(permits))
