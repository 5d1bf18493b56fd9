from datetime import date
from typing import Literal

from pydantic import BaseModel


class ExportIn(BaseModel):
    start_date: date
    end_date: date
    format: Literal["xlsx", "csv"] = "xlsx"


class ExportOut(BaseModel):
    file_url: str
    file_name: str
    total_records: int
