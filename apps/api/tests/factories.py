from datetime import date

from izin_api.core.security import hash_password
from izin_api.schemas.permit import PermitCreateIn

# bcrypt is slow on purpose; hash once per run
PASSWORD = "password"
PASSWORD_HASH = hash_password(PASSWORD)


def permit_payload(**overrides) -> PermitCreateIn:
    fields = dict(
        requester_name="John Doe",
        nik="001",
        driver_name="Jane Smith",
        plate_number="B 1234 ABC",
        purpose="Jakarta - Bandung",
        departure_date=date(2024, 1, 15),
        departure_time="08:00",
        return_date=date(2024, 1, 16),
        return_time="17:00",
        remarks="Perjalanan dinas resmi",
    )
    fields.update(overrides)
    return PermitCreateIn(**fields)


def permit_json(**overrides) -> dict:
    return permit_payload(**overrides).model_dump(mode="json")
