from sqlalchemy.orm import Session
from sqlalchemy import select
import os

from ..models.user import User
from .permit_rules import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_HR
from .security import hash_password


def seed_users(session: Session) -> None:
    """
    DEV user seed.
    - Existing NIKs keep their password and device token; name/role are refreshed.
    """
    password = os.getenv("SEED_PASSWORD", "password")
    seeds = [
        {"nik": "001", "name": "Ahmad Pratama", "role": ROLE_EMPLOYEE},
        {"nik": "002", "name": "Siti Rahayu", "role": ROLE_HR},
        {"nik": "003", "name": "Budi Santoso", "role": ROLE_ADMIN},
    ]

    for s in seeds:
        exists = session.scalar(select(User).where(User.nik == s["nik"]))

        if exists:
            exists.name = s["name"]
            exists.role = s["role"]
            continue

        session.add(
            User(
                nik=s["nik"],
                password=hash_password(password),
                name=s["name"],
                role=s["role"],
            )
        )

    session.commit()
