ROLE_EMPLOYEE = "Karyawan"
ROLE_HR = "HR"
ROLE_ADMIN = "Admin"

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Disetujui"
STATUS_REJECTED = "Ditolak"
DECISION_STATUS = {STATUS_APPROVED, STATUS_REJECTED}

# Disetujui / Ditolak are terminal.
TRANSITIONS: dict[str, set[str]] = {
    STATUS_PENDING: {STATUS_APPROVED, STATUS_REJECTED},
    STATUS_APPROVED: set(),
    STATUS_REJECTED: set(),
}

DECIDER_ROLES = {ROLE_HR, ROLE_ADMIN}
EXPORT_ROLES = {ROLE_ADMIN}


def can_transition(old: str, new: str) -> bool:
    return new in TRANSITIONS.get(old, set())


def can_decide(role: str | None) -> bool:
    return role in DECIDER_ROLES
