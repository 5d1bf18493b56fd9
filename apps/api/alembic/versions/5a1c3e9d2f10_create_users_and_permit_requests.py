"""create users and permit_requests

Revision ID: 5a1c3e9d2f10
Revises:
Create Date: 2024-01-08 09:30:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5a1c3e9d2f10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nik", sa.String(length=50), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("fcm_token", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("nik", name="uq_users_nik"),
    )
    op.create_table(
        "permit_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("requester_name", sa.String(length=100), nullable=False),
        sa.Column("nik", sa.String(length=50), nullable=False),
        sa.Column("driver_name", sa.String(length=100), nullable=False),
        sa.Column("plate_number", sa.String(length=20), nullable=False),
        sa.Column("purpose", sa.Text(), nullable=False),
        sa.Column("departure_date", sa.Date(), nullable=False),
        sa.Column("departure_time", sa.String(length=5), nullable=False),
        sa.Column("return_date", sa.Date(), nullable=False),
        sa.Column("return_time", sa.String(length=5), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), server_default="Pending", nullable=False),
        sa.Column("approval_date", sa.Date(), nullable=True),
        sa.Column("approval_time", sa.String(length=5), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "(status = 'Pending' AND approval_date IS NULL AND approval_time IS NULL)"
            " OR (status IN ('Disetujui', 'Ditolak') AND approval_date IS NOT NULL AND approval_time IS NOT NULL)",
            name="ck_permit_requests_approval_fields",
        ),
    )
    op.create_index("ix_permit_requests_nik", "permit_requests", ["nik"])
    op.create_index("ix_permit_requests_departure_date", "permit_requests", ["departure_date"])
    op.create_index("ix_permit_requests_status", "permit_requests", ["status"])


def downgrade() -> None:
    op.drop_index("ix_permit_requests_status", table_name="permit_requests")
    op.drop_index("ix_permit_requests_departure_date", table_name="permit_requests")
    op.drop_index("ix_permit_requests_nik", table_name="permit_requests")
    op.drop_table("permit_requests")
    op.drop_table("users")
