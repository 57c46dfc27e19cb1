"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "patients",
        sa.Column("patient_id", sa.String(length=10), nullable=False),
        sa.Column("name", sa.String(length=40), nullable=False),
        sa.Column("age", sa.SmallInteger(), nullable=False),
        sa.Column("gender", sa.String(length=1), nullable=False),
        sa.Column("contact_number", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("patient_id", name="pk_patients"),
    )
    op.create_table(
        "doctors",
        sa.Column("doctor_id", sa.String(length=10), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("specialization", sa.String(length=40), nullable=False),
        sa.Column("fees", sa.Numeric(precision=10, scale=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("doctor_id", name="pk_doctors"),
    )
    op.create_table(
        "appointments",
        sa.Column("appointment_no", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("patient_id", sa.String(length=10), nullable=False),
        sa.Column("doctor_id", sa.String(length=10), nullable=False),
        sa.Column("date_of_appointment", sa.Date(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.doctor_id"],
            name="fk_appointments_doctor_id_doctors",
        ),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.patient_id"],
            name="fk_appointments_patient_id_patients",
        ),
        sa.PrimaryKeyConstraint("appointment_no", name="pk_appointments"),
        sa.UniqueConstraint(
            "doctor_id", "date_of_appointment", name="uq_appointments_doctor_date"
        ),
        sa.UniqueConstraint(
            "patient_id", "date_of_appointment", name="uq_appointments_patient_date"
        ),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_appointments_patient_id", "appointments", ["patient_id"], unique=False
    )
    op.create_index(
        "ix_appointments_doctor_id", "appointments", ["doctor_id"], unique=False
    )
    op.create_index(
        "ix_appointments_date_of_appointment",
        "appointments",
        ["date_of_appointment"],
        unique=False,
    )
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=60), nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("user_id", name="pk_users"),
        sa.UniqueConstraint("user_name", name="uq_users_user_name"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_table(
        "id_sequences",
        sa.Column("prefix", sa.String(length=1), nullable=False),
        sa.Column("last_value", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("prefix", name="pk_id_sequences"),
    )


def downgrade() -> None:
    op.drop_table("id_sequences")
    op.drop_table("users")
    op.drop_index("ix_appointments_date_of_appointment", table_name="appointments")
    op.drop_index("ix_appointments_doctor_id", table_name="appointments")
    op.drop_index("ix_appointments_patient_id", table_name="appointments")
    op.drop_table("appointments")
    op.drop_table("doctors")
    op.drop_table("patients")
