"""add_program_tables

Revision ID: b5d82f0e6a17
Revises: 7c1e4a9b2d30
Create Date: 2026-09-14 09:30:00.000000
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "b5d82f0e6a17"
down_revision: Union[str, None] = "7c1e4a9b2d30"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    """Create programs, mentors, classes, schedules, students and enrollments."""
    op.create_table(
        "programs",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "mentors",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "classes",
        _id(),
        sa.Column("program_id", sa.String(length=36), nullable=False),
        sa.Column("mentor_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("min_age", sa.Integer(), nullable=False),
        sa.Column("max_age", sa.Integer(), nullable=False),
        sa.Column("status", _enum("class_status", "active", "inactive"), nullable=False),
        sa.Column("image", sa.String(length=255), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["mentor_id"], ["mentors.id"], ondelete="CASCADE"),
        sa.CheckConstraint("min_age <= max_age", name="ck_class_age_range"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_classes_program_id"), "classes", ["program_id"])
    op.create_index(op.f("ix_classes_mentor_id"), "classes", ["mentor_id"])

    op.create_table(
        "schedules",
        _id(),
        sa.Column("class_id", sa.String(length=36), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "class_id", "day_of_week", "start_time", name="uq_schedule_class_day_start"
        ),
        sa.CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_schedule_day_of_week"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_schedules_class_id"), "schedules", ["class_id"])

    op.create_table(
        "students",
        _id(),
        sa.Column("student_name", sa.String(length=255), nullable=False),
        sa.Column("student_age", sa.Integer(), nullable=False),
        sa.Column("parent_name", sa.String(length=255), nullable=False),
        sa.Column("whatsapp", sa.String(length=15), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "enrollments",
        _id(),
        sa.Column("student_id", sa.String(length=36), nullable=False),
        sa.Column("class_id", sa.String(length=36), nullable=False),
        sa.Column(
            "status",
            _enum(
                "enrollment_status",
                "registered",
                "confirmed",
                "active",
                "dropped",
                "rejected",
                "completed",
            ),
            nullable=False,
        ),
        sa.Column("register_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("student_id", "class_id", name="uq_enrollment_student_class"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_enrollments_student_id"), "enrollments", ["student_id"])
    op.create_index(op.f("ix_enrollments_class_id"), "enrollments", ["class_id"])


def downgrade() -> None:
    """Drop program tables in dependency order."""
    op.drop_index(op.f("ix_enrollments_class_id"), table_name="enrollments")
    op.drop_index(op.f("ix_enrollments_student_id"), table_name="enrollments")
    op.drop_table("enrollments")
    op.drop_table("students")
    op.drop_index(op.f("ix_schedules_class_id"), table_name="schedules")
    op.drop_table("schedules")
    op.drop_index(op.f("ix_classes_mentor_id"), table_name="classes")
    op.drop_index(op.f("ix_classes_program_id"), table_name="classes")
    op.drop_table("classes")
    op.drop_table("mentors")
    op.drop_table("programs")
