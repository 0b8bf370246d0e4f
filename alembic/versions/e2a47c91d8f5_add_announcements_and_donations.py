"""add_announcements_and_donations

Revision ID: e2a47c91d8f5
Revises: b5d82f0e6a17
Create Date: 2026-09-21 14:00:00.000000
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "e2a47c91d8f5"
down_revision: Union[str, None] = "b5d82f0e6a17"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


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


def upgrade() -> None:
    """Create announcements, donation campaigns and their allocations."""
    op.create_table(
        "announcements",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column(
            "category",
            sa.Enum(
                "jadwal",
                "libur",
                "event",
                "umum",
                name="announcement_category",
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "donations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "open",
                "finished",
                "upcoming",
                name="donation_status",
                native_enum=False,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("target_amount", sa.Integer(), nullable=False),
        sa.Column("collected_amount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("percent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("donor_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("google_form_url", sa.Text(), nullable=False),
        sa.Column("image", sa.String(length=255), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("target_amount > 0", name="ck_donation_target_positive"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "donation_allocations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("donation_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("percent", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["donation_id"], ["donations.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "percent >= 0 AND percent <= 100", name="ck_allocation_percent_range"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_donation_allocations_donation_id"), "donation_allocations", ["donation_id"]
    )


def downgrade() -> None:
    """Drop donations, allocations and announcements."""
    op.drop_index(op.f("ix_donation_allocations_donation_id"), table_name="donation_allocations")
    op.drop_table("donation_allocations")
    op.drop_table("donations")
    op.drop_table("announcements")
