"""Create users and bill_payments tables

Revision ID: a1c4e7b20f11
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa

revision = "a1c4e7b20f11"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("user", "admin", name="user_role")
payment_status = sa.Enum("success", "failure", name="payment_status")
approval_status = sa.Enum("pending", "approved", "rejected", name="approval_status")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_is_active", "users", ["is_active"])

    op.create_table(
        "bill_payments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("consumer_id", sa.String(length=255), nullable=False),
        sa.Column("plan_name", sa.String(length=100), nullable=False),
        sa.Column("units_used", sa.Numeric(14, 4), nullable=False),
        sa.Column("amount_paid", sa.Numeric(20, 4), nullable=False),
        sa.Column("remaining_units", sa.Numeric(14, 4), nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        sa.Column("approval_status", approval_status, nullable=False),
        sa.Column("transaction_date", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_bill_payments_id", "bill_payments", ["id"])
    op.create_index("ix_bill_payments_user_id", "bill_payments", ["user_id"])
    op.create_index("ix_bill_payments_consumer_id", "bill_payments", ["consumer_id"])
    op.create_index("ix_bill_payments_approval_status", "bill_payments", ["approval_status"])
    op.create_index("ix_bill_payments_transaction_date", "bill_payments", ["transaction_date"])


def downgrade() -> None:
    op.drop_table("bill_payments")
    op.drop_table("users")
    bind = op.get_bind()
    approval_status.drop(bind, checkfirst=True)
    payment_status.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
