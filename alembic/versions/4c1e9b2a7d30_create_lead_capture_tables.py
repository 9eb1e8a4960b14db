"""create tenants, form definitions, submissions, sms logs and credit tables

Revision ID: 4c1e9b2a7d30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4c1e9b2a7d30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact_email", sa.String(length=255), nullable=False),
        sa.Column("sms_sender_id", sa.String(length=11), nullable=False),
        sa.Column("auto_sms_enabled", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("sms_message", sa.Text(), nullable=False),
        sa.Column("cooldown_seconds", sa.Integer(), server_default="180", nullable=False),
        sa.Column("schedule", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "form_definitions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("enabled", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("page_title", sa.String(length=255), nullable=False),
        sa.Column("logo_reference", sa.String(length=500), nullable=True),
        sa.Column("footer_address", sa.Text(), nullable=True),
        sa.Column("footer_phone", sa.String(length=64), nullable=True),
        sa.Column("footer_style", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("blocks", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("marketing_optin", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("notifications", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id"),
    )
    op.create_index("ix_form_definitions_tenant_id", "form_definitions", ["tenant_id"], unique=True)

    op.create_table(
        "submissions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("ticket_number", sa.String(length=16), nullable=False),
        sa.Column("phone", sa.String(length=255), nullable=False),
        sa.Column("answers", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("marketing_optin", sa.Boolean(), server_default="false", nullable=False),
        sa.Column(
            "status",
            sa.Enum("new", "pending", "done", "archived", name="submission_status"),
            server_default="new",
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_submissions_tenant_id", "submissions", ["tenant_id"], unique=False)
    op.create_index("ix_submissions_tenant_status", "submissions", ["tenant_id", "status"], unique=False)
    op.create_index("ix_submissions_ticket_number", "submissions", ["ticket_number"], unique=False)
    op.create_index("ix_submissions_created_at", "submissions", ["created_at"], unique=False)

    op.create_table(
        "sms_logs",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("sent", "filtered", "error", name="sms_log_status"),
            nullable=False,
        ),
        sa.Column("reason", sa.String(length=64), nullable=False),
        sa.Column("call_id", sa.String(length=128), nullable=True),
        sa.Column("provider_message_id", sa.String(length=128), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sms_logs_tenant_id", "sms_logs", ["tenant_id"], unique=False)
    op.create_index("ix_sms_logs_tenant_phone", "sms_logs", ["tenant_id", "phone"], unique=False)
    op.create_index("ix_sms_logs_created_at", "sms_logs", ["created_at"], unique=False)

    op.create_table(
        "credits",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("balance", sa.Float(), nullable=False),
        sa.Column("total_purchased", sa.Float(), nullable=False),
        sa.Column("total_consumed", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id"),
    )
    op.create_index("ix_credits_tenant_id", "credits", ["tenant_id"], unique=True)

    op.create_table(
        "credit_transactions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("credit_id", sa.UUID(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("amount_paid", sa.Float(), nullable=False),
        sa.Column(
            "type",
            sa.Enum("purchase", "consume", "adjustment", name="credit_transaction_type"),
            nullable=False,
        ),
        sa.Column("reference", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["credit_id"], ["credits.id"]),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_credit_transactions_tenant_id", "credit_transactions", ["tenant_id"], unique=False)
    op.create_index("ix_credit_transactions_credit_id", "credit_transactions", ["credit_id"], unique=False)
    op.create_index("ix_credit_transactions_created_at", "credit_transactions", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_credit_transactions_created_at", table_name="credit_transactions")
    op.drop_index("ix_credit_transactions_credit_id", table_name="credit_transactions")
    op.drop_index("ix_credit_transactions_tenant_id", table_name="credit_transactions")
    op.drop_table("credit_transactions")
    op.drop_index("ix_credits_tenant_id", table_name="credits")
    op.drop_table("credits")
    op.drop_index("ix_sms_logs_created_at", table_name="sms_logs")
    op.drop_index("ix_sms_logs_tenant_phone", table_name="sms_logs")
    op.drop_index("ix_sms_logs_tenant_id", table_name="sms_logs")
    op.drop_table("sms_logs")
    op.drop_index("ix_submissions_created_at", table_name="submissions")
    op.drop_index("ix_submissions_ticket_number", table_name="submissions")
    op.drop_index("ix_submissions_tenant_status", table_name="submissions")
    op.drop_index("ix_submissions_tenant_id", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_form_definitions_tenant_id", table_name="form_definitions")
    op.drop_table("form_definitions")
    op.drop_table("tenants")
    sa.Enum(name="credit_transaction_type").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="sms_log_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="submission_status").drop(op.get_bind(), checkfirst=True)
