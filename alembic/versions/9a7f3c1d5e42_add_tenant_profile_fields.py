"""add tenant plan and company profile fields

Revision ID: 9a7f3c1d5e42
Revises: 4c1e9b2a7d30
Create Date: 2026-10-20 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "9a7f3c1d5e42"
down_revision: Union[str, None] = "4c1e9b2a7d30"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    tenant_plan = sa.Enum("basic", "pro", name="tenant_plan")
    tenant_plan.create(op.get_bind(), checkfirst=True)

    op.add_column("tenants", sa.Column("plan", tenant_plan, server_default="basic", nullable=False))
    op.add_column("tenants", sa.Column("contact_name", sa.String(length=255), nullable=True))
    op.add_column("tenants", sa.Column("phone", sa.String(length=64), nullable=True))
    op.add_column("tenants", sa.Column("address", sa.Text(), nullable=True))
    op.add_column("tenants", sa.Column("siret", sa.String(length=14), nullable=True))
    op.add_column("tenants", sa.Column("vat_number", sa.String(length=32), nullable=True))
    op.add_column("tenants", sa.Column("notes", sa.Text(), nullable=True))


def downgrade() -> None:
    op.drop_column("tenants", "notes")
    op.drop_column("tenants", "vat_number")
    op.drop_column("tenants", "siret")
    op.drop_column("tenants", "address")
    op.drop_column("tenants", "phone")
    op.drop_column("tenants", "contact_name")
    op.drop_column("tenants", "plan")
    sa.Enum(name="tenant_plan").drop(op.get_bind(), checkfirst=True)
