import uuid
from datetime import datetime

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadcatch.core.database import Base


class Submission(Base):
    """One completed public form.

    The answers column is an ordered JSONB array, one entry per answered block,
    with the block label copied at submission time:
        [
            {"block_id": "contact_1", "label": "Vos coordonnées",
             "value": {"lastName": "...", "firstName": "...", "email": "...", "phone": "...", "address": "..."}},
            {"block_id": "b2", "label": "Description", "value": "Fuite sous l'évier"},
            {"block_id": "legal_1", "label": "J'accepte ...", "value": true}
        ]
    """

    __tablename__ = "submissions"
    __table_args__ = (
        Index("ix_submissions_tenant_id", "tenant_id"),
        Index("ix_submissions_tenant_status", "tenant_id", "status"),
        Index("ix_submissions_ticket_number", "ticket_number"),
        Index("ix_submissions_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("tenants.id"), nullable=False)
    ticket_number: Mapped[str] = mapped_column(String(16), nullable=False)
    phone: Mapped[str] = mapped_column(String(255), nullable=False)
    answers: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    marketing_optin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    status: Mapped[str] = mapped_column(
        Enum("new", "pending", "done", "archived", name="submission_status"),
        nullable=False,
        default="new",
        server_default="new",
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    tenant: Mapped["Tenant"] = relationship(back_populates="submissions")

    def __repr__(self) -> str:
        return f"<Submission {self.ticket_number} ({self.status})>"
