import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadcatch.core.database import Base


class FormDefinition(Base):
    """A tenant's public web form.

    The blocks column is a JSONB array; list position is the render and
    answer order. Each entry is a dict:
        {
            "id": "blk_3f9a...",
            "variant": "header" | "paragraph" | "short_text" | "long_text" | "photo"
                       | "video" | "checkbox" | "separator" | "contact_info",
            "label": "Vos coordonnées",
            "required": true/false,
            "placeholder": "Réponse..."   # short_text / long_text only
        }

    The notifications column maps each channel name (admin_email, admin_sms,
    client_email, client_sms) to
        {"enabled": bool, "destination": str, "subject_template": str | null, "body_template": str}
    """

    __tablename__ = "form_definitions"
    __table_args__ = (Index("ix_form_definitions_tenant_id", "tenant_id", unique=True),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("tenants.id"), nullable=False, unique=True
    )
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    page_title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    logo_reference: Mapped[str | None] = mapped_column(String(500))
    footer_address: Mapped[str | None] = mapped_column(Text)
    footer_phone: Mapped[str | None] = mapped_column(String(64))
    footer_style: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    blocks: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    marketing_optin: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    notifications: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    tenant: Mapped["Tenant"] = relationship(back_populates="form_definition")

    def __repr__(self) -> str:
        return f"<FormDefinition tenant={self.tenant_id} blocks={len(self.blocks or [])}>"
