import uuid
from datetime import datetime

from sqlalchemy import Boolean, Enum, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadcatch.core.database import Base


class Tenant(Base):
    """A customer company: owns one form definition, one SMS stream, one credit balance.

    The schedule field is a JSONB dict:
        {
            "enabled": false,
            "days": [1, 2, 3, 4, 5],   # 0 = Sunday
            "start_time": "09:00",
            "end_time": "18:00"
        }
    """

    __tablename__ = "tenants"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    plan: Mapped[str] = mapped_column(
        Enum("basic", "pro", name="tenant_plan"),
        nullable=False,
        default="basic",
        server_default="basic",
    )
    contact_name: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))
    address: Mapped[str | None] = mapped_column(Text)
    siret: Mapped[str | None] = mapped_column(String(14))
    vat_number: Mapped[str | None] = mapped_column(String(32))
    notes: Mapped[str | None] = mapped_column(Text)
    sms_sender_id: Mapped[str] = mapped_column(String(11), nullable=False)
    auto_sms_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    sms_message: Mapped[str] = mapped_column(Text, nullable=False)
    cooldown_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=180, server_default="180")
    schedule: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    form_definition: Mapped["FormDefinition | None"] = relationship(back_populates="tenant", uselist=False)
    submissions: Mapped[list["Submission"]] = relationship(back_populates="tenant")
    sms_logs: Mapped[list["SmsLog"]] = relationship(back_populates="tenant")
    credit: Mapped["Credit | None"] = relationship(back_populates="tenant", uselist=False)

    def __repr__(self) -> str:
        return f"<Tenant {self.name}>"
