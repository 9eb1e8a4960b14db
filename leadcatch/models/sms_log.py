import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadcatch.core.database import Base


class SmsLog(Base):
    """Outcome of one missed call: the qualification SMS was sent, filtered, or failed."""

    __tablename__ = "sms_logs"
    __table_args__ = (
        Index("ix_sms_logs_tenant_id", "tenant_id"),
        Index("ix_sms_logs_tenant_phone", "tenant_id", "phone"),
        Index("ix_sms_logs_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("tenants.id"), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        Enum("sent", "filtered", "error", name="sms_log_status"),
        nullable=False,
    )
    reason: Mapped[str] = mapped_column(String(64), nullable=False)
    call_id: Mapped[str | None] = mapped_column(String(128))
    provider_message_id: Mapped[str | None] = mapped_column(String(128))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    tenant: Mapped["Tenant"] = relationship(back_populates="sms_logs")

    def __repr__(self) -> str:
        return f"<SmsLog {self.phone} {self.status}/{self.reason}>"
