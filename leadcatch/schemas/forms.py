from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


class BlockVariant(str, Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    PHOTO = "photo"
    VIDEO = "video"
    CHECKBOX = "checkbox"
    SEPARATOR = "separator"
    CONTACT_INFO = "contact_info"


class BlockDefinition(BaseModel):
    """One question or content unit of a form. Position in the list is its order."""

    id: str = Field(..., min_length=1, max_length=64)
    variant: BlockVariant
    label: str = Field("", max_length=2000)
    required: bool = False
    placeholder: str | None = Field(None, max_length=255)


class ContactValue(BaseModel):
    """Composite answer of a contact_info block.

    Field names match the keys submitted by the public form exactly.
    """

    lastName: str = ""
    firstName: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


CONTACT_FIELDS = tuple(ContactValue.model_fields)

AnswerValue = str | bool | ContactValue


# ---------------------------------------------------------------------------
# Page-level configuration
# ---------------------------------------------------------------------------


class FooterStyle(BaseModel):
    background_color: str = Field("#f1f5f9", max_length=32)
    text_color: str = Field("#64748b", max_length=32)
    custom_text: str = Field("", max_length=1000)


class MarketingOptin(BaseModel):
    enabled: bool = False
    prompt_text: str = Field(
        "Je souhaite recevoir des offres exclusives et promotions.",
        max_length=1000,
    )


ChannelName = Literal["admin_email", "admin_sms", "client_email", "client_sms"]


class NotificationChannelConfig(BaseModel):
    """Delivery settings of one notification channel.

    ``destination`` is only read for admin channels; client channels are
    addressed to the respondent's contact block.
    """

    enabled: bool = False
    destination: str = Field("", max_length=255)
    subject_template: str | None = Field(None, max_length=500)
    body_template: str = Field("", max_length=5000)


class NotificationSettings(BaseModel):
    admin_email: NotificationChannelConfig = Field(default_factory=NotificationChannelConfig)
    admin_sms: NotificationChannelConfig = Field(default_factory=NotificationChannelConfig)
    client_email: NotificationChannelConfig = Field(default_factory=NotificationChannelConfig)
    client_sms: NotificationChannelConfig = Field(default_factory=NotificationChannelConfig)

    def channel(self, name: ChannelName) -> NotificationChannelConfig:
        return getattr(self, name)


# ---------------------------------------------------------------------------
# Form definition
# ---------------------------------------------------------------------------


class FormDefinition(BaseModel):
    """A tenant's complete public form: ordered blocks plus page metadata."""

    model_config = ConfigDict(from_attributes=True)

    enabled: bool = True
    page_title: str = Field("", max_length=255)
    logo_reference: str | None = Field(None, max_length=500)
    footer_address: str | None = None
    footer_phone: str | None = Field(None, max_length=64)
    footer_style: FooterStyle = Field(default_factory=FooterStyle)
    blocks: list[BlockDefinition] = Field(default_factory=list)
    marketing_optin: MarketingOptin = Field(default_factory=MarketingOptin)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    @field_validator("blocks")
    @classmethod
    def _unique_block_ids(cls, blocks: list[BlockDefinition]) -> list[BlockDefinition]:
        seen: set[str] = set()
        for block in blocks:
            if block.id in seen:
                raise ValueError(f"Duplicate block id: {block.id}")
            seen.add(block.id)
        return blocks

    def find_block(self, block_id: str) -> BlockDefinition | None:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None


# ---------------------------------------------------------------------------
# Editor requests
# ---------------------------------------------------------------------------


class BlockCreate(BaseModel):
    variant: BlockVariant


class BlockUpdate(BaseModel):
    label: str | None = Field(None, max_length=2000)
    required: bool | None = None
    placeholder: str | None = Field(None, max_length=255)


class BlockMove(BaseModel):
    direction: Literal["up", "down"]


class PaletteEntry(BaseModel):
    variant: BlockVariant
    title: str
    supports_required: bool


class UploadResponse(BaseModel):
    reference: str
    content_type: str | None
    size_bytes: int
