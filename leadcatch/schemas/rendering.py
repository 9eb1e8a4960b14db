from typing import Literal

from pydantic import BaseModel, Field

from leadcatch.schemas.forms import AnswerValue

RenderMode = Literal["preview", "public"]

ControlKind = Literal[
    "heading",
    "text",
    "divider",
    "text_input",
    "text_area",
    "checkbox",
    "file",
    "contact",
    "marketing_optin",
]


class RenderedField(BaseModel):
    """One input of a composite control (contact_info sub-field)."""

    name: str
    label: str
    input_type: Literal["text", "email", "tel"] = "text"
    required: bool = False
    value: str = ""


class RenderedControl(BaseModel):
    """Description of one control on the rendered form.

    ``block_id`` is None only for the synthetic marketing opt-in control.
    ``value`` is None until the respondent has touched the control.
    """

    block_id: str | None
    variant: str | None
    kind: ControlKind
    label: str = ""
    required: bool = False
    interactive: bool = True
    placeholder: str | None = None
    multiline: bool = False
    accept: str | None = None
    value: AnswerValue | None = None
    fields: list[RenderedField] = Field(default_factory=list)


class RenderedFooter(BaseModel):
    address: str | None = None
    phone: str | None = None
    background_color: str
    text_color: str
    custom_text: str = ""


class RenderedForm(BaseModel):
    mode: RenderMode
    interactive: bool
    page_title: str
    logo_reference: str | None = None
    controls: list[RenderedControl] = Field(default_factory=list)
    footer: RenderedFooter
    submit_label: str
