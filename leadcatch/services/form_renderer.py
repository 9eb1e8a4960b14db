"""Form renderer — builds the control tree shown in the editor preview and on the public page.

``render_form`` is a pure function of the form definition and the values
entered so far; preview and public mode only differ in the ``interactive``
flag of each control.
"""

from collections.abc import Callable, Mapping

from leadcatch.schemas.forms import (
    AnswerValue,
    BlockDefinition,
    BlockVariant,
    ContactValue,
    FormDefinition,
)
from leadcatch.schemas.rendering import (
    RenderedControl,
    RenderedField,
    RenderedFooter,
    RenderedForm,
    RenderMode,
)
from leadcatch.services.answers import REQUIRED_CONTACT_FIELDS
from leadcatch.services.blocks import ensure_exhaustive, is_required

SUBMIT_LABEL = "ENVOYER MA DEMANDE"

# (field name, label, input type)
CONTACT_FIELD_LAYOUT = (
    ("lastName", "Nom", "text"),
    ("firstName", "Prénom", "text"),
    ("email", "Email", "email"),
    ("phone", "Téléphone", "tel"),
    ("address", "Adresse complète", "text"),
)

_BlockRenderer = Callable[[BlockDefinition, AnswerValue | None, bool], RenderedControl]


def _static(kind: str) -> _BlockRenderer:
    def render_static(block: BlockDefinition, value: AnswerValue | None, interactive: bool) -> RenderedControl:
        return RenderedControl(
            block_id=block.id,
            variant=block.variant.value,
            kind=kind,
            label=block.label,
            interactive=False,
        )

    return render_static


def _text(multiline: bool) -> _BlockRenderer:
    def render_text(block: BlockDefinition, value: AnswerValue | None, interactive: bool) -> RenderedControl:
        return RenderedControl(
            block_id=block.id,
            variant=block.variant.value,
            kind="text_area" if multiline else "text_input",
            label=block.label,
            required=is_required(block),
            interactive=interactive,
            placeholder=block.placeholder,
            multiline=multiline,
            value=value if isinstance(value, str) else None,
        )

    return render_text


def _file(accept: str) -> _BlockRenderer:
    def render_file(block: BlockDefinition, value: AnswerValue | None, interactive: bool) -> RenderedControl:
        return RenderedControl(
            block_id=block.id,
            variant=block.variant.value,
            kind="file",
            label=block.label,
            required=is_required(block),
            interactive=interactive,
            accept=accept,
            value=value if isinstance(value, str) and value else None,
        )

    return render_file


def _checkbox(block: BlockDefinition, value: AnswerValue | None, interactive: bool) -> RenderedControl:
    return RenderedControl(
        block_id=block.id,
        variant=block.variant.value,
        kind="checkbox",
        label=block.label,
        required=is_required(block),
        interactive=interactive,
        # Absent, not False, until the respondent touches it
        value=value if isinstance(value, bool) else None,
    )


def _contact(block: BlockDefinition, value: AnswerValue | None, interactive: bool) -> RenderedControl:
    contact = value if isinstance(value, ContactValue) else None
    required = is_required(block)
    fields = [
        RenderedField(
            name=name,
            label=label,
            input_type=input_type,
            required=required and name in REQUIRED_CONTACT_FIELDS,
            value=getattr(contact, name) if contact else "",
        )
        for name, label, input_type in CONTACT_FIELD_LAYOUT
    ]
    return RenderedControl(
        block_id=block.id,
        variant=block.variant.value,
        kind="contact",
        label=block.label,
        required=required,
        interactive=interactive,
        value=contact,
        fields=fields,
    )


_BLOCK_RENDERERS: dict[BlockVariant, _BlockRenderer] = {
    BlockVariant.HEADER: _static("heading"),
    BlockVariant.PARAGRAPH: _static("text"),
    BlockVariant.SEPARATOR: _static("divider"),
    BlockVariant.SHORT_TEXT: _text(multiline=False),
    BlockVariant.LONG_TEXT: _text(multiline=True),
    BlockVariant.PHOTO: _file("image/*"),
    BlockVariant.VIDEO: _file("video/*"),
    BlockVariant.CHECKBOX: _checkbox,
    BlockVariant.CONTACT_INFO: _contact,
}
ensure_exhaustive(_BLOCK_RENDERERS, BlockVariant, "block renderers")


def render_block(block: BlockDefinition, value: AnswerValue | None = None, interactive: bool = True) -> RenderedControl:
    return _BLOCK_RENDERERS[block.variant](block, value, interactive)


def render_form(
    definition: FormDefinition,
    answers: Mapping[str, AnswerValue] | None = None,
    mode: RenderMode = "public",
    marketing_optin: bool | None = None,
) -> RenderedForm:
    """Render every block in order, then the marketing opt-in prompt when enabled.

    Args:
        definition: The form to render. An empty block list is valid.
        answers: Values entered so far, keyed by block id.
        mode: ``"preview"`` for the editor (static controls) or ``"public"``.
        marketing_optin: Current state of the opt-in checkbox, None if untouched.
    """
    answers = answers or {}
    interactive = mode == "public"

    controls = [render_block(block, answers.get(block.id), interactive) for block in definition.blocks]

    if definition.marketing_optin.enabled:
        controls.append(
            RenderedControl(
                block_id=None,
                variant=None,
                kind="marketing_optin",
                label=definition.marketing_optin.prompt_text,
                interactive=interactive,
                value=marketing_optin,
            )
        )

    style = definition.footer_style
    return RenderedForm(
        mode=mode,
        interactive=interactive,
        page_title=definition.page_title,
        logo_reference=definition.logo_reference,
        controls=controls,
        footer=RenderedFooter(
            address=definition.footer_address or None,
            phone=definition.footer_phone or None,
            background_color=style.background_color,
            text_color=style.text_color,
            custom_text=style.custom_text,
        ),
        submit_label=SUBMIT_LABEL,
    )
