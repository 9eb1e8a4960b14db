"""Tests for the form renderer — public and preview modes."""

from leadcatch.schemas.forms import (
    BlockDefinition,
    BlockVariant,
    ContactValue,
    FooterStyle,
    FormDefinition,
    MarketingOptin,
)
from leadcatch.services.form_renderer import SUBMIT_LABEL, render_block, render_form

ALL_VARIANTS_FORM = FormDefinition(
    page_title="Qualification de demande",
    logo_reference="uploads/logo.png",
    footer_address="123 Rue de l'Exemple, 75000 Paris",
    footer_phone="01 23 45 67 89",
    footer_style=FooterStyle(custom_text="Merci de votre confiance"),
    blocks=[
        BlockDefinition(id="h", variant=BlockVariant.HEADER, label="Titre"),
        BlockDefinition(id="p", variant=BlockVariant.PARAGRAPH, label="Texte"),
        BlockDefinition(id="s", variant=BlockVariant.SHORT_TEXT, label="Nom", placeholder="Réponse..."),
        BlockDefinition(id="l", variant=BlockVariant.LONG_TEXT, label="Description", required=True),
        BlockDefinition(id="ph", variant=BlockVariant.PHOTO, label="Photo"),
        BlockDefinition(id="v", variant=BlockVariant.VIDEO, label="Vidéo"),
        BlockDefinition(id="c", variant=BlockVariant.CHECKBOX, label="Urgent ?"),
        BlockDefinition(id="sep", variant=BlockVariant.SEPARATOR),
        BlockDefinition(id="ct", variant=BlockVariant.CONTACT_INFO, label="Coordonnées", required=True),
    ],
)


class TestRenderForm:
    def test_one_control_per_block_in_order(self):
        rendered = render_form(ALL_VARIANTS_FORM)
        assert [c.block_id for c in rendered.controls] == ["h", "p", "s", "l", "ph", "v", "c", "sep", "ct"]

    def test_control_kinds(self):
        kinds = [c.kind for c in render_form(ALL_VARIANTS_FORM).controls]
        assert kinds == [
            "heading",
            "text",
            "text_input",
            "text_area",
            "file",
            "file",
            "checkbox",
            "divider",
            "contact",
        ]

    def test_preview_mode_is_not_interactive(self):
        rendered = render_form(ALL_VARIANTS_FORM, mode="preview")
        assert rendered.interactive is False
        assert all(not c.interactive for c in rendered.controls)

    def test_public_mode_same_layout_as_preview(self):
        public = render_form(ALL_VARIANTS_FORM, mode="public")
        preview = render_form(ALL_VARIANTS_FORM, mode="preview")
        assert [c.kind for c in public.controls] == [c.kind for c in preview.controls]
        assert public.interactive is True

    def test_static_controls_never_interactive(self):
        rendered = render_form(ALL_VARIANTS_FORM, mode="public")
        static = [c for c in rendered.controls if c.kind in ("heading", "text", "divider")]
        assert static and all(not c.interactive for c in static)

    def test_page_metadata_and_footer(self):
        rendered = render_form(ALL_VARIANTS_FORM)
        assert rendered.page_title == "Qualification de demande"
        assert rendered.logo_reference == "uploads/logo.png"
        assert rendered.footer.address == "123 Rue de l'Exemple, 75000 Paris"
        assert rendered.footer.background_color == "#f1f5f9"
        assert rendered.footer.custom_text == "Merci de votre confiance"
        assert rendered.submit_label == SUBMIT_LABEL

    def test_empty_form_renders(self):
        rendered = render_form(FormDefinition())
        assert rendered.controls == []


class TestMarketingOptin:
    def test_optin_appended_when_enabled(self):
        definition = ALL_VARIANTS_FORM.model_copy(update={"marketing_optin": MarketingOptin(enabled=True)})
        rendered = render_form(definition)
        last = rendered.controls[-1]
        assert last.kind == "marketing_optin"
        assert last.block_id is None
        assert last.label == "Je souhaite recevoir des offres exclusives et promotions."

    def test_optin_absent_when_disabled(self):
        rendered = render_form(ALL_VARIANTS_FORM)
        assert all(c.kind != "marketing_optin" for c in rendered.controls)


class TestRenderBlock:
    def test_checkbox_untouched_has_no_value(self):
        block = BlockDefinition(id="c", variant=BlockVariant.CHECKBOX, label="Urgent ?")
        assert render_block(block).value is None
        assert render_block(block, False).value is False

    def test_contact_fields_layout(self):
        block = BlockDefinition(id="ct", variant=BlockVariant.CONTACT_INFO, label="Coordonnées", required=True)
        control = render_block(block, ContactValue(lastName="Dupont"))
        names = [f.name for f in control.fields]
        assert names == ["lastName", "firstName", "email", "phone", "address"]
        required = {f.name for f in control.fields if f.required}
        assert required == {"lastName", "firstName", "email", "phone"}
        assert control.fields[0].value == "Dupont"

    def test_text_value_and_placeholder(self):
        block = BlockDefinition(id="s", variant=BlockVariant.SHORT_TEXT, label="Nom", placeholder="Réponse...")
        control = render_block(block, "Jean")
        assert control.value == "Jean"
        assert control.placeholder == "Réponse..."
        assert control.multiline is False

    def test_photo_accepts_images(self):
        block = BlockDefinition(id="ph", variant=BlockVariant.PHOTO, label="Photo")
        assert render_block(block).accept == "image/*"
