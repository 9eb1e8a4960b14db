"""Block schema — per-variant rules for the nine form block variants.

Every concern that dispatches on a block variant (schema, renderer, editor
palette, answer normalizer) keeps its own table keyed by ``BlockVariant`` or
``AnswerShape`` and checks it with ``ensure_exhaustive`` at import time, so a
new variant cannot ship half-wired.
"""

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from leadcatch.schemas.forms import BlockDefinition, BlockVariant, PaletteEntry


class AnswerShape(str, Enum):
    NONE = "none"
    TEXT = "text"
    BOOLEAN = "boolean"
    FILE_REFERENCE = "file_reference"
    CONTACT = "contact"


@dataclass(frozen=True)
class VariantRules:
    answer_shape: AnswerShape
    supports_required: bool
    palette_title: str
    default_label: str = "Nouvelle Question"
    default_placeholder: str | None = None


VARIANT_RULES: dict[BlockVariant, VariantRules] = {
    BlockVariant.HEADER: VariantRules(
        answer_shape=AnswerShape.NONE,
        supports_required=False,
        palette_title="Titre",
        default_label="Nouveau Titre",
    ),
    BlockVariant.PARAGRAPH: VariantRules(
        answer_shape=AnswerShape.NONE,
        supports_required=False,
        palette_title="Paragraphe",
    ),
    BlockVariant.SHORT_TEXT: VariantRules(
        answer_shape=AnswerShape.TEXT,
        supports_required=True,
        palette_title="Texte court",
        default_placeholder="Réponse...",
    ),
    BlockVariant.LONG_TEXT: VariantRules(
        answer_shape=AnswerShape.TEXT,
        supports_required=True,
        palette_title="Texte long",
        default_placeholder="Réponse...",
    ),
    BlockVariant.PHOTO: VariantRules(
        answer_shape=AnswerShape.FILE_REFERENCE,
        supports_required=True,
        palette_title="Photo",
    ),
    BlockVariant.VIDEO: VariantRules(
        answer_shape=AnswerShape.FILE_REFERENCE,
        supports_required=True,
        palette_title="Vidéo",
    ),
    BlockVariant.CHECKBOX: VariantRules(
        answer_shape=AnswerShape.BOOLEAN,
        supports_required=True,
        palette_title="Case à cocher",
    ),
    BlockVariant.SEPARATOR: VariantRules(
        answer_shape=AnswerShape.NONE,
        supports_required=False,
        palette_title="Séparateur",
        default_label="",
    ),
    BlockVariant.CONTACT_INFO: VariantRules(
        answer_shape=AnswerShape.CONTACT,
        supports_required=True,
        palette_title="Coordonnées",
    ),
}


def ensure_exhaustive(table: Mapping | Iterable, keys: type[Enum], table_name: str) -> None:
    """Raise RuntimeError if ``table`` lacks an entry for any member of ``keys``."""
    present = set(table)
    missing = sorted(member.value for member in keys if member not in present)
    if missing:
        raise RuntimeError(f"{table_name} is missing entries for: {', '.join(missing)}")


ensure_exhaustive(VARIANT_RULES, BlockVariant, "VARIANT_RULES")


def rules_for(variant: BlockVariant) -> VariantRules:
    return VARIANT_RULES[BlockVariant(variant)]


def is_answerable(variant: BlockVariant) -> bool:
    """Header, paragraph and separator blocks never carry an answer."""
    return rules_for(variant).answer_shape is not AnswerShape.NONE


def is_required(block: BlockDefinition) -> bool:
    """The effective required flag: ignored for variants that cannot carry one."""
    return block.required and rules_for(block.variant).supports_required


def new_block_id() -> str:
    return f"blk_{uuid.uuid4().hex[:12]}"


def new_block(variant: BlockVariant) -> BlockDefinition:
    """Create a block with the editor defaults for its variant."""
    rules = rules_for(variant)
    return BlockDefinition(
        id=new_block_id(),
        variant=variant,
        label=rules.default_label,
        required=False,
        placeholder=rules.default_placeholder,
    )


def editor_palette() -> list[PaletteEntry]:
    return [
        PaletteEntry(
            variant=variant,
            title=rules.palette_title,
            supports_required=rules.supports_required,
        )
        for variant, rules in VARIANT_RULES.items()
    ]
