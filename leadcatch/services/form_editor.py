"""Form editor — block CRUD on a tenant's form definition.

The block operations are pure: they take a FormDefinition and return a new
one, leaving the input untouched. ``FormEditor`` wraps them with a
load-modify-save cycle against a LeadStore (last write wins).
"""

import logging
import uuid

from leadcatch.schemas.forms import BlockDefinition, BlockUpdate, BlockVariant, FormDefinition
from leadcatch.services import templates
from leadcatch.services.answers import FormValidationError
from leadcatch.services.blocks import new_block
from leadcatch.services.store import LeadStore

logger = logging.getLogger(__name__)

_ADMIN_DESTINATIONS = {
    "admin_email": "email address",
    "admin_sms": "phone number",
}


class BlockNotFound(Exception):
    def __init__(self, block_id: str) -> None:
        self.block_id = block_id
        super().__init__(f"Block {block_id} not found")


def _index_of(definition: FormDefinition, block_id: str) -> int:
    for index, block in enumerate(definition.blocks):
        if block.id == block_id:
            return index
    raise BlockNotFound(block_id)


# ---------------------------------------------------------------------------
# Pure block operations
# ---------------------------------------------------------------------------


def add_block(definition: FormDefinition, variant: BlockVariant) -> tuple[FormDefinition, BlockDefinition]:
    """Append a new block with the variant's defaults."""
    block = new_block(variant)
    existing = {b.id for b in definition.blocks}
    while block.id in existing:
        block = new_block(variant)
    return definition.model_copy(update={"blocks": [*definition.blocks, block]}), block


def remove_block(definition: FormDefinition, block_id: str) -> FormDefinition:
    index = _index_of(definition, block_id)
    blocks = definition.blocks[:index] + definition.blocks[index + 1 :]
    return definition.model_copy(update={"blocks": blocks})


def move_block(definition: FormDefinition, block_id: str, direction: str) -> FormDefinition:
    """Swap a block with its neighbour above or below. Moving past either end is a no-op."""
    index = _index_of(definition, block_id)
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(definition.blocks):
        return definition
    blocks = list(definition.blocks)
    blocks[index], blocks[target] = blocks[target], blocks[index]
    return definition.model_copy(update={"blocks": blocks})


def update_block(definition: FormDefinition, block_id: str, changes: BlockUpdate) -> FormDefinition:
    """Apply the fields set in ``changes`` to one block. Id and variant never change."""
    index = _index_of(definition, block_id)
    update_data = changes.model_dump(exclude_unset=True)
    # Only the placeholder can be cleared
    update_data = {k: v for k, v in update_data.items() if v is not None or k == "placeholder"}
    blocks = list(definition.blocks)
    blocks[index] = blocks[index].model_copy(update=update_data)
    return definition.model_copy(update={"blocks": blocks})


def validate_definition(definition: FormDefinition) -> None:
    """Reject an enabled admin notification channel that has nowhere to go."""
    errors: list[str] = []
    for name, kind in _ADMIN_DESTINATIONS.items():
        channel = definition.notifications.channel(name)
        if channel.enabled and not channel.destination.strip():
            errors.append(f"{name} is enabled but has no destination {kind}")
    if errors:
        raise FormValidationError(errors)

    for name in ("admin_email", "admin_sms", "client_email", "client_sms"):
        channel = definition.notifications.channel(name)
        for template in (channel.subject_template, channel.body_template):
            unknown = templates.unknown_variables(template or "", templates.NOTIFICATION_VARIABLES)
            if unknown:
                logger.warning("Template of %s uses unknown variables %s; left as-is", name, unknown)


# ---------------------------------------------------------------------------
# Store-backed editor
# ---------------------------------------------------------------------------


class FormEditor:
    """Editor operations for one tenant's form, persisted after every change."""

    def __init__(self, store: LeadStore, tenant_id: uuid.UUID) -> None:
        self._store = store
        self._tenant_id = tenant_id

    def load(self) -> FormDefinition:
        return self._store.get_form_definition(self._tenant_id)

    def save(self, definition: FormDefinition) -> FormDefinition:
        """Replace the whole definition after validating its notification settings."""
        validate_definition(definition)
        return self._persist(definition)

    def _persist(self, definition: FormDefinition) -> FormDefinition:
        saved = self._store.save_form_definition(self._tenant_id, definition)
        logger.info("Form definition saved for tenant %s (%d blocks)", self._tenant_id, len(saved.blocks))
        return saved

    def add(self, variant: BlockVariant) -> BlockDefinition:
        definition, block = add_block(self.load(), variant)
        self._persist(definition)
        return block

    def remove(self, block_id: str) -> FormDefinition:
        return self._persist(remove_block(self.load(), block_id))

    def move(self, block_id: str, direction: str) -> FormDefinition:
        return self._persist(move_block(self.load(), block_id, direction))

    def update(self, block_id: str, changes: BlockUpdate) -> BlockDefinition:
        saved = self._persist(update_block(self.load(), block_id, changes))
        return saved.blocks[_index_of(saved, block_id)]

    def set_logo(self, reference: str | None) -> FormDefinition:
        return self._persist(self.load().model_copy(update={"logo_reference": reference}))
