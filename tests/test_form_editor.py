"""Tests for the form editor — pure block operations and the store-backed editor."""

import pytest

from leadcatch.schemas.forms import (
    BlockDefinition,
    BlockUpdate,
    BlockVariant,
    FormDefinition,
    NotificationChannelConfig,
    NotificationSettings,
)
from leadcatch.services.answers import FormValidationError
from leadcatch.services.form_editor import (
    BlockNotFound,
    FormEditor,
    add_block,
    move_block,
    remove_block,
    update_block,
    validate_definition,
)


def _ids(definition):
    return [b.id for b in definition.blocks]


ABCD = FormDefinition(
    blocks=[BlockDefinition(id=x, variant=BlockVariant.SHORT_TEXT, label=x.upper()) for x in "abcd"]
)

FIVE_BLOCKS = FormDefinition(
    blocks=[BlockDefinition(id=x, variant=BlockVariant.SHORT_TEXT, label=x.upper()) for x in "abcde"]
)


class TestMoveBlock:
    def test_move_index_two_up_in_five_block_form(self):
        moved = move_block(FIVE_BLOCKS, "c", "up")
        ids = _ids(moved)
        assert ids[1:3] == ["c", "b"]
        assert (ids[0], ids[3], ids[4]) == ("a", "d", "e")
        assert moved.blocks[1] == FIVE_BLOCKS.blocks[2]

    def test_move_up_swaps_only_adjacent_positions(self):
        moved = move_block(ABCD, "c", "up")
        assert _ids(moved) == ["a", "c", "b", "d"]

    def test_move_down(self):
        assert _ids(move_block(ABCD, "b", "down")) == ["a", "c", "b", "d"]

    def test_move_first_up_is_noop(self):
        assert _ids(move_block(ABCD, "a", "up")) == ["a", "b", "c", "d"]

    def test_move_last_down_is_noop(self):
        assert _ids(move_block(ABCD, "d", "down")) == ["a", "b", "c", "d"]

    def test_input_not_mutated(self):
        move_block(ABCD, "c", "up")
        assert _ids(ABCD) == ["a", "b", "c", "d"]

    def test_unknown_block(self):
        with pytest.raises(BlockNotFound):
            move_block(ABCD, "z", "up")


class TestAddRemoveUpdate:
    def test_add_appends_with_defaults(self):
        definition, block = add_block(ABCD, BlockVariant.HEADER)
        assert definition.blocks[-1] == block
        assert block.label == "Nouveau Titre"
        assert len(ABCD.blocks) == 4

    def test_remove(self):
        assert _ids(remove_block(ABCD, "b")) == ["a", "c", "d"]

    def test_remove_unknown(self):
        with pytest.raises(BlockNotFound):
            remove_block(ABCD, "z")

    def test_update_partial(self):
        updated = update_block(ABCD, "a", BlockUpdate(required=True))
        block = updated.blocks[0]
        assert block.required is True
        assert block.label == "A"
        assert block.variant == BlockVariant.SHORT_TEXT

    def test_update_can_clear_placeholder(self):
        definition = FormDefinition(
            blocks=[BlockDefinition(id="a", variant=BlockVariant.SHORT_TEXT, placeholder="Réponse...")]
        )
        updated = update_block(definition, "a", BlockUpdate(placeholder=None))
        assert updated.blocks[0].placeholder is None

    def test_update_ignores_null_label(self):
        updated = update_block(ABCD, "a", BlockUpdate(label=None))
        assert updated.blocks[0].label == "A"


class TestValidateDefinition:
    def test_enabled_admin_email_without_destination_rejected(self):
        definition = FormDefinition(
            notifications=NotificationSettings(admin_email=NotificationChannelConfig(enabled=True, destination=" "))
        )
        with pytest.raises(FormValidationError, match="admin_email"):
            validate_definition(definition)

    def test_disabled_channel_without_destination_accepted(self):
        validate_definition(FormDefinition())

    def test_client_channel_needs_no_destination(self):
        definition = FormDefinition(
            notifications=NotificationSettings(client_sms=NotificationChannelConfig(enabled=True))
        )
        validate_definition(definition)


class TestFormEditor:
    def test_round_trip_through_store(self, memory_store, memory_tenant_id):
        editor = FormEditor(memory_store, memory_tenant_id)
        editor.save(ABCD)
        assert editor.load() == ABCD

    def test_operations_persist(self, memory_store, memory_tenant_id):
        editor = FormEditor(memory_store, memory_tenant_id)
        editor.save(ABCD)
        block = editor.add(BlockVariant.CHECKBOX)
        editor.move("c", "up")
        editor.remove("d")
        editor.update(block.id, BlockUpdate(label="Urgent ?"))

        reloaded = memory_store.get_form_definition(memory_tenant_id)
        assert _ids(reloaded) == ["a", "c", "b", block.id]
        assert reloaded.blocks[-1].label == "Urgent ?"

    def test_save_rejects_invalid_admin_channel(self, memory_store, memory_tenant_id):
        editor = FormEditor(memory_store, memory_tenant_id)
        definition = FormDefinition(
            notifications=NotificationSettings(admin_sms=NotificationChannelConfig(enabled=True))
        )
        with pytest.raises(FormValidationError):
            editor.save(definition)

    def test_set_logo(self, memory_store, memory_tenant_id):
        editor = FormEditor(memory_store, memory_tenant_id)
        editor.save(ABCD)
        assert editor.set_logo("uploads/x/logo/abc.png").logo_reference == "uploads/x/logo/abc.png"
