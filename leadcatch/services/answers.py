"""Answer collector — per-block respondent state and its normalization into answers."""

import logging
from collections.abc import Callable, Mapping

from leadcatch.schemas.forms import (
    CONTACT_FIELDS,
    AnswerValue,
    BlockDefinition,
    BlockVariant,
    ContactValue,
    FormDefinition,
)
from leadcatch.schemas.submissions import Answer
from leadcatch.services.blocks import AnswerShape, ensure_exhaustive, is_answerable, is_required, rules_for
from leadcatch.services.phones import normalize_phone

logger = logging.getLogger(__name__)

# Stored as the submission phone when no contact block yields a phone or email
PHONE_SENTINEL = "0000000000"

# Contact sub-fields the public form marks as required on a required contact block
REQUIRED_CONTACT_FIELDS = ("lastName", "firstName", "email", "phone")

_TRUE_STRINGS = {"true", "yes", "oui", "on", "1"}
_FALSE_STRINGS = {"false", "no", "non", "off", "0"}


class FormValidationError(Exception):
    """Raised when form input or a form definition fails validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class UnknownContactField(FormValidationError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__([f"Unknown contact field: {field}"])


# ---------------------------------------------------------------------------
# Value normalization per answer shape
# ---------------------------------------------------------------------------


def _normalize_text(block: BlockDefinition, value: AnswerValue) -> str:
    if not isinstance(value, str):
        raise FormValidationError([f"Block '{block.label or block.id}' expects text"])
    return value


def _normalize_boolean(block: BlockDefinition, value: AnswerValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise FormValidationError([f"Block '{block.label or block.id}' expects true or false"])


def _normalize_file_reference(block: BlockDefinition, value: AnswerValue) -> str:
    if not isinstance(value, str):
        raise FormValidationError([f"Block '{block.label or block.id}' expects a file reference"])
    return value


def _normalize_contact(block: BlockDefinition, value: AnswerValue) -> ContactValue:
    if isinstance(value, ContactValue):
        return value
    if isinstance(value, Mapping):
        return ContactValue.model_validate(value)
    raise FormValidationError([f"Block '{block.label or block.id}' expects contact details"])


def _normalize_none(block: BlockDefinition, value: AnswerValue) -> None:
    return None


_NORMALIZERS: dict[AnswerShape, Callable[[BlockDefinition, AnswerValue], AnswerValue | None]] = {
    AnswerShape.NONE: _normalize_none,
    AnswerShape.TEXT: _normalize_text,
    AnswerShape.BOOLEAN: _normalize_boolean,
    AnswerShape.FILE_REFERENCE: _normalize_file_reference,
    AnswerShape.CONTACT: _normalize_contact,
}
ensure_exhaustive(_NORMALIZERS, AnswerShape, "answer normalizers")


def _is_empty(value: AnswerValue | None, shape: AnswerShape) -> bool:
    if value is None:
        return True
    if shape is AnswerShape.BOOLEAN:
        # A required checkbox must be ticked
        return value is not True
    if shape is AnswerShape.CONTACT:
        return any(not getattr(value, field).strip() for field in REQUIRED_CONTACT_FIELDS)
    return not str(value).strip()


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class AnswerCollector:
    """Current values of one respondent, keyed by block id.

    Values are normalized to their block's answer shape as they are set.
    Values for static blocks (header, paragraph, separator) and for ids that
    are not in the form are ignored.
    """

    def __init__(self, definition: FormDefinition) -> None:
        self._definition = definition
        self._blocks = {block.id: block for block in definition.blocks}
        self._values: dict[str, AnswerValue] = {}

    @classmethod
    def from_values(cls, definition: FormDefinition, values: Mapping[str, AnswerValue]) -> "AnswerCollector":
        """Build a collector from a complete ``block_id -> value`` mapping."""
        collector = cls(definition)
        for block_id, value in values.items():
            block = collector._blocks.get(block_id)
            if block is not None and block.variant == BlockVariant.CONTACT_INFO and isinstance(value, Mapping):
                for field, field_value in value.items():
                    collector.merge_contact(block_id, field, field_value)
            else:
                collector.set_value(block_id, value)
        return collector

    @property
    def values(self) -> dict[str, AnswerValue]:
        return dict(self._values)

    def value_for(self, block_id: str) -> AnswerValue | None:
        return self._values.get(block_id)

    def set_value(self, block_id: str, value: AnswerValue) -> None:
        block = self._blocks.get(block_id)
        if block is None:
            logger.debug("Ignoring value for unknown block %s", block_id)
            return
        if not is_answerable(block.variant):
            return
        shape = rules_for(block.variant).answer_shape
        self._values[block_id] = _NORMALIZERS[shape](block, value)

    def merge_contact(self, block_id: str, field: str, value: str) -> None:
        """Update one sub-field of a contact block, keeping the other sub-fields."""
        if field not in CONTACT_FIELDS:
            raise UnknownContactField(field)
        block = self._blocks.get(block_id)
        if block is None or block.variant != BlockVariant.CONTACT_INFO:
            logger.debug("Ignoring contact field %s for non-contact block %s", field, block_id)
            return
        current = self._values.get(block_id)
        if not isinstance(current, ContactValue):
            current = ContactValue()
        self._values[block_id] = current.model_copy(update={field: "" if value is None else str(value)})

    def clear(self, block_id: str) -> None:
        self._values.pop(block_id, None)

    # -- submit-time helpers -------------------------------------------------

    def missing_required(self) -> list[BlockDefinition]:
        """Return required answerable blocks that have no usable value, in form order."""
        missing = []
        for block in self._definition.blocks:
            if not is_answerable(block.variant) or not is_required(block):
                continue
            shape = rules_for(block.variant).answer_shape
            if _is_empty(self._values.get(block.id), shape):
                missing.append(block)
        return missing

    def validate(self) -> None:
        """Raise FormValidationError listing every unanswered required block."""
        missing = self.missing_required()
        if missing:
            raise FormValidationError(
                [f"'{block.label or block.id}' is required" for block in missing]
            )

    def build_answers(self) -> list[Answer]:
        """Answers in form order, one per block that has a value, with the current label copied."""
        answers = []
        for block in self._definition.blocks:
            if block.id not in self._values or not is_answerable(block.variant):
                continue
            answers.append(Answer(block_id=block.id, label=block.label, value=self._values[block.id]))
        return answers

    def first_contact(self) -> ContactValue | None:
        """Value of the first contact_info block of the form, if it was filled."""
        for block in self._definition.blocks:
            if block.variant == BlockVariant.CONTACT_INFO:
                value = self._values.get(block.id)
                return value if isinstance(value, ContactValue) else None
        return None

    def derive_phone(self) -> str:
        """Submission phone: first contact block's phone (normalized), else its email, else the sentinel."""
        contact = self.first_contact()
        if contact is not None:
            if contact.phone.strip():
                return normalize_phone(contact.phone)
            if contact.email.strip():
                return contact.email.strip()
        return PHONE_SENTINEL
