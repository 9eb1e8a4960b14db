"""Submission pipeline — turns a respondent's values into a persisted, ticketed Submission.

Flow for one submit:
    1. Load the tenant's form definition; refuse if the form is disabled.
    2. Collect and normalize the values, check required blocks.
    3. Build the ordered answers and derive the contact phone.
    4. Persist with status ``new`` and a fresh ticket number.
    5. Fan out notifications. Channel failures are logged only.
"""

import logging
import secrets
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from leadcatch.core.config import settings
from leadcatch.schemas.forms import AnswerValue
from leadcatch.schemas.submissions import SubmissionRecord
from leadcatch.services.answers import AnswerCollector
from leadcatch.services.notifications import ChannelOutcome, NotificationDispatcher, build_context
from leadcatch.services.store import LeadStore

logger = logging.getLogger(__name__)

TICKET_PREFIX = "#REQ-"


class SubmissionError(Exception):
    """Base exception for the submission pipeline."""


class FormDisabledError(SubmissionError):
    def __init__(self, tenant_id: uuid.UUID) -> None:
        self.tenant_id = tenant_id
        super().__init__(f"Form of tenant {tenant_id} is not accepting submissions")


def generate_ticket_number(digits: int = 6) -> str:
    """Return a display ticket such as ``#REQ-048213``. Not checked for uniqueness."""
    return f"{TICKET_PREFIX}{secrets.randbelow(10**digits):0{digits}d}"


@dataclass
class SubmissionReceipt:
    ticket_number: str
    submission: SubmissionRecord
    notifications: list[ChannelOutcome] = field(default_factory=list)


class SubmissionPipeline:
    """Validates, persists and announces public form submissions.

    Args:
        store: Lead store used for the form definition and the new submission.
        dispatcher: Notification dispatcher invoked after persistence.
        require_answers: Enforce required blocks server-side. Defaults to
            ``settings.FORM_REQUIRED_VALIDATION``; ``False`` accepts
            submissions with unanswered required blocks.
    """

    def __init__(
        self,
        store: LeadStore,
        dispatcher: NotificationDispatcher,
        require_answers: bool | None = None,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._require_answers = (
            settings.FORM_REQUIRED_VALIDATION if require_answers is None else require_answers
        )

    async def submit(
        self,
        tenant_id: uuid.UUID,
        values: Mapping[str, AnswerValue],
        marketing_optin: bool = False,
    ) -> SubmissionReceipt:
        """Run one submission through the pipeline.

        Raises:
            FormDisabledError: If the tenant's form is disabled.
            FormValidationError: If a value is malformed, or a required block
                is unanswered while required validation is on.
            PersistenceError: If the submission could not be stored.
        """
        definition = self._store.get_form_definition(tenant_id)
        if not definition.enabled:
            raise FormDisabledError(tenant_id)
        company = self._store.get_company_name(tenant_id)

        collector = AnswerCollector.from_values(definition, values)
        if self._require_answers:
            collector.validate()
        else:
            missing = collector.missing_required()
            if missing:
                logger.info(
                    "Accepting submission for tenant %s with %d unanswered required blocks",
                    tenant_id,
                    len(missing),
                )

        record = SubmissionRecord(
            id=uuid.uuid4(),
            tenant_id=tenant_id,
            ticket_number=generate_ticket_number(),
            phone=collector.derive_phone(),
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
            answers=collector.build_answers(),
            marketing_optin=marketing_optin if definition.marketing_optin.enabled else False,
            status="new",
        )
        saved = self._store.insert_submission(record)
        logger.info(
            "Submission %s stored for tenant %s (%d answers)",
            saved.ticket_number,
            tenant_id,
            len(saved.answers),
        )

        context = build_context(saved.ticket_number, saved.phone, company, saved.created_at)
        outcomes = await self._dispatcher.dispatch(definition.notifications, context, collector.first_contact())
        return SubmissionReceipt(ticket_number=saved.ticket_number, submission=saved, notifications=outcomes)
