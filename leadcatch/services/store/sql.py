"""SQLAlchemy-backed lead store (production)."""

import logging
import uuid
from collections.abc import Collection, Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leadcatch.models.form_definition import FormDefinition as FormDefinitionRow
from leadcatch.models.submission import Submission
from leadcatch.models.tenant import Tenant
from leadcatch.schemas.forms import FormDefinition
from leadcatch.schemas.submissions import SubmissionRecord, SubmissionStatus
from leadcatch.services.store.base import LeadStore
from leadcatch.services.store.exceptions import (
    FormDefinitionNotFound,
    PersistenceError,
    SubmissionNotFound,
    TenantNotFound,
)

logger = logging.getLogger(__name__)


class SqlAlchemyStore(LeadStore):
    """Lead store on a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Store failure while trying to %s: %s", action, exc)
            raise PersistenceError(f"Could not {action}") from exc

    def get_company_name(self, tenant_id: uuid.UUID) -> str:
        with self._guard("load tenant"):
            tenant = self._db.get(Tenant, tenant_id)
        if tenant is None:
            raise TenantNotFound(tenant_id)
        return tenant.name

    def _get_row(self, tenant_id: uuid.UUID) -> FormDefinitionRow | None:
        return self._db.execute(
            select(FormDefinitionRow).where(FormDefinitionRow.tenant_id == tenant_id)
        ).scalar_one_or_none()

    def get_form_definition(self, tenant_id: uuid.UUID) -> FormDefinition:
        with self._guard("load form definition"):
            row = self._get_row(tenant_id)
        if row is None:
            raise FormDefinitionNotFound(tenant_id)
        return FormDefinition.model_validate(row)

    def save_form_definition(self, tenant_id: uuid.UUID, definition: FormDefinition) -> FormDefinition:
        data = definition.model_dump(mode="json")
        with self._guard("save form definition"):
            row = self._get_row(tenant_id)
            if row is None:
                row = FormDefinitionRow(tenant_id=tenant_id)
                self._db.add(row)
            for field, value in data.items():
                setattr(row, field, value)
            self._db.commit()
            self._db.refresh(row)
        return FormDefinition.model_validate(row)

    def insert_submission(self, submission: SubmissionRecord) -> SubmissionRecord:
        row = Submission(
            id=submission.id,
            tenant_id=submission.tenant_id,
            ticket_number=submission.ticket_number,
            phone=submission.phone,
            answers=[answer.model_dump(mode="json") for answer in submission.answers],
            marketing_optin=submission.marketing_optin,
            status=submission.status,
            created_at=submission.created_at,
        )
        with self._guard("save submission"):
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        return SubmissionRecord.model_validate(row)

    def _get_submission_row(self, tenant_id: uuid.UUID, submission_id: uuid.UUID) -> Submission:
        with self._guard("load submission"):
            row = self._db.get(Submission, submission_id)
        if row is None or row.tenant_id != tenant_id:
            raise SubmissionNotFound(submission_id)
        return row

    def get_submission(self, tenant_id: uuid.UUID, submission_id: uuid.UUID) -> SubmissionRecord:
        return SubmissionRecord.model_validate(self._get_submission_row(tenant_id, submission_id))

    def update_submission_status(
        self,
        tenant_id: uuid.UUID,
        submission_id: uuid.UUID,
        status: SubmissionStatus,
    ) -> SubmissionRecord:
        row = self._get_submission_row(tenant_id, submission_id)
        with self._guard("update submission status"):
            row.status = status
            self._db.commit()
            self._db.refresh(row)
        return SubmissionRecord.model_validate(row)

    def list_submissions(
        self,
        tenant_id: uuid.UUID,
        statuses: Collection[SubmissionStatus] | None = None,
    ) -> list[SubmissionRecord]:
        query = select(Submission).where(Submission.tenant_id == tenant_id)
        if statuses is not None:
            query = query.where(Submission.status.in_(list(statuses)))
        with self._guard("list submissions"):
            rows = self._db.execute(query.order_by(Submission.created_at.desc())).scalars().all()
        return [SubmissionRecord.model_validate(row) for row in rows]
