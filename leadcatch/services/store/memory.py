"""In-memory lead store for tests and local scripts."""

import threading
import uuid
from collections.abc import Collection

from leadcatch.schemas.forms import FormDefinition
from leadcatch.schemas.submissions import SubmissionRecord, SubmissionStatus
from leadcatch.services.store.base import LeadStore
from leadcatch.services.store.exceptions import FormDefinitionNotFound, SubmissionNotFound, TenantNotFound


class InMemoryStore(LeadStore):
    """Thread-safe dict-backed store. Records are copied in and out."""

    def __init__(self) -> None:
        self._tenants: dict[uuid.UUID, str] = {}
        self._forms: dict[uuid.UUID, FormDefinition] = {}
        self._submissions: dict[uuid.UUID, SubmissionRecord] = {}
        self._lock = threading.Lock()

    def add_tenant(self, tenant_id: uuid.UUID, company_name: str) -> None:
        with self._lock:
            self._tenants[tenant_id] = company_name

    def get_company_name(self, tenant_id: uuid.UUID) -> str:
        with self._lock:
            if tenant_id not in self._tenants:
                raise TenantNotFound(tenant_id)
            return self._tenants[tenant_id]

    def get_form_definition(self, tenant_id: uuid.UUID) -> FormDefinition:
        with self._lock:
            definition = self._forms.get(tenant_id)
        if definition is None:
            raise FormDefinitionNotFound(tenant_id)
        return definition.model_copy(deep=True)

    def save_form_definition(self, tenant_id: uuid.UUID, definition: FormDefinition) -> FormDefinition:
        with self._lock:
            self._forms[tenant_id] = definition.model_copy(deep=True)
        return definition.model_copy(deep=True)

    def insert_submission(self, submission: SubmissionRecord) -> SubmissionRecord:
        with self._lock:
            self._submissions[submission.id] = submission.model_copy(deep=True)
        return submission.model_copy(deep=True)

    def get_submission(self, tenant_id: uuid.UUID, submission_id: uuid.UUID) -> SubmissionRecord:
        with self._lock:
            submission = self._submissions.get(submission_id)
        if submission is None or submission.tenant_id != tenant_id:
            raise SubmissionNotFound(submission_id)
        return submission.model_copy(deep=True)

    def update_submission_status(
        self,
        tenant_id: uuid.UUID,
        submission_id: uuid.UUID,
        status: SubmissionStatus,
    ) -> SubmissionRecord:
        with self._lock:
            submission = self._submissions.get(submission_id)
            if submission is None or submission.tenant_id != tenant_id:
                raise SubmissionNotFound(submission_id)
            updated = submission.model_copy(update={"status": status}, deep=True)
            self._submissions[submission_id] = updated
        return updated.model_copy(deep=True)

    def list_submissions(
        self,
        tenant_id: uuid.UUID,
        statuses: Collection[SubmissionStatus] | None = None,
    ) -> list[SubmissionRecord]:
        with self._lock:
            items = [
                s.model_copy(deep=True)
                for s in self._submissions.values()
                if s.tenant_id == tenant_id and (statuses is None or s.status in statuses)
            ]
        return sorted(items, key=lambda s: s.created_at, reverse=True)
