"""Abstract lead store: form definitions and submissions of each tenant."""

import uuid
from abc import ABC, abstractmethod
from collections.abc import Collection

from leadcatch.schemas.forms import FormDefinition
from leadcatch.schemas.submissions import SubmissionRecord, SubmissionStatus


class LeadStore(ABC):
    """Persistence interface used by the editor, the submission pipeline and triage."""

    @abstractmethod
    def get_company_name(self, tenant_id: uuid.UUID) -> str:
        """Return the tenant's company name.

        Raises:
            TenantNotFound: If the tenant does not exist.
        """

    @abstractmethod
    def get_form_definition(self, tenant_id: uuid.UUID) -> FormDefinition:
        """Return the tenant's form definition.

        Raises:
            FormDefinitionNotFound: If the tenant has no form definition.
        """

    @abstractmethod
    def save_form_definition(self, tenant_id: uuid.UUID, definition: FormDefinition) -> FormDefinition:
        """Create or replace the tenant's form definition (last write wins)."""

    @abstractmethod
    def insert_submission(self, submission: SubmissionRecord) -> SubmissionRecord:
        """Persist a new submission and return it as stored."""

    @abstractmethod
    def get_submission(self, tenant_id: uuid.UUID, submission_id: uuid.UUID) -> SubmissionRecord:
        """Return one submission of the tenant.

        Raises:
            SubmissionNotFound: If it does not exist or belongs to another tenant.
        """

    @abstractmethod
    def update_submission_status(
        self,
        tenant_id: uuid.UUID,
        submission_id: uuid.UUID,
        status: SubmissionStatus,
    ) -> SubmissionRecord:
        """Set the status of one submission and return the updated record."""

    @abstractmethod
    def list_submissions(
        self,
        tenant_id: uuid.UUID,
        statuses: Collection[SubmissionStatus] | None = None,
    ) -> list[SubmissionRecord]:
        """Return the tenant's submissions, newest first, optionally limited to ``statuses``."""
