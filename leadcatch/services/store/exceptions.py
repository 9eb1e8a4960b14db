"""Store exceptions."""


class StoreError(Exception):
    """Base exception for store operations."""


class PersistenceError(StoreError):
    """Raised when the backing store is unavailable or a write fails."""


class RecordNotFound(StoreError):
    """Raised when a requested record does not exist."""


class TenantNotFound(RecordNotFound):
    def __init__(self, tenant_id) -> None:
        self.tenant_id = tenant_id
        super().__init__(f"Tenant {tenant_id} not found")


class FormDefinitionNotFound(RecordNotFound):
    def __init__(self, tenant_id) -> None:
        self.tenant_id = tenant_id
        super().__init__(f"No form definition for tenant {tenant_id}")


class SubmissionNotFound(RecordNotFound):
    def __init__(self, submission_id) -> None:
        self.submission_id = submission_id
        super().__init__(f"Submission {submission_id} not found")
