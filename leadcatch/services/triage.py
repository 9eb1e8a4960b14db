"""Submission triage — inbox buckets and status changes made by the tenant."""

import logging
import uuid

from leadcatch.schemas.submissions import SubmissionRecord, SubmissionStatus, TriageBucket
from leadcatch.services.store import LeadStore

logger = logging.getLogger(__name__)

STATUSES: tuple[SubmissionStatus, ...] = ("new", "pending", "done", "archived")

BUCKET_STATUSES: dict[TriageBucket, tuple[SubmissionStatus, ...]] = {
    "to_process": ("new", "pending"),
    "all": ("new", "pending", "done"),
    "archived": ("archived",),
}


class InvalidStatusError(ValueError):
    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Unknown submission status: {status}")


class InvalidBucketError(ValueError):
    def __init__(self, bucket: str) -> None:
        self.bucket = bucket
        super().__init__(f"Unknown triage bucket: {bucket}")


def in_bucket(submission: SubmissionRecord, bucket: TriageBucket) -> bool:
    if bucket not in BUCKET_STATUSES:
        raise InvalidBucketError(bucket)
    return submission.status in BUCKET_STATUSES[bucket]


def matches_search(submission: SubmissionRecord, search: str | None) -> bool:
    """Case-insensitive substring match on phone or ticket number."""
    if not search or not search.strip():
        return True
    needle = search.strip().lower()
    return needle in submission.phone.lower() or needle in submission.ticket_number.lower()


def list_bucket(
    store: LeadStore,
    tenant_id: uuid.UUID,
    bucket: TriageBucket = "to_process",
    search: str | None = None,
) -> list[SubmissionRecord]:
    if bucket not in BUCKET_STATUSES:
        raise InvalidBucketError(bucket)
    submissions = store.list_submissions(tenant_id, BUCKET_STATUSES[bucket])
    return [s for s in submissions if matches_search(s, search)]


def count_new(store: LeadStore, tenant_id: uuid.UUID) -> int:
    return len(store.list_submissions(tenant_id, ("new",)))


def transition(
    store: LeadStore,
    tenant_id: uuid.UUID,
    submission_id: uuid.UUID,
    status: str,
) -> SubmissionRecord:
    """Move a submission to ``status``. Every state is reachable from every other."""
    if status not in STATUSES:
        raise InvalidStatusError(status)
    current = store.get_submission(tenant_id, submission_id)
    if current.status == status:
        return current
    updated = store.update_submission_status(tenant_id, submission_id, status)
    logger.info("Submission %s moved from %s to %s", updated.ticket_number, current.status, status)
    return updated
