"""Submission triage API — the tenant's inbox of form submissions."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from leadcatch.core.deps import get_store
from leadcatch.schemas.submissions import (
    SubmissionListResponse,
    SubmissionRecord,
    SubmissionStatusUpdate,
    TriageBucket,
)
from leadcatch.services import triage
from leadcatch.services.store import LeadStore, PersistenceError, SubmissionNotFound, TenantNotFound

router = APIRouter()


def _ensure_tenant(tenant_id: uuid.UUID, store: LeadStore) -> None:
    try:
        store.get_company_name(tenant_id)
    except TenantNotFound:
        raise HTTPException(status_code=404, detail="Tenant not found")
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")


@router.get("/{tenant_id}/submissions", response_model=SubmissionListResponse)
def list_submissions(
    tenant_id: uuid.UUID,
    bucket: TriageBucket = Query("to_process"),
    search: str | None = Query(None, max_length=64),
    store: LeadStore = Depends(get_store),
):
    """List one inbox bucket, newest first, optionally filtered by phone or ticket."""
    _ensure_tenant(tenant_id, store)
    try:
        items = triage.list_bucket(store, tenant_id, bucket, search)
        new_count = triage.count_new(store, tenant_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")
    return SubmissionListResponse(items=items, total=len(items), bucket=bucket, new_count=new_count)


@router.get("/{tenant_id}/submissions/{submission_id}", response_model=SubmissionRecord)
def get_submission(tenant_id: uuid.UUID, submission_id: uuid.UUID, store: LeadStore = Depends(get_store)):
    try:
        return store.get_submission(tenant_id, submission_id)
    except SubmissionNotFound:
        raise HTTPException(status_code=404, detail="Submission not found")
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")


@router.patch("/{tenant_id}/submissions/{submission_id}/status", response_model=SubmissionRecord)
def update_submission_status(
    tenant_id: uuid.UUID,
    submission_id: uuid.UUID,
    payload: SubmissionStatusUpdate,
    store: LeadStore = Depends(get_store),
):
    """Move a submission to any status (new, pending, done, archived)."""
    try:
        return triage.transition(store, tenant_id, submission_id, payload.status)
    except SubmissionNotFound:
        raise HTTPException(status_code=404, detail="Submission not found")
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")
