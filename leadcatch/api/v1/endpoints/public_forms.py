"""Public form API — what respondents see and submit. No authentication."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile

from leadcatch.core.deps import get_file_store, get_store, get_submission_pipeline
from leadcatch.schemas.forms import FormDefinition, UploadResponse
from leadcatch.schemas.rendering import RenderedForm
from leadcatch.schemas.submissions import SubmissionCreate, SubmissionReceiptResponse
from leadcatch.services.answers import FormValidationError
from leadcatch.services.files import BaseFileStore, FileValidationError, save_upload
from leadcatch.services.form_renderer import render_form
from leadcatch.services.store import LeadStore, PersistenceError, RecordNotFound
from leadcatch.services.submissions import FormDisabledError, SubmissionPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_enabled_form_or_404(store: LeadStore, tenant_id: uuid.UUID) -> FormDefinition:
    try:
        definition = store.get_form_definition(tenant_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")
    if not definition.enabled:
        raise HTTPException(status_code=404, detail="Form not found")
    return definition


@router.get("/{tenant_id}", response_model=RenderedForm)
def get_public_form(tenant_id: uuid.UUID, store: LeadStore = Depends(get_store)):
    """Render the tenant's public form with empty controls."""
    definition = _get_enabled_form_or_404(store, tenant_id)
    return render_form(definition, mode="public")


@router.post("/{tenant_id}/submissions", response_model=SubmissionReceiptResponse, status_code=201)
async def submit_form(
    tenant_id: uuid.UUID,
    payload: SubmissionCreate,
    pipeline: SubmissionPipeline = Depends(get_submission_pipeline),
):
    """Submit the public form. Returns the ticket number shown to the respondent."""
    try:
        receipt = await pipeline.submit(tenant_id, payload.values, payload.marketing_optin)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except FormDisabledError:
        raise HTTPException(status_code=409, detail="This form is not accepting submissions")
    except FormValidationError as exc:
        logger.info("Submission rejected for tenant %s: %s", tenant_id, exc.errors)
        raise HTTPException(status_code=422, detail=exc.errors)
    except PersistenceError:
        raise HTTPException(
            status_code=503,
            detail="Your request could not be saved, please try again",
        )
    return SubmissionReceiptResponse(ticket_number=receipt.ticket_number)


@router.post("/{tenant_id}/uploads", response_model=UploadResponse, status_code=201)
async def upload_answer_file(
    tenant_id: uuid.UUID,
    file: UploadFile,
    category: str = Query("photo", pattern="^(photo|video)$"),
    store: LeadStore = Depends(get_store),
    file_store: BaseFileStore = Depends(get_file_store),
):
    """Upload the file of a photo or video block. The reference goes into the block's value."""
    _get_enabled_form_or_404(store, tenant_id)
    content = await file.read()
    try:
        reference = save_upload(file_store, tenant_id, category, file.filename, content, file.content_type)
    except FileValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return UploadResponse(reference=reference, content_type=file.content_type, size_bytes=len(content))
