"""Form editor API — a tenant's form definition, its blocks and the editor preview."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from leadcatch.core.deps import get_file_store, get_store
from leadcatch.schemas.forms import (
    BlockCreate,
    BlockDefinition,
    BlockMove,
    BlockUpdate,
    FormDefinition,
    PaletteEntry,
)
from leadcatch.schemas.rendering import RenderedForm
from leadcatch.services.answers import FormValidationError
from leadcatch.services.blocks import editor_palette
from leadcatch.services.files import BaseFileStore, FileValidationError, save_upload
from leadcatch.services.form_editor import BlockNotFound, FormEditor
from leadcatch.services.form_renderer import render_form
from leadcatch.services.store import LeadStore, PersistenceError, RecordNotFound

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_editor(tenant_id: uuid.UUID, store: LeadStore) -> FormEditor:
    try:
        store.get_company_name(tenant_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Tenant not found")
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")
    return FormEditor(store, tenant_id)


def _run(operation, *args):
    try:
        return operation(*args)
    except BlockNotFound:
        raise HTTPException(status_code=404, detail="Block not found")
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Form not found")
    except FormValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Service temporarily unavailable, please retry")


# ---------------------------------------------------------------------------
# Definition
# ---------------------------------------------------------------------------


@router.get("/{tenant_id}/form", response_model=FormDefinition)
def get_form(tenant_id: uuid.UUID, store: LeadStore = Depends(get_store)):
    editor = _get_editor(tenant_id, store)
    return _run(editor.load)


@router.put("/{tenant_id}/form", response_model=FormDefinition)
def replace_form(tenant_id: uuid.UUID, payload: FormDefinition, store: LeadStore = Depends(get_store)):
    """Replace the whole form definition (last write wins)."""
    editor = _get_editor(tenant_id, store)
    return _run(editor.save, payload)


@router.get("/{tenant_id}/form/preview", response_model=RenderedForm)
def preview_form(tenant_id: uuid.UUID, store: LeadStore = Depends(get_store)):
    """Render the form as the editor preview: same layout as the public page, nothing interactive."""
    editor = _get_editor(tenant_id, store)
    return render_form(_run(editor.load), mode="preview")


@router.get("/{tenant_id}/form/palette", response_model=list[PaletteEntry])
def get_palette(tenant_id: uuid.UUID, store: LeadStore = Depends(get_store)):
    _get_editor(tenant_id, store)
    return editor_palette()


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@router.post("/{tenant_id}/form/blocks", response_model=BlockDefinition, status_code=201)
def add_block(tenant_id: uuid.UUID, payload: BlockCreate, store: LeadStore = Depends(get_store)):
    editor = _get_editor(tenant_id, store)
    return _run(editor.add, payload.variant)


@router.patch("/{tenant_id}/form/blocks/{block_id}", response_model=BlockDefinition)
def update_block(
    tenant_id: uuid.UUID,
    block_id: str,
    payload: BlockUpdate,
    store: LeadStore = Depends(get_store),
):
    editor = _get_editor(tenant_id, store)
    return _run(editor.update, block_id, payload)


@router.delete("/{tenant_id}/form/blocks/{block_id}", response_model=FormDefinition)
def delete_block(tenant_id: uuid.UUID, block_id: str, store: LeadStore = Depends(get_store)):
    editor = _get_editor(tenant_id, store)
    return _run(editor.remove, block_id)


@router.post("/{tenant_id}/form/blocks/{block_id}/move", response_model=FormDefinition)
def move_block(
    tenant_id: uuid.UUID,
    block_id: str,
    payload: BlockMove,
    store: LeadStore = Depends(get_store),
):
    editor = _get_editor(tenant_id, store)
    return _run(editor.move, block_id, payload.direction)


# ---------------------------------------------------------------------------
# Branding
# ---------------------------------------------------------------------------


@router.post("/{tenant_id}/form/logo", response_model=FormDefinition)
async def upload_logo(
    tenant_id: uuid.UUID,
    file: UploadFile,
    store: LeadStore = Depends(get_store),
    file_store: BaseFileStore = Depends(get_file_store),
):
    editor = _get_editor(tenant_id, store)
    content = await file.read()
    try:
        reference = save_upload(file_store, tenant_id, "logo", file.filename, content, file.content_type)
    except FileValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _run(editor.set_logo, reference)
