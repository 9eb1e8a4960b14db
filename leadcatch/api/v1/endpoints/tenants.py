"""Tenant API — onboarding, company directory, SMS settings, dashboard stats and the missed-call log."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from leadcatch.core.database import get_db
from leadcatch.schemas.calls import SmsLogResponse
from leadcatch.schemas.tenants import (
    TenantCreate,
    TenantDirectoryEntry,
    TenantResponse,
    TenantStats,
    TenantUpdate,
)
from leadcatch.services.missed_calls import list_sms_logs
from leadcatch.services.store import TenantNotFound
from leadcatch.services.tenants import (
    create_tenant,
    get_tenant,
    get_tenant_stats,
    list_tenant_directory,
    update_tenant,
)

router = APIRouter()


def _get_tenant_or_404(tenant_id: uuid.UUID, db: Session):
    try:
        return get_tenant(db, tenant_id)
    except TenantNotFound:
        raise HTTPException(status_code=404, detail="Tenant not found")


@router.post("", response_model=TenantResponse, status_code=201)
def create_tenant_endpoint(payload: TenantCreate, db: Session = Depends(get_db)):
    """Create a tenant with its default form and welcome credits."""
    return create_tenant(db, payload)


@router.get("", response_model=list[TenantDirectoryEntry])
def list_tenants_endpoint(db: Session = Depends(get_db)):
    """Back-office company list with balances and missed-call activity."""
    return list_tenant_directory(db)


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant_endpoint(tenant_id: uuid.UUID, db: Session = Depends(get_db)):
    return _get_tenant_or_404(tenant_id, db)


@router.patch("/{tenant_id}", response_model=TenantResponse)
def update_tenant_endpoint(tenant_id: uuid.UUID, payload: TenantUpdate, db: Session = Depends(get_db)):
    _get_tenant_or_404(tenant_id, db)
    return update_tenant(db, tenant_id, payload)


@router.get("/{tenant_id}/stats", response_model=TenantStats)
def get_tenant_stats_endpoint(tenant_id: uuid.UUID, db: Session = Depends(get_db)):
    _get_tenant_or_404(tenant_id, db)
    return get_tenant_stats(db, tenant_id)


@router.get("/{tenant_id}/sms-logs", response_model=list[SmsLogResponse])
def list_sms_logs_endpoint(
    tenant_id: uuid.UUID,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Missed-call outcomes, newest first."""
    _get_tenant_or_404(tenant_id, db)
    return [
        SmsLogResponse.model_validate(log).model_copy(update={"has_submission": has_submission})
        for log, has_submission in list_sms_logs(db, tenant_id, limit)
    ]
