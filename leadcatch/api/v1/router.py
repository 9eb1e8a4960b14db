from fastapi import APIRouter

from leadcatch.api.v1.endpoints import (
    calls,
    credits,
    forms,
    public_forms,
    submissions,
    tenants,
)

api_v1_router = APIRouter()

api_v1_router.include_router(public_forms.router, prefix="/public/forms", tags=["public-forms"])
api_v1_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_v1_router.include_router(forms.router, prefix="/tenants", tags=["form-editor"])
api_v1_router.include_router(submissions.router, prefix="/tenants", tags=["submissions"])
api_v1_router.include_router(credits.router, prefix="/tenants", tags=["credits"])
api_v1_router.include_router(calls.router, prefix="/calls", tags=["calls"])
