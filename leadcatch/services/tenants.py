"""Tenant service — onboarding with a default form and welcome credits, settings and stats."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from leadcatch.core.config import settings
from leadcatch.models.credit import Credit
from leadcatch.models.sms_log import SmsLog
from leadcatch.models.submission import Submission
from leadcatch.models.tenant import Tenant
from leadcatch.schemas.forms import (
    BlockDefinition,
    BlockVariant,
    FormDefinition,
    MarketingOptin,
    NotificationChannelConfig,
    NotificationSettings,
)
from leadcatch.schemas.tenants import (
    PROFILE_FIELDS,
    ScheduleConfig,
    TenantCreate,
    TenantDirectoryEntry,
    TenantStats,
    TenantUpdate,
    clean_sender_id,
)
from leadcatch.services.credits import get_balance, purchase_credits
from leadcatch.services.store import SqlAlchemyStore, TenantNotFound

logger = logging.getLogger(__name__)

DEFAULT_SMS_MESSAGE = (
    "Bonjour, {{company}} a reçu votre appel. Cliquez ici pour qualifier votre demande : {{form_link}}"
)
DEFAULT_SENDER_ID = "INFO"
DEFAULT_PAGE_TITLE = "Qualification de demande"


def default_form_definition(contact_email: str) -> FormDefinition:
    """Starter form of a new tenant: contact details, description, photo and GDPR consent."""
    return FormDefinition(
        enabled=True,
        page_title=DEFAULT_PAGE_TITLE,
        blocks=[
            BlockDefinition(id="contact_1", variant=BlockVariant.CONTACT_INFO, label="Vos Coordonnées", required=True),
            BlockDefinition(id="b1", variant=BlockVariant.HEADER, label="Votre Demande"),
            BlockDefinition(
                id="b2",
                variant=BlockVariant.LONG_TEXT,
                label="Description du problème",
                required=True,
                placeholder="Détaillez ici...",
            ),
            BlockDefinition(id="b3", variant=BlockVariant.PHOTO, label="Ajouter une photo"),
            BlockDefinition(id="b4", variant=BlockVariant.SEPARATOR),
            BlockDefinition(
                id="legal_1",
                variant=BlockVariant.CHECKBOX,
                label="J'accepte que mes données soient traitées pour cette demande (RGPD)",
                required=True,
            ),
        ],
        marketing_optin=MarketingOptin(enabled=True),
        notifications=NotificationSettings(
            admin_email=NotificationChannelConfig(enabled=True, destination=contact_email),
            client_email=NotificationChannelConfig(enabled=True),
        ),
    )


def get_tenant(db: Session, tenant_id: uuid.UUID) -> Tenant:
    tenant = db.get(Tenant, tenant_id)
    if tenant is None:
        raise TenantNotFound(tenant_id)
    return tenant


def create_tenant(db: Session, data: TenantCreate) -> Tenant:
    """Create a tenant, its default form definition and its welcome credit grant."""
    sender_id = clean_sender_id(data.sms_sender_id or data.name) or DEFAULT_SENDER_ID
    tenant = Tenant(
        name=data.name,
        contact_email=data.contact_email,
        sms_sender_id=sender_id,
        auto_sms_enabled=True,
        sms_message=data.sms_message or DEFAULT_SMS_MESSAGE,
        cooldown_seconds=data.cooldown_seconds,
        schedule=data.schedule.model_dump(),
        plan=data.plan,
        **data.model_dump(include=set(PROFILE_FIELDS)),
    )
    db.add(tenant)
    db.commit()
    db.refresh(tenant)

    SqlAlchemyStore(db).save_form_definition(tenant.id, default_form_definition(data.contact_email))
    if settings.WELCOME_CREDITS > 0:
        purchase_credits(
            db,
            tenant.id,
            settings.WELCOME_CREDITS,
            reference="START-BONUS",
            description="Welcome credits",
        )
    db.refresh(tenant)

    logger.info("Tenant %s created (%s)", tenant.id, tenant.name)
    return tenant


def update_tenant(db: Session, tenant_id: uuid.UUID, changes: TenantUpdate) -> Tenant:
    tenant = get_tenant(db, tenant_id)
    update_data = changes.model_dump(exclude_unset=True)

    if "sms_sender_id" in update_data:
        update_data["sms_sender_id"] = clean_sender_id(update_data["sms_sender_id"] or "") or DEFAULT_SENDER_ID
    if update_data.get("schedule") is not None:
        update_data["schedule"] = ScheduleConfig.model_validate(update_data["schedule"]).model_dump()

    for field, value in update_data.items():
        if value is None:
            continue
        setattr(tenant, field, value)

    db.commit()
    db.refresh(tenant)
    return tenant


def get_tenant_stats(db: Session, tenant_id: uuid.UUID) -> TenantStats:
    get_tenant(db, tenant_id)

    log_counts = dict(
        db.execute(
            select(SmsLog.status, func.count()).where(SmsLog.tenant_id == tenant_id).group_by(SmsLog.status)
        ).all()
    )
    submission_counts = dict(
        db.execute(
            select(Submission.status, func.count())
            .where(Submission.tenant_id == tenant_id)
            .group_by(Submission.status)
        ).all()
    )

    return TenantStats(
        sms_sent=log_counts.get("sent", 0),
        sms_filtered=log_counts.get("filtered", 0),
        sms_errors=log_counts.get("error", 0),
        submissions_total=sum(submission_counts.values()),
        submissions_new=submission_counts.get("new", 0),
        credit_balance=get_balance(db, tenant_id).balance,
    )


def list_tenant_directory(db: Session) -> list[TenantDirectoryEntry]:
    """All tenants with their balance, missed-call outcomes and latest call, oldest first."""
    log_counts: dict[uuid.UUID, dict[str, int]] = {}
    for tenant_id, status, count in db.execute(
        select(SmsLog.tenant_id, SmsLog.status, func.count()).group_by(SmsLog.tenant_id, SmsLog.status)
    ).all():
        log_counts.setdefault(tenant_id, {})[status] = count

    last_activity = dict(
        db.execute(select(SmsLog.tenant_id, func.max(SmsLog.created_at)).group_by(SmsLog.tenant_id)).all()
    )
    balances = dict(db.execute(select(Credit.tenant_id, Credit.balance)).all())

    entries = []
    for tenant in db.scalars(select(Tenant).order_by(Tenant.created_at, Tenant.name)):
        counts = log_counts.get(tenant.id, {})
        entries.append(
            TenantDirectoryEntry(
                tenant_id=tenant.id,
                name=tenant.name,
                contact_email=tenant.contact_email,
                plan=tenant.plan,
                auto_sms_enabled=tenant.auto_sms_enabled,
                credit_balance=balances.get(tenant.id, 0.0),
                sms_sent=counts.get("sent", 0),
                sms_filtered=counts.get("filtered", 0),
                sms_errors=counts.get("error", 0),
                last_activity=last_activity.get(tenant.id),
                created_at=tenant.created_at,
            )
        )
    return entries
