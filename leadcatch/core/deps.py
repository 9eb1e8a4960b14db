"""Request-scoped dependencies: lead store, messaging senders and the submission pipeline."""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from leadcatch.core.database import get_db
from leadcatch.services.files import BaseFileStore, LocalFileStore
from leadcatch.services.messaging import (
    BaseEmailSender,
    BaseSmsSender,
    MessagingConfigurationError,
    get_email_sender,
    get_sms_sender,
)
from leadcatch.services.notifications import NotificationDispatcher
from leadcatch.services.store import LeadStore, SqlAlchemyStore
from leadcatch.services.submissions import SubmissionPipeline

logger = logging.getLogger(__name__)


def get_store(db: Session = Depends(get_db)) -> LeadStore:
    return SqlAlchemyStore(db)


def get_optional_sms_sender() -> BaseSmsSender | None:
    """The configured SMS sender, or None so that SMS channels fail on their own."""
    try:
        return get_sms_sender()
    except MessagingConfigurationError as exc:
        logger.warning("SMS sender unavailable: %s", exc)
        return None


def get_optional_email_sender() -> BaseEmailSender | None:
    try:
        return get_email_sender()
    except MessagingConfigurationError as exc:
        logger.warning("Email sender unavailable: %s", exc)
        return None


def get_notification_dispatcher(
    email_sender: BaseEmailSender | None = Depends(get_optional_email_sender),
    sms_sender: BaseSmsSender | None = Depends(get_optional_sms_sender),
) -> NotificationDispatcher:
    return NotificationDispatcher(email_sender=email_sender, sms_sender=sms_sender)


def get_submission_pipeline(
    store: LeadStore = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> SubmissionPipeline:
    return SubmissionPipeline(store=store, dispatcher=dispatcher)


def get_file_store() -> BaseFileStore:
    return LocalFileStore()
