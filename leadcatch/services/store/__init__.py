"""Lead store — persistence interface with SQLAlchemy and in-memory adapters."""

from leadcatch.services.store.base import LeadStore
from leadcatch.services.store.exceptions import (
    FormDefinitionNotFound,
    PersistenceError,
    RecordNotFound,
    StoreError,
    SubmissionNotFound,
    TenantNotFound,
)
from leadcatch.services.store.memory import InMemoryStore
from leadcatch.services.store.sql import SqlAlchemyStore

__all__ = [
    "FormDefinitionNotFound",
    "InMemoryStore",
    "LeadStore",
    "PersistenceError",
    "RecordNotFound",
    "SqlAlchemyStore",
    "StoreError",
    "SubmissionNotFound",
    "TenantNotFound",
]
