import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.dialects.sqlite import base as sqlite_base
from sqlalchemy.orm import sessionmaker

import leadcatch.models  # noqa: F401  register models with Base.metadata
from leadcatch.core.config import settings
from leadcatch.core.database import Base, get_db
from leadcatch.core.deps import get_file_store, get_optional_email_sender, get_optional_sms_sender
from leadcatch.main import app as fastapi_app
from leadcatch.schemas.tenants import TenantCreate
from leadcatch.services.files import LocalFileStore
from leadcatch.services.messaging import BaseEmailSender, BaseSmsSender, EmailDeliveryError, SendResult, SmsDeliveryError
from leadcatch.services.store import InMemoryStore
from leadcatch.services.tenants import create_tenant

settings.DEBUG = True

# ---------------------------------------------------------------------------
# SQLite compatibility for PostgreSQL-specific types (JSONB)
# ---------------------------------------------------------------------------
sqlite_base.SQLiteTypeCompiler.visit_JSONB = lambda self, type_, **kw: self.visit_JSON(type_, **kw)

# In-memory SQLite for tests, no PostgreSQL needed
TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ---------------------------------------------------------------------------
# Fake messaging providers
# ---------------------------------------------------------------------------


class FakeEmailSender(BaseEmailSender):
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.fail = fail

    @property
    def name(self) -> str:
        return "fake-email"

    async def send(self, to: str, subject: str, body: str) -> SendResult:
        if self.fail:
            raise EmailDeliveryError("fake-email", f"Failed to send email to {to}")
        self.sent.append({"to": to, "subject": subject, "body": body})
        return SendResult(message_id=f"email-{len(self.sent)}")


class FakeSmsSender(BaseSmsSender):
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.fail = fail

    @property
    def name(self) -> str:
        return "fake-sms"

    async def send(self, to: str, body: str, sender_id: str | None = None) -> SendResult:
        if self.fail:
            raise SmsDeliveryError("fake-sms", f"Failed to send SMS to {to}")
        self.sent.append({"to": to, "body": body, "sender_id": sender_id})
        return SendResult(message_id=f"sms-{len(self.sent)}", status="queued")


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def setup_db():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Provide a test database session."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def tenant(db):
    """A tenant with its default form, admin email and welcome credits."""
    return create_tenant(
        db,
        TenantCreate(name="Plomberie Dupont", contact_email="contact@dupont.fr"),
    )


@pytest.fixture
def tenant_id(tenant) -> uuid.UUID:
    return tenant.id


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def memory_tenant_id(memory_store) -> uuid.UUID:
    tenant_id = uuid.uuid4()
    memory_store.add_tenant(tenant_id, "Acme")
    return tenant_id


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def sms_sender() -> FakeSmsSender:
    return FakeSmsSender()


@pytest.fixture
def failing_email_sender() -> FakeEmailSender:
    return FakeEmailSender(fail=True)


@pytest.fixture
def failing_sms_sender() -> FakeSmsSender:
    return FakeSmsSender(fail=True)


@pytest.fixture
def client(db, email_sender, sms_sender, tmp_path):
    """TestClient with overridden DB, messaging and file store dependencies."""

    def _override_get_db():
        try:
            yield db
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    fastapi_app.dependency_overrides[get_optional_email_sender] = lambda: email_sender
    fastapi_app.dependency_overrides[get_optional_sms_sender] = lambda: sms_sender
    fastapi_app.dependency_overrides[get_file_store] = lambda: LocalFileStore(str(tmp_path))
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()
