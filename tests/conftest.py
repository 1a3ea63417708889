import os

# Must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_PASSKEY"] = "123456"
os.environ["PAYMENT_PROCESSING_DELAY_SECONDS"] = "0"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["SECURITY_HEADERS_ENABLED"] = "true"
os.environ["ENVIRONMENT"] = "test"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.domain.patients.repository import PatientRepository  # noqa: E402
from app.main import app  # noqa: E402
from app.services import twilio_service  # noqa: E402
from app.utils import image_storage  # noqa: E402

ADMIN_HEADERS = {"X-Admin-Passkey": "123456"}


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


class FakeSMS:
    """Records outgoing messages instead of calling Twilio"""

    def __init__(self):
        self.messages = []
        self.fail_with = None

    async def send_sms(self, to_phone, message_body):
        if self.fail_with:
            return False, self.fail_with
        self.messages.append((to_phone, message_body))
        return True, None


@pytest.fixture
def sms(monkeypatch):
    fake = FakeSMS()
    monkeypatch.setattr(twilio_service, "send_sms", fake.send_sms)
    return fake


class FakeR2:
    """Minimal stand-in for the boto3 S3 client"""

    def __init__(self):
        self.objects = {}
        self.fail_delete = False

    def put_object(self, Bucket, Key, Body, ContentType, **kwargs):
        self.objects[(Bucket, Key)] = Body

    def delete_object(self, Bucket, Key):
        if self.fail_delete:
            raise RuntimeError("R2 unavailable")
        self.objects.pop((Bucket, Key), None)


@pytest.fixture
def r2(monkeypatch):
    fake = FakeR2()
    monkeypatch.setattr(image_storage, "get_r2_client", lambda: fake)
    return fake


@pytest.fixture
def patient(db):
    """A registered patient with an account"""
    repo = PatientRepository()
    user = repo.create_user(db, name="Jane Doe", email="jane@example.com", phone="+15551234567")
    return repo.create_patient(
        db,
        user.id,
        name="Jane Doe",
        email="jane@example.com",
        phone="+15551234567",
        birth_date=date(1990, 4, 12),
        gender="Female",
        address="12 Main Street, Springfield",
        occupation="Engineer",
        emergency_contact_name="John Doe",
        emergency_contact_number="+15557654321",
        primary_physician="Dr. Adam Smith",
        insurance_provider="BlueCross",
        insurance_policy_number="ABC123456789",
        treatment_consent=True,
        disclosure_consent=True,
        privacy_consent=True,
    )
