"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["EMAIL_MOCK_MODE"] = "true"
os.environ["SMS_MOCK_MODE"] = "true"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)
os.environ.pop("TWILIO_ACCOUNT_SID", None)
os.environ.pop("TWILIO_AUTH_TOKEN", None)

from notifyhub.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from notifyhub.application.use_cases.recipients import create_recipient  # noqa: E402
from notifyhub.infrastructure import database, models  # noqa: E402,F401
from notifyhub.infrastructure.security import create_recipient_token  # noqa: E402


class RecordingQueue:
    """Delivery queue double that keeps every enqueued job."""

    def __init__(self) -> None:
        self.jobs = []

    def enqueue(self, job, delay=0):
        self.jobs.append((job, delay))
        return job.id

    def channels(self) -> list[str]:
        return [job.channel for job, _ in self.jobs]


class RecordingPublisher:
    """Realtime publisher double that keeps every dispatched sequence."""

    def __init__(self) -> None:
        self.dispatched = []

    def dispatch(self, recipient_id, events):
        self.dispatched.append((recipient_id, list(events)))

    def event_types(self) -> list[str]:
        return [event_type for _, events in self.dispatched for event_type, _ in events]


class FakeRedis:
    """In-memory replacement for the handful of list commands the job store uses."""

    def __init__(self) -> None:
        self.lists: dict[str, list[str]] = {}

    def lpush(self, key, value):
        self.lists.setdefault(key, []).insert(0, value)
        return len(self.lists[key])

    def ltrim(self, key, start, end):
        items = self.lists.get(key, [])
        self.lists[key] = items[start : end + 1] if end >= 0 else items[start:]
        return True

    def lrange(self, key, start, end):
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start : end + 1]

    def pipeline(self):
        return _FakePipeline(self)


class _FakePipeline:
    def __init__(self, client: FakeRedis) -> None:
        self._client = client
        self._commands = []

    def lpush(self, *args):
        self._commands.append(("lpush", args))
        return self

    def ltrim(self, *args):
        self._commands.append(("ltrim", args))
        return self

    def execute(self):
        results = [getattr(self._client, name)(*args) for name, args in self._commands]
        self._commands = []
        return results


@pytest.fixture(autouse=True)
def setup_database():
    """Prepare a fresh schema for every test."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_recipient(session):
    """Return a factory creating recipients with their default preferences."""

    counter = {"value": 0}

    def _make(**overrides):
        counter["value"] += 1
        values = {
            "name": f"Recipient {counter['value']}",
            "email": f"recipient{counter['value']}@example.com",
            "phone": None,
            "email_verified": True,
            "phone_verified": False,
            "is_admin": False,
        }
        values.update(overrides)
        return create_recipient(session, **values)

    return _make


@pytest.fixture()
def recording_queue() -> RecordingQueue:
    return RecordingQueue()


@pytest.fixture()
def recording_publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def auth_headers():
    """Return a helper building bearer headers for a recipient."""

    def _headers(recipient) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_recipient_token(recipient.id)}"}

    return _headers
