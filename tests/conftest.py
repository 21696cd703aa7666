"""Shared pytest fixtures backed by an in-memory MongoDB."""

from __future__ import annotations

import sys
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from marketplace import database  # noqa: E402
from marketplace.main import create_app  # noqa: E402
from marketplace.services import email_service  # noqa: E402

TEST_CONFIG = {
    "TESTING": True,
    "ALLOWED_EMAIL_DOMAIN": "@bue.edu.eg",
    "MAX_UPLOAD_BYTES": 200 * 1024,
    "MAX_IMAGES": 5,
    "OTP_TTL_SECONDS": 900,
    "OTP_MAX_ATTEMPTS": 3,
    "PUBLIC_BASE_URL": "http://marketplace.test",
    "DEFAULT_PAGE_SIZE": 10,
    "MAX_PAGE_SIZE": 50,
    "EMAIL_SEND_ATTEMPTS": 3,
    "EMAIL_RETRY_DELAY_SECONDS": 0,
    "MAIL_SUPPRESS_SEND": False,
    "EMAIL_FROM": "noreply@bue.edu.eg",
}


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch: pytest.MonkeyPatch):
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_campus_marketplace"
    monkeypatch.setenv("MONGODB_DATABASE", test_db_name)

    client = mongomock.MongoClient()
    db = client[test_db_name]

    monkeypatch.setattr(database, "get_mongo_client", lambda: client)
    monkeypatch.setattr(database, "get_database", lambda: db)

    yield db

    client.drop_database(test_db_name)


@pytest.fixture
def app(mongo_db):
    return create_app(TEST_CONFIG)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sent_emails(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, str]]:
    """Capture outgoing emails instead of talking to an SMTP server."""
    outbox: List[Dict[str, str]] = []

    def fake_send(to_email: str, subject: str, body: str) -> None:
        outbox.append({"to": to_email, "subject": subject, "body": body})

    monkeypatch.setattr(email_service, "send_message", fake_send)
    return outbox


def listing_form(**overrides: Any) -> Dict[str, Any]:
    form = {
        "seller_name": "Amira",
        "email": "a@bue.edu.eg",
        "contact_number": "0100000000",
        "whatsapp_number": "0100000000",
        "item_name": "Lamp",
        "item_description": "Desk lamp, works fine",
        "price": "100",
    }
    form.update(overrides)
    return form


def image_file(size: int = 1024, name: str = "photo.jpg", mimetype: str = "image/jpeg"):
    return (BytesIO(b"\xff" * size), name, mimetype)


@pytest.fixture
def submit(client, sent_emails):
    """Post a listing form and return the response."""

    def _submit(flow_type: str = "sell", images=None, **fields: Any):
        data = listing_form(**fields)
        if flow_type == "lease":
            data.setdefault("price_period", "per month")
        if images is not None:
            data["images"] = images
        return client.post(f"/preowned/{flow_type}", data=data, content_type="multipart/form-data")

    return _submit
