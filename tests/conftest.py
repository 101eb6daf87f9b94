"""
Fixtures compartidas para la suite de pytest.

- `db`: base Mongo en memoria (mongomock) inyectada en el gateway de conexión.
- `outbox`: reemplaza el envío SMTP y guarda (destinatario, código, nombre).
- `client`: TestClient de FastAPI sin ejecutar el startup (no toca Mongo real).
- `register`: registra y verifica un usuario, devuelve token + resumen.
"""
import os

# Variables de entorno ANTES de importar la app
os.environ["JWT_SECRET"] = "test-secret-not-real-0123456789abcdef"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("MONGODB_URI", None)
os.environ.pop("MONGO_URI", None)

import mongomock
import pytest
from fastapi.testclient import TestClient

from hdnotes.core import rate_limit
from hdnotes.infrastructure.db import bootstrap, mongo
from hdnotes.infrastructure.email import email_client


@pytest.fixture(autouse=True)
def db(monkeypatch):
    client = mongomock.MongoClient()
    database = client["hd_notes_test"]
    monkeypatch.setattr(mongo, "_client", client)
    monkeypatch.setattr(mongo, "_db", database)
    bootstrap._ensure_indexes(bootstrap.USER_COLL, bootstrap.USER_INDEXES)
    bootstrap._ensure_indexes(bootstrap.NOTE_COLL, bootstrap.NOTE_INDEXES)
    rate_limit.reset()
    yield database
    rate_limit.reset()


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    def _fake_send(recipient, code, display_name):
        sent.append({"to": recipient, "code": code, "name": display_name})

    monkeypatch.setattr(email_client, "send_verification_code_email", _fake_send)
    return sent


@pytest.fixture
def client():
    from hdnotes.main import app
    return TestClient(app)


@pytest.fixture
def register(client, outbox):
    """Registra y verifica un usuario vía API; devuelve dict con token, user y headers."""

    def _register(email="a@x.com", name="A", password="secret1", dob="2000-01-01"):
        r = client.post(
            "/api/auth/send-otp",
            json={"email": email, "name": name, "dateOfBirth": dob, "password": password},
        )
        assert r.status_code == 200, r.text
        code = outbox[-1]["code"]
        r = client.post("/api/auth/signup", json={"email": email, "otp": code})
        assert r.status_code == 201, r.text
        body = r.json()
        return {
            "token": body["token"],
            "user": body["user"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _register
