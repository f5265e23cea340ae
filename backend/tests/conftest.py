"""
Prospection - Fixtures de test

L'app est montée en mémoire (httpx + ASGITransport) sur une base
mongomock-motor injectée via create_app(database=...).
"""

import os
import uuid

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import httpx
import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from server import create_app
from services.repositories import ensure_indexes

ADMIN_API_KEY = os.environ["ADMIN_API_KEY"]


def auth_h(token):
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def db():
    database = AsyncMongoMockClient()[f"prospection_test_{uuid.uuid4().hex[:8]}"]
    await ensure_indexes(database)
    return database


@pytest.fixture
def app(db):
    return create_app(database=db)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def admin_headers(client):
    r = await client.post("/api/admin/login", json={"apiKey": ADMIN_API_KEY})
    assert r.status_code == 200
    return auth_h(r.json()["token"])


async def register_user(client, headers, phone, nom="Dupont", prenom="Marie"):
    r = await client.post("/api/admin/users", json={"phone": phone, "nom": nom, "prenom": prenom}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["user"]


async def login_phone(client, db, phone):
    """Demande un code, le lit en base (SMS simulé) et retourne le token"""
    r = await client.post("/api/auth/request-otp", json={"phone": phone})
    assert r.status_code == 200, r.text
    otp = await db.otps.find_one({"phone": phone})
    r = await client.post("/api/auth/verify-otp", json={"phone": phone, "code": otp["code"]})
    assert r.status_code == 200, r.text
    return r.json()["token"]
