import asyncio
import pytest
from types import SimpleNamespace
from datetime import datetime, timedelta, timezone
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app
from app.services import (
    contact_service,
    discount_service,
    product_service,
    session_service,
    user_service,
)


def _session(user_id, role, contact_id, name, email):
    return {
        "user": {
            "id": user_id,
            "role": role,
            "contactId": contact_id,
            "name": name,
            "email": email,
        },
        "expires": datetime.now(timezone.utc) + timedelta(hours=1),
    }


ADMIN_TOKEN = "admin-token"
CUSTOMER_TOKEN = "customer-token"
ROGUE_TOKEN = "rogue-token"


@pytest.fixture
def session_store(monkeypatch):
    """
    Replaces the Mongo-backed session lookup with an in-memory mapping of
    token -> session. Records every token looked up.
    """
    store = {
        ADMIN_TOKEN: _session("64b000000000000000000001", "ADMIN", "64c000000000000000000001", "Asha Admin", "admin@example.com"),
        CUSTOMER_TOKEN: _session("64b000000000000000000002", "CUSTOMER", "64c000000000000000000002", "Ravi Kumar", "ravi@example.com"),
        ROGUE_TOKEN: _session("64b000000000000000000003", "SUPERUSER", None, "Mallory", "mallory@example.com"),
    }
    lookups = []

    async def fake_get_server_session(token):
        lookups.append(token)
        if not token:
            return None
        return store.get(token)

    monkeypatch.setattr(session_service, "get_server_session", fake_get_server_session)
    return SimpleNamespace(sessions=store, lookups=lookups)


@pytest.fixture
def client(session_store):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def customer_headers():
    return {"Authorization": f"Bearer {CUSTOMER_TOKEN}"}


@pytest.fixture
def api_prefix():
    return settings.API_PREFIX


@pytest.fixture
def valid_product():
    return {
        "name": "Blue Shirt",
        "slug": "blue-shirt-v2",
        "description": "Cotton shirt with a button-down collar",
        "category": "Topwear",
        "type": "Shirt",
        "material": "Cotton",
        "price": 19.99,
        "stock": 12,
        "images": ["https://cdn.example.com/blue-shirt.jpg"],
        "isPublished": True,
    }


@pytest.fixture
def valid_contact():
    return {
        "type": "VENDOR",
        "name": "Sharma Textiles",
        "email": "orders@sharmatextiles.in",
        "phone": "+91 98765 43210",
        "address": "12 Mill Road",
        "city": "Surat",
        "state": "Gujarat",
        "country": "India",
        "pincode": "395003",
        "gstNumber": "24AABCS1429B1Z5",
    }


class FakeCollection:
    """
    In-memory stand-in for a Motor collection. Filters support plain
    equality and {"$ne": value}. Set insert_error / update_error to make
    the next writes fail; insert_delays (seconds) are consumed one per insert.
    """

    def __init__(self, documents=(), insert_delays=()):
        self.documents = [dict(document) for document in documents]
        self.insert_delays = list(insert_delays)
        self.insert_error = None
        self.update_error = None

    @staticmethod
    def _matches(document, query):
        for key, expected in (query or {}).items():
            if isinstance(expected, dict) and "$ne" in expected:
                if document.get(key) == expected["$ne"]:
                    return False
            elif document.get(key) != expected:
                return False
        return True

    async def find_one(self, query=None, projection=None):
        for document in self.documents:
            if self._matches(document, query):
                return dict(document)
        return None

    async def insert_one(self, document):
        if self.insert_delays:
            await asyncio.sleep(self.insert_delays.pop(0))
        if self.insert_error:
            raise self.insert_error
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, query, update):
        if self.update_error:
            raise self.update_error
        for document in self.documents:
            if self._matches(document, query):
                document.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def update_many(self, query, update):
        modified = 0
        for document in self.documents:
            if self._matches(document, query):
                document.update(update.get("$set", {}))
                modified += 1
        return SimpleNamespace(matched_count=modified, modified_count=modified)

    async def delete_one(self, query):
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def fake_db(monkeypatch):
    """
    Points every service's collection getters at FakeCollections.
    """
    db = SimpleNamespace(
        users=FakeCollection(),
        contacts=FakeCollection(),
        products=FakeCollection(),
        sessions=FakeCollection(),
        discount_offers=FakeCollection(),
        coupons=FakeCollection(),
    )

    getters = {
        product_service: {"get_products_collection": "products"},
        contact_service: {"get_contacts_collection": "contacts", "get_users_collection": "users"},
        discount_service: {"get_discount_offers_collection": "discount_offers", "get_coupons_collection": "coupons"},
        user_service: {"get_users_collection": "users", "get_contacts_collection": "contacts"},
        session_service: {"get_sessions_collection": "sessions"},
    }
    for module, names in getters.items():
        for getter, collection in names.items():
            monkeypatch.setattr(module, getter, lambda collection=collection: getattr(db, collection))

    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    return db
