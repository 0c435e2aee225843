"""Shared pytest fixtures: in-memory Firestore, fake Razorpay gateway, app client."""
from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest
from fastapi.testclient import TestClient
from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from storefront.config import Settings
from storefront.core.crypto import hmac_hash
from storefront.core.deps import Dependencies
from storefront.main import create_app

TEST_KEY_ID = "rzp_test_1234abcd"
TEST_KEY_SECRET = "test_secret"


def _resolve(value: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return datetime.now(timezone.utc)
    if isinstance(value, dict):
        return {k: _resolve(v) for k, v in value.items()}
    return value


class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class FakeDocumentRef:
    def __init__(self, db: "FakeFirestore", collection: str, doc_id: str):
        self._db = db
        self.collection = collection
        self.id = doc_id

    @property
    def _key(self) -> Tuple[str, str]:
        return self.collection, self.id

    def get(self, timeout: Optional[float] = None) -> FakeSnapshot:
        self._db._maybe_fail("get")
        return FakeSnapshot(self.id, self._db.docs.get(self._key))

    def set(self, data: Dict[str, Any]) -> None:
        self._db._maybe_fail("set")
        self._db.docs[self._key] = _resolve(copy.deepcopy(data))

    def update(self, patch: Dict[str, Any]) -> None:
        self._db._maybe_fail("update")
        doc = self._db.docs.get(self._key)
        if doc is None:
            raise NotFound(f"No document to update: {self.collection}/{self.id}")
        for path, value in patch.items():
            target = doc
            *parents, leaf = path.split(".")
            for part in parents:
                target = target.setdefault(part, {})
            target[leaf] = _resolve(value)


class FakeCollection:
    def __init__(self, db: "FakeFirestore", name: str):
        self._db = db
        self.name = name

    def document(self, doc_id: str) -> FakeDocumentRef:
        return FakeDocumentRef(self._db, self.name, doc_id)

    def add(self, data: Dict[str, Any]):
        self._db._maybe_fail("add")
        ref = self.document(f"auto_{next(self._db._ids)}")
        self._db.docs[ref._key] = _resolve(copy.deepcopy(data))
        return datetime.now(timezone.utc), ref


@dataclass
class FakeFirestore:
    docs: Dict[Tuple[str, str], Dict[str, Any]] = field(default_factory=dict)
    failing: Set[str] = field(default_factory=set)
    closed: bool = False
    _ids: Any = field(default_factory=lambda: itertools.count(1))

    def _maybe_fail(self, op: str) -> None:
        if op in self.failing:
            raise RuntimeError(f"firestore {op} unavailable")

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def doc(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        return self.docs.get((collection, doc_id))

    def all(self, collection: str) -> List[Dict[str, Any]]:
        return [d for (c, _), d in self.docs.items() if c == collection]

    def close(self) -> None:
        self.closed = True


class FakeGatewayError(Exception):
    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


@dataclass
class FakeGateway:
    key_id: str = TEST_KEY_ID
    key_secret: str = TEST_KEY_SECRET
    next_order_id: Optional[str] = None
    fail_with: Optional[Exception] = None
    calls: List[Dict[str, Any]] = field(default_factory=list)
    closed: bool = False
    _ids: Any = field(default_factory=lambda: itertools.count(1))

    def create_order(self, amount: int, currency: str, receipt: str, payment_capture: int = 1) -> Dict[str, Any]:
        self.calls.append({"amount": amount, "currency": currency, "receipt": receipt,
                           "payment_capture": payment_capture})
        if self.fail_with is not None:
            raise self.fail_with
        order_id = self.next_order_id or f"order_TEST{next(self._ids):04d}"
        return {
            "id": order_id,
            "entity": "order",
            "amount": amount,
            "amount_paid": 0,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }

    def expected_signature(self, razorpay_order_id: str, razorpay_payment_id: str) -> str:
        return hmac_hash(self.key_secret, razorpay_order_id, razorpay_payment_id)

    def close(self) -> None:
        self.closed = True


def sign(order_id: str, payment_id: str, secret: str = TEST_KEY_SECRET) -> str:
    return hmac_hash(secret, order_id, payment_id)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        environment="test",
        razorpay_key_id=TEST_KEY_ID,
        razorpay_key_secret=TEST_KEY_SECRET,
        firebase_project_id="demo-storefront",
        firebase_collection_prefix="",
    )


@pytest.fixture()
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def deps(settings: Settings, gateway: FakeGateway, fake_db: FakeFirestore) -> Dependencies:
    return Dependencies(settings=settings, gateway=gateway, db=fake_db, firebase_initialized=True)


@pytest.fixture()
def client(deps: Dependencies) -> TestClient:
    return TestClient(create_app(deps=deps))
