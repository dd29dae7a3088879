import asyncio
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from staywise.services.pricing.config import PricingConfig
from staywise.services.pricing.engine import PropertySnapshot


class FakeLLMClient:
    """Stands in for LLMClient: returns a canned response, raises, or stalls."""

    def __init__(self, response: str = "", error: Exception | None = None, delay: float = 0, available: bool = True):
        self.response = response
        self.error = error
        self.delay = delay
        self.available = available
        self.calls: list[dict] = []

    async def complete(self, system, user, **kwargs):
        self.calls.append({"system": system, "user": user, **kwargs})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


class FakeSession:
    """Minimal AsyncSession double for services that add/commit/get."""

    def __init__(
        self,
        objects: dict | None = None,
        rows: list | None = None,
        fail_commit: bool = False,
        fail_execute: bool = False,
        commit_error: Exception | None = None,
    ):
        self.objects = objects or {}
        self.rows = rows or []
        self.queries = []
        self.fail_commit = fail_commit
        self.commit_error = commit_error
        self.fail_execute = fail_execute
        self.added = []
        self.deleted = []
        self.committed = False
        self.rolled_back = False

    def add(self, obj):
        self.added.append(obj)

    async def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        if self.fail_commit:
            raise OperationalError("INSERT", {}, Exception("connection reset"))
        self.committed = True

    async def rollback(self):
        self.rolled_back = True

    async def refresh(self, obj, attribute_names=None):
        if getattr(obj, "id", None) is None:
            obj.id = uuid.uuid4()
        if getattr(obj, "created_at", None) is None:
            obj.created_at = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

    async def get(self, model, key):
        return self.objects.get((model.__name__, key))

    async def execute(self, query):
        self.queries.append(query)
        if self.fail_execute:
            raise OperationalError("SELECT", {}, Exception("connection refused"))
        rows = self.rows
        return SimpleNamespace(scalars=lambda: SimpleNamespace(all=lambda: list(rows)))

    async def delete(self, obj):
        self.deleted.append(obj)


@pytest.fixture
def config():
    return PricingConfig()


@pytest.fixture
def make_property():
    def _make(base_price="100", name="Lakeside Cabin", currency="USD", property_id=None):
        return PropertySnapshot(
            id=str(property_id or uuid.uuid4()),
            name=name,
            base_price=Decimal(base_price) if base_price is not None else None,
            currency=currency,
            location="Lake Tahoe, US",
            type="cabin",
        )
    return _make


@pytest.fixture
def fake_llm():
    return FakeLLMClient
