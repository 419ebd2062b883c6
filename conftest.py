"""Shared fixtures: an in-memory stand-in for the AsyncSupabase wrapper"""
import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from core.auth import Identity
from core.exceptions import Unauthenticated, ModelFailure
from models.records import ModelDiagnosis

NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)
USER_ID = "user-123"


class FakeSupabase:
    """Applies the same filter dict as AsyncSupabase.select against in-memory tables"""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.select_calls: List[str] = []
        self.insert_calls: List[str] = []
        self.fail_select: Dict[str, Exception] = {}
        self.fail_insert: Optional[Exception] = None
        self.over_return = False

    async def select(self, table, columns="*", filters=None, limit=None, order_by=None, order_desc=False):
        self.select_calls.append(table)
        await asyncio.sleep(0)
        if table in self.fail_select:
            raise self.fail_select[table]

        rows = list(self.tables.get(table, []))
        for op, conditions in (filters or {}).items():
            for field, value in conditions.items():
                if op == "eq":
                    rows = [r for r in rows if r.get(field) == value]
                elif op == "gte":
                    rows = [r for r in rows if r.get(field) is not None and r[field] >= value]
                elif op == "lte":
                    rows = [r for r in rows if r.get(field) is not None and r[field] <= value]
                elif op == "is_":
                    rows = [r for r in rows if r.get(field) is value]
        # over_return mimics a store that ignores ordering and limit
        if self.over_return:
            return rows
        if order_by:
            rows.sort(key=lambda r: r[order_by], reverse=order_desc)
        if limit:
            rows = rows[:limit]
        return rows

    async def insert(self, table, data):
        self.insert_calls.append(table)
        await asyncio.sleep(0)
        if self.fail_insert is not None:
            raise self.fail_insert
        row = dict(data)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", NOW.isoformat())
        self.tables.setdefault(table, []).append(row)
        return [row]

    def close(self):
        pass


class FakeModel:
    """Diagnostic model double that records the messages it was sent"""

    def __init__(self, diagnosis: Optional[ModelDiagnosis] = None, error: Optional[Exception] = None):
        self.diagnosis = diagnosis or make_diagnosis()
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    async def diagnose(self, messages):
        self.calls.append(messages)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.diagnosis


class FakeAuthenticator:
    def __init__(self, valid_token: str = "good-token", user_id: str = USER_ID):
        self.valid_token = valid_token
        self.user_id = user_id

    async def authenticate(self, authorization):
        if not authorization:
            raise Unauthenticated("Authentication required")
        if authorization != f"Bearer {self.valid_token}":
            raise Unauthenticated("Invalid authentication token")
        return Identity(user_id=self.user_id, email="patient@example.com")


def make_diagnosis(**overrides) -> ModelDiagnosis:
    values = {
        "suspected_conditions": ["Tension headache", "Dehydration"],
        "primary_diagnosis": "Tension headache",
        "confidence_score": 72,
        "urgency_level": "low",
        "recommendations": ["Drink water", "Rest in a dark room"],
        "reasoning": "Mild, recent onset without neurological signs",
        "red_flags": [],
        "follow_up_timeline": "See a doctor if not improved in 3 days",
    }
    values.update(overrides)
    return ModelDiagnosis(**values)


@pytest.fixture
def identity() -> Identity:
    return Identity(user_id=USER_ID)


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def failing_model() -> FakeModel:
    return FakeModel(error=ModelFailure("Diagnostic model API error: 500"))
