"""Shared fixtures: sample records and an in-memory store."""

from __future__ import annotations

import pytest

from hirefeed.models.employee_record import CanonicalRecord, DetailRecord
from tests.fakes import TRACKING, VALID_EMPLOYEE, MemoryKeyValueStore


@pytest.fixture
def employee() -> CanonicalRecord:
    return CanonicalRecord(**VALID_EMPLOYEE)


@pytest.fixture
def detail_record() -> DetailRecord:
    return DetailRecord(**TRACKING, **VALID_EMPLOYEE)


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()
