"""Shared fixtures: fixed clock, in-memory storage, predictable ids."""

import itertools
from datetime import date

import pytest
import structlog

from debt_discipline.audit import AuditLogger
from debt_discipline.config import get_settings
from debt_discipline.config.settings import DEFAULT_STORAGE_KEY
from debt_discipline.ledger import LedgerStore
from debt_discipline.orchestrator import DebtTracker
from debt_discipline.services.storage import InMemoryByteStore


TODAY = date(2024, 1, 10)
STORAGE_KEY = DEFAULT_STORAGE_KEY


@pytest.fixture(autouse=True)
def reset_global_config():
    """Undo logging/settings configuration done by a test."""
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"debt-{next(counter)}"


@pytest.fixture
def byte_store() -> InMemoryByteStore:
    return InMemoryByteStore()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def ledger(byte_store, audit_logger, id_factory) -> LedgerStore:
    return LedgerStore(
        byte_store,
        storage_key=STORAGE_KEY,
        audit_logger=audit_logger,
        id_factory=id_factory,
    )


@pytest.fixture
def tracker(ledger) -> DebtTracker:
    return DebtTracker(ledger, clock=lambda: TODAY)
