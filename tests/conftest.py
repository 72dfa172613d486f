"""In-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from staffing.models.bill import Bill, BillStatus
from staffing.models.client import Client, EntityType, MarkupType
from staffing.models.provider import ServiceProvider

# Matches Alembic head: 8b2e5d1c0a91 (add kind to clients)
SCHEMA_DDL = """
CREATE TABLE clients (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    company_name TEXT NOT NULL,
    kind TEXT NOT NULL DEFAULT 'client',
    entity TEXT NOT NULL,
    city TEXT NOT NULL DEFAULT '',
    state TEXT NOT NULL DEFAULT '',
    markup_type TEXT,
    markup_value NUMERIC(12, 2),
    commission NUMERIC(5, 2),
    internal_notes TEXT NOT NULL DEFAULT '',
    active TINYINT NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE service_providers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    services TEXT NOT NULL,
    hourly_rate NUMERIC(10, 2) NOT NULL,
    active TINYINT NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE bills (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    bill_number VARCHAR(32) NOT NULL UNIQUE,
    sequence INTEGER NOT NULL UNIQUE,
    client_id INTEGER NOT NULL REFERENCES clients(id),
    provider_id INTEGER NOT NULL REFERENCES service_providers(id),
    service TEXT NOT NULL,
    hours_worked NUMERIC(8, 2) NOT NULL,
    service_rate NUMERIC(10, 2) NOT NULL,
    total_client NUMERIC(12, 2) NOT NULL,
    total_provider NUMERIC(12, 2) NOT NULL,
    status TEXT NOT NULL DEFAULT 'Pending',
    due_date DATE,
    paid_date DATE,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_client(**overrides) -> Client:
    defaults = dict(
        company_name="Acme Facilities",
        entity=EntityType.LLC,
        city="Orlando",
        state="FL",
        markup_type=MarkupType.PERCENT,
        markup_value=Decimal("15.5"),
        commission=Decimal("8"),
    )
    defaults.update(overrides)
    return Client(**defaults)


def _sample_provider(**overrides) -> ServiceProvider:
    defaults = dict(
        first_name="Maria",
        last_name="Silva",
        email="maria@example.com",
        phone="555-0100",
        services=["Residential Plumbing", "Hydraulic Maintenance"],
        hourly_rate=Decimal("35"),
    )
    defaults.update(overrides)
    return ServiceProvider(**defaults)


def _sample_bill(client_id: int = 1, provider_id: int = 1, **overrides) -> Bill:
    defaults = dict(
        bill_number="BILL-0001",
        sequence=0,
        client_id=client_id,
        provider_id=provider_id,
        service="Residential Plumbing",
        hours_worked=Decimal("8"),
        service_rate=Decimal("35"),
        total_client=Decimal("323.40"),
        total_provider=Decimal("257.60"),
        status=BillStatus.PENDING,
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def sample_client():
    return _sample_client


@pytest.fixture()
def sample_provider():
    return _sample_provider


@pytest.fixture()
def sample_bill():
    return _sample_bill
