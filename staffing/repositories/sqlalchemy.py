from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from staffing.constants import TZ
from staffing.models.bill import Bill, BillFilter, BillStatus
from staffing.models.client import Client, CompanyKind, EntityType, MarkupType
from staffing.models.provider import ServiceProvider
from staffing.repositories.base import BillRepository, ClientRepository, ProviderRepository


def _now() -> datetime:
    return datetime.now(TZ)


def _money_param(value: Decimal | None) -> str | None:
    # Bound as text so SQLite keeps the exact digits instead of a float.
    return None if value is None else str(value)


def _money(value: Any) -> Decimal | None:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


class SQLAlchemyClientRepository(ClientRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _params(client: Client) -> dict[str, Any]:
        return {
            "company_name": client.company_name,
            "kind": client.kind.value,
            "entity": client.entity.value,
            "city": client.city,
            "state": client.state,
            "markup_type": client.markup_type.value if client.markup_type else None,
            "markup_value": _money_param(client.markup_value),
            "commission": _money_param(client.commission),
            "internal_notes": client.internal_notes,
            "active": client.active,
        }

    def create(self, client: Client) -> Client:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO clients (uuid, company_name, kind, entity, city, state, markup_type, "
                "markup_value, commission, internal_notes, active, created_at, updated_at) "
                "VALUES (:uuid, :company_name, :kind, :entity, :city, :state, :markup_type, "
                ":markup_value, :commission, :internal_notes, :active, :created_at, :updated_at)"
            ),
            {**self._params(client), "uuid": str(ULID()), "created_at": now, "updated_at": now},
        )
        client_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(client_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve client after create (id={client_id})")
        return created

    @staticmethod
    def _row_to_client(row: RowMapping) -> Client:
        return Client(
            id=row["id"],
            uuid=row["uuid"],
            company_name=row["company_name"],
            kind=CompanyKind(row["kind"]),
            entity=EntityType(row["entity"]),
            city=row["city"],
            state=row["state"],
            markup_type=MarkupType(row["markup_type"]) if row["markup_type"] else None,
            markup_value=_money(row["markup_value"]),
            commission=_money(row["commission"]),
            internal_notes=row["internal_notes"],
            active=bool(row["active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _fetch_one(self, where: str, params: dict[str, Any]) -> Client | None:
        row = (
            self.conn.execute(text(f"SELECT * FROM clients WHERE {where} AND deleted_at IS NULL"), params)
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_client(row)

    def get_by_id(self, client_id: int) -> Client | None:
        return self._fetch_one("id = :id", {"id": client_id})

    def get_by_uuid(self, uuid: str) -> Client | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def list_all(self, active_only: bool = False, kind: CompanyKind | None = None) -> list[Client]:
        sql = "SELECT * FROM clients WHERE deleted_at IS NULL"
        params: dict[str, Any] = {}
        if active_only:
            sql += " AND active = 1"
        if kind is not None:
            sql += " AND kind = :kind"
            params["kind"] = kind.value
        rows = self.conn.execute(text(sql + " ORDER BY company_name"), params).mappings().fetchall()
        return [self._row_to_client(row) for row in rows]

    def update(self, client: Client) -> Client:
        if client.id is None:
            raise ValueError("Cannot update client without an id")
        self.conn.execute(
            text(
                "UPDATE clients SET company_name = :company_name, kind = :kind, entity = :entity, "
                "city = :city, state = :state, markup_type = :markup_type, markup_value = :markup_value, "
                "commission = :commission, internal_notes = :internal_notes, active = :active, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {**self._params(client), "updated_at": _now(), "id": client.id},
        )
        self.conn.commit()
        result = self.get_by_id(client.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve client after update (id={client.id})")
        return result

    def delete(self, client_id: int) -> None:
        self.conn.execute(
            text("UPDATE clients SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": client_id},
        )
        self.conn.commit()


class SQLAlchemyProviderRepository(ProviderRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _params(provider: ServiceProvider) -> dict[str, Any]:
        return {
            "first_name": provider.first_name,
            "last_name": provider.last_name,
            "email": provider.email,
            "phone": provider.phone,
            "services": json.dumps(provider.services),
            "hourly_rate": _money_param(provider.hourly_rate),
            "active": provider.active,
        }

    def create(self, provider: ServiceProvider) -> ServiceProvider:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO service_providers (uuid, first_name, last_name, email, phone, services, "
                "hourly_rate, active, created_at, updated_at) "
                "VALUES (:uuid, :first_name, :last_name, :email, :phone, :services, "
                ":hourly_rate, :active, :created_at, :updated_at)"
            ),
            {**self._params(provider), "uuid": str(ULID()), "created_at": now, "updated_at": now},
        )
        provider_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(provider_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve provider after create (id={provider_id})")
        return created

    @staticmethod
    def _row_to_provider(row: RowMapping) -> ServiceProvider:
        return ServiceProvider(
            id=row["id"],
            uuid=row["uuid"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            services=json.loads(row["services"] or "[]"),
            hourly_rate=_money(row["hourly_rate"]),
            active=bool(row["active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _fetch_one(self, where: str, params: dict[str, Any]) -> ServiceProvider | None:
        row = (
            self.conn.execute(
                text(f"SELECT * FROM service_providers WHERE {where} AND deleted_at IS NULL"),
                params,
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_provider(row)

    def get_by_id(self, provider_id: int) -> ServiceProvider | None:
        return self._fetch_one("id = :id", {"id": provider_id})

    def get_by_uuid(self, uuid: str) -> ServiceProvider | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def list_all(self, active_only: bool = False) -> list[ServiceProvider]:
        sql = "SELECT * FROM service_providers WHERE deleted_at IS NULL"
        if active_only:
            sql += " AND active = 1"
        rows = self.conn.execute(text(sql + " ORDER BY first_name, last_name")).mappings().fetchall()
        return [self._row_to_provider(row) for row in rows]

    def update(self, provider: ServiceProvider) -> ServiceProvider:
        if provider.id is None:
            raise ValueError("Cannot update provider without an id")
        self.conn.execute(
            text(
                "UPDATE service_providers SET first_name = :first_name, last_name = :last_name, "
                "email = :email, phone = :phone, services = :services, hourly_rate = :hourly_rate, "
                "active = :active, updated_at = :updated_at WHERE id = :id"
            ),
            {**self._params(provider), "updated_at": _now(), "id": provider.id},
        )
        self.conn.commit()
        result = self.get_by_id(provider.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve provider after update (id={provider.id})")
        return result

    def delete(self, provider_id: int) -> None:
        self.conn.execute(
            text("UPDATE service_providers SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": provider_id},
        )
        self.conn.commit()


class SQLAlchemyBillRepository(BillRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def create(self, bill: Bill) -> Bill:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO bills (uuid, bill_number, sequence, client_id, provider_id, service, "
                "hours_worked, service_rate, total_client, total_provider, status, due_date, paid_date, "
                "created_at, updated_at) "
                "VALUES (:uuid, :bill_number, :sequence, :client_id, :provider_id, :service, "
                ":hours_worked, :service_rate, :total_client, :total_provider, :status, :due_date, :paid_date, "
                ":created_at, :updated_at)"
            ),
            {
                "uuid": str(ULID()),
                "bill_number": bill.bill_number,
                "sequence": bill.sequence,
                "client_id": bill.client_id,
                "provider_id": bill.provider_id,
                "service": bill.service,
                "hours_worked": _money_param(bill.hours_worked),
                "service_rate": _money_param(bill.service_rate),
                "total_client": _money_param(bill.total_client),
                "total_provider": _money_param(bill.total_provider),
                "status": bill.status.value,
                "due_date": bill.due_date,
                "paid_date": bill.paid_date,
                "created_at": bill.created_at or now,
                "updated_at": now,
            },
        )
        bill_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(bill_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve bill after create (id={bill_id})")
        return created

    @staticmethod
    def _row_to_bill(row: RowMapping) -> Bill:
        return Bill(
            id=row["id"],
            uuid=row["uuid"],
            bill_number=row["bill_number"],
            sequence=row["sequence"],
            client_id=row["client_id"],
            provider_id=row["provider_id"],
            service=row["service"],
            hours_worked=_money(row["hours_worked"]),
            service_rate=_money(row["service_rate"]),
            total_client=_money(row["total_client"]),
            total_provider=_money(row["total_provider"]),
            status=BillStatus(row["status"]),
            due_date=row["due_date"],
            paid_date=row["paid_date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _fetch_one(self, where: str, params: dict[str, Any]) -> Bill | None:
        row = (
            self.conn.execute(text(f"SELECT * FROM bills WHERE {where} AND deleted_at IS NULL"), params)
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_bill(row)

    def get_by_id(self, bill_id: int) -> Bill | None:
        return self._fetch_one("id = :id", {"id": bill_id})

    def get_by_uuid(self, uuid: str) -> Bill | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def get_by_number(self, bill_number: str) -> Bill | None:
        return self._fetch_one("bill_number = :bill_number", {"bill_number": bill_number})

    @staticmethod
    def _where(filters: BillFilter | None) -> tuple[str, dict[str, Any]]:
        clauses = ["b.deleted_at IS NULL"]
        params: dict[str, Any] = {}
        if filters is None:
            return " AND ".join(clauses), params
        if filters.status is not None:
            clauses.append("b.status = :status")
            params["status"] = filters.status.value
        if filters.client_id is not None:
            clauses.append("b.client_id = :client_id")
            params["client_id"] = filters.client_id
        if filters.provider_id is not None:
            clauses.append("b.provider_id = :provider_id")
            params["provider_id"] = filters.provider_id
        if filters.start_date is not None:
            clauses.append("b.created_at >= :start_date")
            params["start_date"] = filters.start_date
        if filters.end_date is not None:
            clauses.append("b.created_at <= :end_date")
            params["end_date"] = filters.end_date
        if filters.search:
            clauses.append(
                "(b.bill_number LIKE :search OR b.service LIKE :search OR b.client_id IN "
                "(SELECT id FROM clients WHERE company_name LIKE :search))"
            )
            params["search"] = f"%{filters.search}%"
        return " AND ".join(clauses), params

    def list_filtered(self, filters: BillFilter | None = None) -> list[Bill]:
        where, params = self._where(filters)
        sql = f"SELECT b.* FROM bills b WHERE {where} ORDER BY b.created_at DESC, b.id DESC"
        if filters is not None and filters.limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params.update({"limit": filters.limit, "offset": filters.offset})
        rows = self.conn.execute(text(sql), params).mappings().fetchall()
        return [self._row_to_bill(row) for row in rows]

    def count(self, filters: BillFilter | None = None) -> int:
        where, params = self._where(filters)
        return self.conn.execute(text(f"SELECT COUNT(*) FROM bills b WHERE {where}"), params).scalar_one()

    def next_sequence(self) -> int:
        # Soft-deleted rows still hold their numbers, so they count here.
        current = self.conn.execute(text("SELECT MAX(sequence) FROM bills")).scalar()
        return 0 if current is None else current + 1

    def update(self, bill: Bill) -> Bill:
        if bill.id is None:
            raise ValueError("Cannot update bill without an id")
        self.conn.execute(
            text(
                "UPDATE bills SET service = :service, status = :status, due_date = :due_date, "
                "paid_date = :paid_date, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "service": bill.service,
                "status": bill.status.value,
                "due_date": bill.due_date,
                "paid_date": bill.paid_date,
                "updated_at": _now(),
                "id": bill.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(bill.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve bill after update (id={bill.id})")
        return result

    def update_status(self, bill_id: int, status: BillStatus, paid_date: date | None) -> bool:
        result = self.conn.execute(
            text(
                "UPDATE bills SET status = :status, paid_date = :paid_date, updated_at = :updated_at "
                "WHERE id = :id AND deleted_at IS NULL"
            ),
            {"status": status.value, "paid_date": paid_date, "updated_at": _now(), "id": bill_id},
        )
        self.conn.commit()
        return result.rowcount > 0

    def delete(self, bill_id: int) -> None:
        self.conn.execute(
            text("UPDATE bills SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": bill_id},
        )
        self.conn.commit()
