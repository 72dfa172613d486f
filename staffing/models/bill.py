from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from staffing.models import quantize_money


class BillStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


class Bill(BaseModel):
    id: int | None = None
    uuid: str = ""
    bill_number: str = ""
    sequence: int | None = None
    client_id: int
    provider_id: int
    service: str
    hours_worked: Decimal
    service_rate: Decimal
    total_client: Decimal = Decimal("0")
    total_provider: Decimal = Decimal("0")
    status: BillStatus = BillStatus.PENDING
    due_date: date | None = None
    paid_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def base_total(self) -> Decimal:
        return self.hours_worked * self.service_rate

    @property
    def margin(self) -> Decimal:
        """What the agency keeps: client charge minus provider payout."""
        return self.total_client - self.total_provider

    @property
    def profit_margin(self) -> Decimal:
        if not self.total_client:
            return Decimal("0")
        return quantize_money(self.margin / self.total_client * 100)


class BillRequest(BaseModel):
    """Raw intake fields for one bill, before totals are computed."""

    client_id: int
    provider_id: int
    service: str
    hours_worked: Decimal
    service_rate: Decimal
    due_date: date | None = None
    status: BillStatus = BillStatus.PENDING
    paid_date: date | None = None
    created_at: datetime | None = None


class BillFilter(BaseModel):
    status: BillStatus | None = None
    client_id: int | None = None
    provider_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    search: str = ""
    limit: int | None = None
    offset: int = 0
