from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from staffing.models.bill import BillStatus


class StatusSummary(BaseModel):
    status: BillStatus
    count: int = 0
    total_client: Decimal = Decimal("0")


class ClientRevenue(BaseModel):
    client_id: int
    revenue: Decimal = Decimal("0")
    bill_count: int = 0


class ProviderEarnings(BaseModel):
    provider_id: int
    earnings: Decimal = Decimal("0")
    bill_count: int = 0


class BillReport(BaseModel):
    by_status: dict[BillStatus, StatusSummary]
    top_clients: list[ClientRevenue] = []
    top_providers: list[ProviderEarnings] = []
    bill_count: int = 0
    total_revenue: Decimal = Decimal("0")
    realized_revenue: Decimal = Decimal("0")
    provider_payments: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    profit_margin: Decimal = Decimal("0")
    average_bill_value: Decimal = Decimal("0")
