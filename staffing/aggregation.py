"""Read-only summaries over a collection of bills."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from staffing.models import quantize_money
from staffing.models.bill import Bill, BillStatus
from staffing.models.report import BillReport, ClientRevenue, ProviderEarnings, StatusSummary

ZERO = Decimal("0")


def summarize_by_status(bills: Iterable[Bill]) -> dict[BillStatus, StatusSummary]:
    summary = {status: StatusSummary(status=status) for status in BillStatus}
    for bill in bills:
        entry = summary[bill.status]
        entry.count += 1
        entry.total_client += bill.total_client
    return summary


def top_clients(bills: Iterable[Bill], limit: int = 5) -> list[ClientRevenue]:
    """Clients ranked by realized (paid) revenue, highest first."""
    by_client: dict[int, ClientRevenue] = {}
    for bill in bills:
        if bill.status != BillStatus.PAID:
            continue
        entry = by_client.setdefault(bill.client_id, ClientRevenue(client_id=bill.client_id))
        entry.revenue += bill.total_client
        entry.bill_count += 1
    ranked = sorted(by_client.values(), key=lambda c: (-c.revenue, c.client_id))
    return ranked[:limit]


def top_providers(bills: Iterable[Bill], limit: int = 5) -> list[ProviderEarnings]:
    """Providers ranked by number of bills, any status."""
    by_provider: dict[int, ProviderEarnings] = {}
    for bill in bills:
        entry = by_provider.setdefault(bill.provider_id, ProviderEarnings(provider_id=bill.provider_id))
        entry.earnings += bill.total_provider
        entry.bill_count += 1
    ranked = sorted(by_provider.values(), key=lambda p: (-p.bill_count, -p.earnings, p.provider_id))
    return ranked[:limit]


def aggregate_bills(bills: Iterable[Bill], top_n: int = 5, top_providers_n: int | None = None) -> BillReport:
    bills = list(bills)
    by_status = summarize_by_status(bills)

    total_revenue = sum((s.total_client for s in by_status.values()), ZERO)
    realized_revenue = by_status[BillStatus.PAID].total_client
    provider_payments = sum((b.total_provider for b in bills if b.status == BillStatus.PAID), ZERO)
    profit = realized_revenue - provider_payments

    profit_margin = quantize_money(profit / realized_revenue * 100) if realized_revenue > 0 else ZERO
    average = quantize_money(realized_revenue / len(bills)) if bills else ZERO

    return BillReport(
        by_status=by_status,
        top_clients=top_clients(bills, top_n),
        top_providers=top_providers(bills, top_n if top_providers_n is None else top_providers_n),
        bill_count=len(bills),
        total_revenue=total_revenue,
        realized_revenue=realized_revenue,
        provider_payments=provider_payments,
        profit=profit,
        profit_margin=profit_margin,
        average_bill_value=average,
    )
