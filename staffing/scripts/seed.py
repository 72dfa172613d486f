"""Seed the database with demo clients, providers and bills for local development.

Usage:
    python -m staffing.scripts.seed
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from decimal import Decimal

from faker import Faker
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from staffing.aggregation import aggregate_bills
from staffing.constants import STATUS_LABELS, TZ
from staffing.db import get_connection, initialize_db
from staffing.models import format_usd
from staffing.models.bill import BillRequest, BillStatus
from staffing.models.client import Client, EntityType, MarkupType
from staffing.models.provider import ServiceProvider
from staffing.repositories.factory import (
    get_bill_repository,
    get_client_repository,
    get_provider_repository,
)
from staffing.services.bill_service import BillService
from staffing.services.client_service import ClientService
from staffing.services.provider_service import ProviderService

console = Console()
fake = Faker("en_US")

TABLES_TO_CLEAR = ["bills", "service_providers", "clients"]

# (markup_type, markup_value, commission)
CLIENT_PRICING = [
    (MarkupType.PERCENT, Decimal("15.5"), Decimal("8")),
    (MarkupType.DOLLAR, Decimal("50"), Decimal("10")),
    (MarkupType.PERCENT, Decimal("20"), None),
    (None, None, Decimal("5")),
    (MarkupType.PERCENT, Decimal("12"), Decimal("7.5")),
]

SUPPLIER_COUNT = 2

# (services, hourly_rate)
PROVIDER_PROFILES = [
    (["Residential Plumbing", "Hydraulic Maintenance"], Decimal("35")),
    (["Commercial Cleaning", "Exterior Painting"], Decimal("25")),
    (["Gardening and Landscaping", "Custom Carpentry"], Decimal("28")),
    (["Industrial Electrical"], Decimal("45")),
]

# (client index, provider index, service, hours, rate, status, due, paid, created)
BILL_TEMPLATES = [
    (0, 0, "Residential Plumbing", "8.0", "35.0", BillStatus.PAID, 14, 9, 0),
    (1, 1, "Commercial Cleaning", "12.0", "25.0", BillStatus.PENDING, 15, None, 4),
    (2, 2, "Gardening and Landscaping", "6.5", "28.0", BillStatus.PAID, 15, 13, 2),
    (0, 3, "Industrial Electrical", "10.0", "45.0", BillStatus.OVERDUE, 15, None, -6),
    (3, 1, "Exterior Painting", "16.0", "22.0", BillStatus.PAID, 14, 13, -3),
    (1, 2, "Custom Carpentry", "20.0", "38.0", BillStatus.PENDING, 17, None, 7),
    (4, 0, "Hydraulic Maintenance", "4.5", "35.0", BillStatus.PAID, 12, 11, 1),
]


def _clear_all(conn) -> None:
    console.print("\n[yellow]Clearing tables...[/yellow]")
    for table in TABLES_TO_CLEAR:
        conn.execute(text(f"DELETE FROM {table}"))  # noqa: S608
        console.print(f"  Cleared [dim]{table}[/dim]")
    conn.commit()
    console.print("[green]All tables cleared.[/green]\n")


def _create_clients(client_service: ClientService) -> list[Client]:
    console.print("[cyan]Creating clients...[/cyan]")
    clients = []
    for markup_type, markup_value, commission in CLIENT_PRICING:
        client = client_service.create_client(
            fake.company(),
            entity=random.choice(list(EntityType)),
            markup_type=markup_type,
            markup_value=markup_value,
            commission=commission,
            city=fake.city(),
            state=fake.state_abbr(),
        )
        console.print(f"  [bold]{client.company_name}[/bold] (id={client.id})")
        clients.append(client)
    console.print(f"[green]{len(clients)} clients created.[/green]\n")
    return clients


def _create_suppliers(client_service: ClientService) -> list[Client]:
    console.print("[cyan]Creating suppliers...[/cyan]")
    suppliers = []
    for _ in range(SUPPLIER_COUNT):
        supplier = client_service.create_supplier(
            fake.company(),
            entity=random.choice(list(EntityType)),
            city=fake.city(),
            state=fake.state_abbr(),
        )
        console.print(f"  [bold]{supplier.company_name}[/bold] (id={supplier.id})")
        suppliers.append(supplier)
    console.print(f"[green]{len(suppliers)} suppliers created.[/green]\n")
    return suppliers


def _create_providers(provider_service: ProviderService) -> list[ServiceProvider]:
    console.print("[cyan]Creating service providers...[/cyan]")
    providers = []
    for services, rate in PROVIDER_PROFILES:
        provider = provider_service.create_provider(
            fake.first_name(),
            fake.last_name(),
            rate,
            services=services,
            email=fake.email(),
            phone=fake.phone_number(),
        )
        console.print(f"  [bold]{provider.full_name}[/bold] ({', '.join(services)})")
        providers.append(provider)
    console.print(f"[green]{len(providers)} providers created.[/green]\n")
    return providers


def _create_bills(bill_service: BillService, clients: list[Client], providers: list[ServiceProvider]) -> list:
    console.print("[cyan]Creating bills...[/cyan]")
    anchor = datetime.now(TZ).replace(day=1, hour=9, minute=0, second=0, microsecond=0)

    requests = []
    for c_idx, p_idx, service, hours, rate, status, due, paid, created in BILL_TEMPLATES:
        client = clients[c_idx % len(clients)]
        provider = providers[p_idx % len(providers)]
        assert client.id is not None and provider.id is not None
        created_at = anchor + timedelta(days=created)
        requests.append(
            BillRequest(
                client_id=client.id,
                provider_id=provider.id,
                service=service,
                hours_worked=Decimal(hours),
                service_rate=Decimal(rate),
                status=status,
                due_date=created_at.date() + timedelta(days=due),
                paid_date=(created_at.date() + timedelta(days=paid)) if paid is not None else None,
                created_at=created_at,
            )
        )
    bills = bill_service.create_bills(requests)

    table = Table(title="Bills created")
    table.add_column("Number", style="bold")
    table.add_column("Service")
    table.add_column("Client total", justify="right")
    table.add_column("Provider total", justify="right")
    table.add_column("Status")
    for bill in bills:
        table.add_row(
            bill.bill_number,
            bill.service,
            format_usd(bill.total_client),
            format_usd(bill.total_provider),
            STATUS_LABELS[bill.status],
        )
    console.print(table)
    return bills


def _print_summary(bills: list) -> None:
    report = aggregate_bills(bills)
    console.print("\n[bold]Bills summary[/bold]")
    for status, entry in report.by_status.items():
        console.print(f"  {STATUS_LABELS[status]}: {entry.count} bills - total {format_usd(entry.total_client)}")
    console.print(f"\n  Total revenue:    {format_usd(report.total_revenue)}")
    console.print(f"  Realized revenue: {format_usd(report.realized_revenue)}")


def main() -> None:
    console.print("[bold magenta]Staffing - Database Seeder[/bold magenta]")
    console.print("=" * 40)

    initialize_db()
    conn = get_connection()
    _clear_all(conn)

    client_repo = get_client_repository()
    provider_repo = get_provider_repository()
    bill_repo = get_bill_repository()

    client_service = ClientService(client_repo)
    provider_service = ProviderService(provider_repo)
    bill_service = BillService(bill_repo, client_repo, provider_repo)

    clients = _create_clients(client_service)
    suppliers = _create_suppliers(client_service)
    providers = _create_providers(provider_service)
    bills = _create_bills(bill_service, clients, providers)
    _print_summary(bills)

    console.print("\n[bold green]Seeding complete![/bold green]")
    console.print(f"  Clients:   {len(clients)}")
    console.print(f"  Suppliers: {len(suppliers)}")
    console.print(f"  Providers: {len(providers)}")
    console.print(f"  Bills:     {len(bills)} (as of {date.today().isoformat()})")


if __name__ == "__main__":  # pragma: no cover
    main()
