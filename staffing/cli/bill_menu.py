from __future__ import annotations

from decimal import Decimal

import questionary
from rich.console import Console
from rich.table import Table

from staffing.cli.prompts import ask_date, ask_decimal
from staffing.constants import STATUS_LABELS, STATUS_STYLES, format_markup
from staffing.models import format_usd
from staffing.models.bill import Bill, BillFilter, BillStatus
from staffing.models.client import CompanyKind
from staffing.rates import InvalidInputError, calculate_for_client
from staffing.services.bill_service import BillService
from staffing.services.client_service import ClientService
from staffing.services.provider_service import ProviderService

console = Console()

ALL_STATUSES = "All"
OTHER_SERVICE = "Other..."


def _status_text(status: BillStatus) -> str:
    return f"[{STATUS_STYLES[status]}]{STATUS_LABELS[status]}[/{STATUS_STYLES[status]}]"


def create_bill_menu(
    bill_service: BillService,
    client_service: ClientService,
    provider_service: ProviderService,
) -> None:
    console.print()
    console.print("[bold]New Bill[/bold]", style="cyan")

    clients = client_service.list_clients(active_only=True, kind=CompanyKind.CLIENT)
    providers = provider_service.list_providers(active_only=True)
    if not clients or not providers:
        console.print("[yellow]Add at least one active client and one active provider first.[/yellow]")
        return

    client_choices = {f"{c.id} - {c.company_name}": c for c in clients}
    client_key = questionary.select("Client:", choices=list(client_choices.keys())).ask()
    if client_key is None:
        return
    client = client_choices[client_key]

    provider_choices = {f"{p.id} - {p.full_name}": p for p in providers}
    provider_key = questionary.select("Provider:", choices=list(provider_choices.keys())).ask()
    if provider_key is None:
        return
    provider = provider_choices[provider_key]

    service = None
    if provider.services:
        service = questionary.select("Service:", choices=provider.services + [OTHER_SERVICE]).ask()
    if not service or service == OTHER_SERVICE:
        service = questionary.text("Service description:").ask()
    if not service:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    hours = ask_decimal("Hours worked (e.g. 8 or 6.5):", minimum=Decimal("0"), strict_minimum=True)
    if hours is None:
        return
    rate = ask_decimal(
        f"Service rate (blank for {format_usd(provider.hourly_rate)}):",
        minimum=Decimal("0"),
        strict_minimum=True,
        optional=True,
    )
    rate = rate or provider.hourly_rate
    due_date = ask_date("Due date (YYYY-MM-DD, optional):")

    try:
        totals = calculate_for_client(client, hours, rate)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        return

    console.print()
    console.print(f"  Base: {format_usd(totals.base)}")
    console.print(f"  Client markup: {format_markup(client.markup_type, client.markup_value)}")
    console.print(f"  [bold]Client total: {format_usd(totals.total_client)}[/bold]")
    console.print(f"  [bold]Provider total: {format_usd(totals.total_provider)}[/bold]")
    if not questionary.confirm("Create this bill?", default=True).ask():
        console.print("[yellow]Cancelled.[/yellow]")
        return

    if client.id is None or provider.id is None:  # pragma: no cover
        raise ValueError("Client and provider must have ids")
    try:
        bill = bill_service.create_bill(client.id, provider.id, service, hours, rate, due_date=due_date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return

    console.print()
    console.print(f"[green bold]Bill {bill.bill_number} created.[/green bold]")


def _show_bill_detail(bill: Bill, client_name: str, provider_name: str) -> None:
    detail = Table(show_header=False)
    detail.add_column("Field", style="dim")
    detail.add_column("Value")
    detail.add_row("Number", bill.bill_number)
    detail.add_row("Client", client_name)
    detail.add_row("Provider", provider_name)
    detail.add_row("Service", bill.service)
    detail.add_row("Hours x Rate", f"{bill.hours_worked} x {format_usd(bill.service_rate)}")
    detail.add_row("Client total", format_usd(bill.total_client))
    detail.add_row("Provider total", format_usd(bill.total_provider))
    detail.add_row("Margin", f"{format_usd(bill.margin)} ({bill.profit_margin}%)")
    detail.add_row("Status", _status_text(bill.status))
    detail.add_row("Due", str(bill.due_date or "-"))
    if bill.paid_date:
        detail.add_row("Paid", str(bill.paid_date))
    console.print(detail)


def _bill_detail_menu(bill: Bill, bill_service: BillService, client_name: str, provider_name: str) -> None:
    while True:
        _show_bill_detail(bill, client_name, provider_name)
        status_actions = {f"Mark {STATUS_LABELS[s]}": s for s in BillStatus if s != bill.status}
        action = questionary.select(
            "Action:",
            choices=list(status_actions.keys()) + ["Edit Service", "Change Due Date", "Delete", "Back"],
        ).ask()

        if action is None or action == "Back":
            return
        elif action in status_actions:
            status = status_actions[action]
            paid_date = ask_date("Paid on (YYYY-MM-DD, blank for today):") if status == BillStatus.PAID else None
            try:
                bill = bill_service.set_status(bill, status, paid_date)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                return
        elif action == "Edit Service":
            service = questionary.text("Service description:", default=bill.service).ask()
            if service:
                bill = bill_service.update_bill(bill, service=service)
        elif action == "Change Due Date":
            due_date = ask_date("Due date (YYYY-MM-DD):")
            if due_date:
                bill = bill_service.update_bill(bill, due_date=due_date)
        elif action == "Delete":
            if not questionary.confirm(f"Delete bill {bill.bill_number}?", default=False).ask():
                continue
            try:
                bill_service.delete_bill(bill)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                continue
            console.print("[green]Bill deleted.[/green]")
            return


def list_bills_menu(
    bill_service: BillService,
    client_service: ClientService,
    provider_service: ProviderService,
) -> None:
    status_choice = questionary.select(
        "Status:", choices=[ALL_STATUSES] + [s.value for s in BillStatus]
    ).ask()
    if status_choice is None:
        return
    search = questionary.text("Search (number, service or client; optional):").ask() or ""
    filters = BillFilter(
        status=None if status_choice == ALL_STATUSES else BillStatus(status_choice),
        search=search.strip(),
    )
    bills = bill_service.list_bills(filters)

    if not bills:
        console.print("[yellow]No bills found.[/yellow]")
        return

    client_names = {c.id: c.company_name for c in client_service.list_clients()}
    provider_names = {p.id: p.full_name for p in provider_service.list_providers()}

    table = Table(title="Bills")
    table.add_column("Number", style="bold")
    table.add_column("Client")
    table.add_column("Provider")
    table.add_column("Service")
    table.add_column("Client total", justify="right")
    table.add_column("Provider total", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("Due")

    for b in bills:
        table.add_row(
            b.bill_number,
            client_names.get(b.client_id, "?"),
            provider_names.get(b.provider_id, "?"),
            b.service,
            format_usd(b.total_client),
            format_usd(b.total_provider),
            _status_text(b.status),
            str(b.due_date or "-"),
        )

    console.print()
    console.print(table)
    console.print()

    bill_choices = {f"{b.bill_number} - {b.service}": b for b in bills}
    choice = questionary.select("Select a bill:", choices=list(bill_choices.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return

    bill = bill_choices[choice]
    _bill_detail_menu(
        bill,
        bill_service,
        client_names.get(bill.client_id, "?"),
        provider_names.get(bill.provider_id, "?"),
    )
