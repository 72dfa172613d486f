from __future__ import annotations

from decimal import Decimal

import questionary
from rich.console import Console
from rich.table import Table

from staffing.cli.prompts import ask_decimal
from staffing.constants import ENTITY_CHOICES, format_markup
from staffing.models.client import Client, CompanyKind, MarkupType
from staffing.services.client_service import ClientService

console = Console()

NO_MARKUP = "None"

KIND_TITLES = {CompanyKind.CLIENT: "Client", CompanyKind.SUPPLIER: "Supplier"}


def _ask_pricing() -> tuple[MarkupType | None, Decimal | None, Decimal | None]:
    """Prompt for markup type/value and commission."""
    choice = questionary.select(
        "Markup type:", choices=[NO_MARKUP, MarkupType.PERCENT.value, MarkupType.DOLLAR.value]
    ).ask()
    markup_type = None if choice in (None, NO_MARKUP) else MarkupType(choice)

    markup_value = None
    if markup_type == MarkupType.PERCENT:
        markup_value = ask_decimal("  Markup percent (e.g. 15.5):", minimum=Decimal("0"))
    elif markup_type == MarkupType.DOLLAR:
        markup_value = ask_decimal("  Flat markup in dollars (e.g. 50.00):", minimum=Decimal("0"))

    commission = ask_decimal(
        "Commission percent (0-100, blank for none):",
        minimum=Decimal("0"),
        maximum=Decimal("100"),
        optional=True,
    )
    return markup_type, markup_value, commission


def create_client_menu(client_service: ClientService, kind: CompanyKind = CompanyKind.CLIENT) -> None:
    title = KIND_TITLES[kind]
    console.print()
    console.print(f"[bold]New {title}[/bold]", style="cyan")

    name = questionary.text("Company name:").ask()
    if not name:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    entity = questionary.select("Entity:", choices=ENTITY_CHOICES).ask() or ENTITY_CHOICES[0]
    city = questionary.text("City (optional):").ask() or ""
    state = questionary.text("State (optional):").ask() or ""
    # Suppliers are never billed.
    markup_type, markup_value, commission = _ask_pricing() if kind == CompanyKind.CLIENT else (None, None, None)

    try:
        client = client_service.create_client(
            name,
            entity=entity,
            markup_type=markup_type,
            markup_value=markup_value,
            commission=commission,
            city=city,
            state=state,
            kind=kind,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return

    console.print()
    console.print(f"[green bold]{title} '{client.company_name}' created.[/green bold]")


def _show_client_detail(client: Client) -> None:
    console.print()
    console.print(f"[bold]{client.company_name}[/bold] ({KIND_TITLES[client.kind]}, {client.entity.value})")
    if client.city or client.state:
        console.print(f"  Location: {', '.join(p for p in (client.city, client.state) if p)}")
    console.print(f"  Markup: {format_markup(client.markup_type, client.markup_value)}")
    console.print(f"  Commission: {f'{client.commission}%' if client.commission is not None else '-'}")
    console.print(f"  Status: {'active' if client.active else 'inactive'}")
    if client.internal_notes:
        console.print(f"  Notes: {client.internal_notes}")


def _client_detail_menu(client: Client, client_service: ClientService) -> None:
    while True:
        _show_client_detail(client)
        toggle = "Deactivate" if client.active else "Activate"
        pricing = ["Edit Pricing"] if client.kind == CompanyKind.CLIENT else []
        action = questionary.select(
            "Action:",
            choices=pricing + [toggle, "Delete", "Back"],
        ).ask()

        if action is None or action == "Back":
            return
        elif action == "Edit Pricing":
            console.print("[dim]Existing bills keep their original totals.[/dim]")
            client.markup_type, client.markup_value, client.commission = _ask_pricing()
            try:
                client = client_service.update_client(client)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                continue
            console.print("[green]Pricing updated.[/green]")
        elif action == toggle:
            client = client_service.set_active(client, not client.active)
        elif action == "Delete":
            label = KIND_TITLES[client.kind].lower()
            confirm = questionary.confirm(f"Delete {label} '{client.company_name}'?", default=False).ask()
            if confirm:
                if client.id is None:  # pragma: no cover
                    raise ValueError("Cannot delete client without an id")
                client_service.delete_client(client.id)
                console.print(f"[green]{label.capitalize()} deleted.[/green]")
                return


def list_clients_menu(client_service: ClientService, kind: CompanyKind = CompanyKind.CLIENT) -> None:
    title = KIND_TITLES[kind]
    clients = client_service.list_clients(kind=kind)

    if not clients:
        console.print(f"[yellow]No {title.lower()}s yet.[/yellow]")
        return

    table = Table(title=f"{title}s")
    table.add_column("#", style="dim")
    table.add_column("Company", style="bold")
    table.add_column("Entity")
    table.add_column("Markup", justify="right")
    table.add_column("Commission", justify="right")
    table.add_column("Active", justify="center")

    for c in clients:
        table.add_row(
            str(c.id),
            c.company_name,
            c.entity.value,
            format_markup(c.markup_type, c.markup_value),
            f"{c.commission}%" if c.commission is not None else "-",
            "yes" if c.active else "no",
        )

    console.print()
    console.print(table)
    console.print()

    client_choices = {f"{c.id} - {c.company_name}": c for c in clients}
    choice = questionary.select(f"Select a {title.lower()}:", choices=list(client_choices.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return

    _client_detail_menu(client_choices[choice], client_service)
