from __future__ import annotations

from decimal import Decimal

import questionary
from rich.console import Console
from rich.table import Table

from staffing.cli.prompts import ask_decimal
from staffing.models import format_usd
from staffing.services.provider_service import ProviderService

console = Console()


def create_provider_menu(provider_service: ProviderService) -> None:
    console.print()
    console.print("[bold]New Service Provider[/bold]", style="cyan")

    first_name = questionary.text("First name:").ask()
    last_name = questionary.text("Last name:").ask()
    if not first_name or not last_name:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    email = questionary.text("Email (optional):").ask() or ""
    phone = questionary.text("Phone (optional):").ask() or ""
    services_raw = questionary.text("Services, comma separated (e.g. Cleaning, Painting):").ask() or ""
    services = [s.strip() for s in services_raw.split(",") if s.strip()]

    hourly_rate = ask_decimal("Hourly rate (e.g. 35.00):", minimum=Decimal("0"), strict_minimum=True)
    if hourly_rate is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    try:
        provider = provider_service.create_provider(
            first_name, last_name, hourly_rate, services=services, email=email, phone=phone
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return

    console.print()
    console.print(f"[green bold]Provider '{provider.full_name}' created.[/green bold]")


def list_providers_menu(provider_service: ProviderService) -> None:
    providers = provider_service.list_providers()

    if not providers:
        console.print("[yellow]No service providers yet.[/yellow]")
        return

    table = Table(title="Service Providers")
    table.add_column("#", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Services")
    table.add_column("Rate", justify="right")
    table.add_column("Active", justify="center")

    for p in providers:
        table.add_row(
            str(p.id),
            p.full_name,
            ", ".join(p.services),
            format_usd(p.hourly_rate) + "/h",
            "yes" if p.active else "no",
        )

    console.print()
    console.print(table)
    console.print()

    provider_choices = {f"{p.id} - {p.full_name}": p for p in providers}
    choice = questionary.select("Select a provider:", choices=list(provider_choices.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return

    provider = provider_choices[choice]
    action = questionary.select("Action:", choices=["Change Rate", "Toggle Active", "Delete", "Back"]).ask()
    if action == "Change Rate":
        rate = ask_decimal("New hourly rate:", minimum=Decimal("0"), strict_minimum=True)
        if rate is not None:
            provider.hourly_rate = rate
            provider_service.update_provider(provider)
            console.print("[green]Rate updated.[/green]")
    elif action == "Toggle Active":
        provider.active = not provider.active
        provider_service.update_provider(provider)
        console.print(f"[green]Provider is now {'active' if provider.active else 'inactive'}.[/green]")
    elif action == "Delete":
        if questionary.confirm(f"Delete provider '{provider.full_name}'?", default=False).ask():
            if provider.id is None:  # pragma: no cover
                raise ValueError("Cannot delete provider without an id")
            provider_service.delete_provider(provider.id)
            console.print("[green]Provider deleted.[/green]")
